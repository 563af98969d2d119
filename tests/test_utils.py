"""Tests for config loading and logging setup."""

import json
import logging
import logging.handlers

import pytest

from utils import config_section, load_config, setup_logging


def test_load_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"simulation_parameters": {"gravity": 9.8}}))
    assert load_config(str(path)) == {"simulation_parameters": {"gravity": 9.8}}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


def test_load_config_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_config_section_fills_defaults():
    config = {"run_control": {"max_steps": 10}}
    section = config_section(config, "run_control", {"max_steps": 0, "profile": False})
    assert section == {"max_steps": 10, "profile": False}


def test_config_section_ignores_unknown_keys(caplog):
    config = {"run_control": {"max_step": 10}}
    with caplog.at_level(logging.WARNING):
        section = config_section(config, "run_control", {"max_steps": 0})
    assert section == {"max_steps": 0}
    assert "max_step" in caplog.text


def test_config_section_missing_section():
    assert config_section({}, "visualization", {"fps": 60}) == {"fps": 60}


def test_setup_logging_creates_rotating_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "sim.log"
    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert log_file.exists()


def test_setup_logging_without_file(restore_root_logger):
    setup_logging({"logging": {"log_file": None}})
    root = restore_root_logger
    assert len(root.handlers) == 1
    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)


def test_config_section_null_section_uses_defaults():
    section = config_section({"run_control": None}, "run_control", {"max_steps": 0})
    assert section == {"max_steps": 0}


def test_setup_logging_null_section(restore_root_logger, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    setup_logging({"logging": None})
    assert (tmp_path / "logs" / "simulation.log").exists()
