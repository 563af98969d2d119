# utils.py
"""
Utility functions for the simulation framework.

This module provides helper functions, such as logging setup and config
loading, that are used across different parts of the application but do
not belong to the physics or the rendering.
"""
import logging
import logging.handlers
import json
import os
from typing import Any, Dict, List, Optional

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary that may contain a "logging" key with "level",
#       "format", and "log_file" sub-keys. A log_file of null disables the
#       file handler.
#   - Side Effects: Configures the root Python logger. Creates the log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Raises: FileNotFoundError, json.JSONDecodeError, or ValueError when
#     the top-level JSON value is not an object. All are logged first.
#
# config_section(config, name, defaults) -> Dict[str, Any]:
#   - Outputs: `defaults` overlaid with config[name]. Never mutates either.

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/simulation.log'
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 5

def _build_handlers(log_file_path: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if not log_file_path:
        return handlers

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handlers.append(logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
    ))
    return handlers

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Points the root logger at the console and, unless disabled, a rotating file.

    Any handlers already on the root logger are dropped first, so calling
    this twice does not duplicate output.
    """
    log_config = config.get('logging') or {}
    log_level = str(log_config.get('level', 'INFO')).upper()
    log_file_path = log_config.get('log_file', DEFAULT_LOG_FILE)
    formatter = logging.Formatter(log_config.get('format', DEFAULT_LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    for handler in _build_handlers(log_file_path):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    destination = f"console and {log_file_path}" if log_file_path else "console"
    logging.info(f"Logging to {destination} at {log_level}.")

def load_config(path: str) -> Dict[str, Any]:
    """Reads the JSON settings file at `path`; the top level must be an object."""
    logging.info(f"Reading settings from {path}.")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"No settings file at {path}.")
        raise
    except json.JSONDecodeError as e:
        logging.error(f"Settings file {path} is not valid JSON: {e}")
        raise

    if not isinstance(config, dict):
        msg = f"Configuration in {path} must be a JSON object, got {type(config).__name__}."
        logging.error(msg)
        raise ValueError(msg)
    return config

def config_section(
    config: Dict[str, Any], name: str, defaults: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Returns one config section with any missing keys taken from `defaults`."""
    section = dict(defaults or {})
    # A section written as null in the JSON counts as empty.
    overrides = config.get(name) or {}
    unknown = set(overrides) - set(section) if defaults else set()
    if unknown:
        logging.warning(f"Ignoring unknown keys in '{name}': {sorted(unknown)}")
    section.update({k: v for k, v in overrides.items() if k not in unknown})
    return section
