"""Pytest configuration and shared fixtures."""

import logging
import os
import sys
from pathlib import Path

import pytest

# Headless Pygame for the visualizer tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from simulation import Domain  # noqa: E402


@pytest.fixture
def sim_params():
    """Physics settings matching the defaults shipped in config.json."""
    return {
        "gravity": 300.0,
        "damp_factor": 1.0,
        "delta_time": 1.0 / 60.0,
        "parallel": False,
        "reject_oversized_particles": False,
    }


@pytest.fixture
def domain():
    """The default 800x600 window."""
    return Domain(800, 600)


@pytest.fixture
def restore_root_logger():
    """Undo any handler or level changes made to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
