"""Shared fixtures: scripted random sources and recording surfaces."""

import logging
import random
from pathlib import Path

import pytest

from src.canvas.surface import RecordingSurface
from src.utils import logging_config


class ScriptedRandom(random.Random):
    """random.Random whose random() cycles through fixed values."""

    def __init__(self, values):
        super().__init__(0)
        self._values = list(values)
        self._index = 0

    def random(self):
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


@pytest.fixture
def scripted_random():
    """Factory: scripted_random([0.5, 0.0, ...])."""
    return ScriptedRandom


@pytest.fixture
def recording_surface():
    return RecordingSurface()


@pytest.fixture
def project_root():
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def clean_logging_context():
    """Keep contextual log fields from leaking between tests."""
    logging_config.pop_context()
    yield
    logging_config.pop_context()


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging() side effects on the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging.captureWarnings(False)
    logging_config._configured = False
