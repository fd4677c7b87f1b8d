"""Unit tests for logging setup."""

import logging

import pytest

from restful_formats.exceptions import ConfigurationError
from restful_formats.utils import log_config


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    log_config.reset_logging()
    yield
    log_config.reset_logging()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_sets_level_once():
    log_config.setup_logging("DEBUG")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1

    log_config.setup_logging("ERROR")
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1


def test_setup_logging_defaults_to_settings_level():
    log_config.setup_logging()
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ConfigurationError) as exc_info:
        log_config.setup_logging("VERBOSE")
    assert exc_info.value.details == {"setting": "log_level"}

    log_config.setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING
