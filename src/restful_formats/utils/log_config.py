"""Logging setup for applications embedding restful-formats.

The library itself only creates module loggers; this helper configures
the root logger once for a host application or a command-line run.
"""

import logging
import sys
from typing import Optional

from ..config.settings import settings
from ..exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOGGING_CONFIGURED = False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging with a single stdout handler.

    Uses a singleton pattern to prevent duplicate handlers; later calls
    are ignored until :func:`reset_logging` is called.

    :param level: Logging level name, the ``log_level`` setting when omitted
    :type level: Optional[str]
    :return: None
    :rtype: None
    :raises ConfigurationError: If the level name is not a logging level
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        logging.getLogger(__name__).debug(
            "Logging already configured, skipping duplicate setup"
        )
        return

    level_name = (level or settings.log_level).upper()
    level_value = logging.getLevelName(level_name)
    if not isinstance(level_value, int):
        raise ConfigurationError(
            f"Unknown logging level: {level_name}", setting="log_level"
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(
        level=level_value,
        handlers=[handler],
        force=True,  # Override any existing configuration
    )
    _LOGGING_CONFIGURED = True
    logging.getLogger(__name__).debug("Logging configured at %s", level_name)


def reset_logging() -> None:
    """Allow :func:`setup_logging` to configure logging again."""
    global _LOGGING_CONFIGURED
    _LOGGING_CONFIGURED = False
