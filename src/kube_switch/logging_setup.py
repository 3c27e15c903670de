"""
Logging configuration

Configures the standard logging tree for the CLI. Output goes to stderr so
stdout stays reserved for command results and completion candidates.
"""

import logging
import logging.config

from .errors import SettingsError

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING", fmt: str = "text") -> None:
    """
    Configure root and package loggers

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        fmt: "text" for human readable lines, "json" for structured records
    """
    level = level.upper()
    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "text": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": fmt,
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {"kube_switch": {"level": level, "propagate": True}},
    }

    try:
        logging.config.dictConfig(log_config)
    except ValueError as e:
        raise SettingsError(f"Invalid logging configuration ({level}, {fmt}): {e}") from e
    logger.debug(f"Logging configured at {level} ({fmt})")
