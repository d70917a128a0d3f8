import logging.config
import os
import sys

from hex_roots.config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL, LOG_LEVEL_ENV_VAR


def resolve_log_level(level=None):
    level = level or os.environ.get(LOG_LEVEL_ENV_VAR) or LOG_LEVEL
    if isinstance(level, int):
        return logging.getLevelName(level)
    level = str(level).upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"Unknown log level: {level}")
    return level


def configure_logging(level=None):
    level = resolve_log_level(level)
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,

        "formatters": {
            "standard": {
                "format": LOG_FORMAT,
                "datefmt": LOG_DATE_FORMAT,
            },
        },

        "handlers": {
            "console": {
                "level": level,
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": sys.stderr,
            },
        },

        "loggers": {
            "hex_roots": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)
    return level
