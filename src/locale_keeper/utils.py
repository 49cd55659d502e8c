"""Common utilities for locale keeper modules."""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_config_dir

# store configuration in a platform-specific user config directory
CONFIG_FILE = Path(user_config_dir("locale_keeper")) / "locale_keeper_config.json"

# central logger for the project
logger = logging.getLogger("locale_keeper")
logger.propagate = False


def configure_logging(
    level: str = "INFO", handler: logging.Handler | None = None
) -> logging.Logger:
    """Configure and return the package logger."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric)
    logger.handlers.clear()
    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)

    # forward warnings.warn() calls through the logging system
    logging.captureWarnings(True)
    wlog = logging.getLogger("py.warnings")
    wlog.setLevel(numeric)
    wlog.handlers.clear()
    wlog.addHandler(handler)
    wlog.propagate = False
    return logger


# configure default logging on import
configure_logging()


__all__ = ["CONFIG_FILE", "configure_logging", "logger"]
