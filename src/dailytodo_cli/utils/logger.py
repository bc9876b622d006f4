"""Application-wide logger writing to platformdirs user_log_dir.

Modules log through ``logging.getLogger(__name__)``; since every module name
starts with ``dailytodo_cli`` their records reach the handlers installed here.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir
from rich.logging import RichHandler

_APP_NAME = "dailytodo_cli"
_LOG_FILE = "dailytodo.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def get_logger() -> logging.Logger:
    """Return the singleton application logger, initialising it on first call."""
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Other handlers (test capture, console) may already be attached
    if not any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    ):
        logger.addHandler(_build_file_handler())

    _logger = logger
    return _logger


def _build_file_handler() -> logging.Handler:
    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def enable_console_logging(level: str | int = logging.INFO) -> None:
    """Mirror application logs to the terminal (used by long-running commands)."""
    logger = get_logger()
    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return
    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)
