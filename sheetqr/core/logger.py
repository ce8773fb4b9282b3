from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from .settings import load_settings


_LOGGER: logging.Logger | None = None


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the configured application logger writing to <work_dir>/logs/sheetqr.log.

    Creates the directory if needed. Uses rotating file handler; the level
    comes from settings.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    settings = load_settings()
    base = Path(log_dir) if log_dir is not None else settings.work_dir / "logs"
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / "sheetqr.log"

    logger = logging.getLogger("sheetqr")
    logger.setLevel(getattr(logging, settings.log_level))
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    # stdout carries command output (JSON, SVG), so logs go to stderr
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    logger.addHandler(console)

    _LOGGER = logger
    return logger


def reset_logger() -> None:
    """Drop the cached logger so the next call reconfigures from settings."""
    global _LOGGER
    if _LOGGER is not None:
        for handler in list(_LOGGER.handlers):
            _LOGGER.removeHandler(handler)
            handler.close()
    _LOGGER = None
