"""
RESPONSIBILITIES
- Provide io-local loggers living under the core ``sheetqr`` logger namespace.
PROCESS OVERVIEW
1. Modules request get_logger(name) at import time.
2. A child logger named ``sheetqr.io.<name>`` is returned without touching handlers.
3. Entry points (CLI callback, command dispatcher) run the core rotating file + console setup,
   which the child loggers reach through propagation.
"""

from __future__ import annotations

import logging

ROOT_NAMESPACE = "sheetqr.io"


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger for I/O helpers."""

    return logging.getLogger(f"{ROOT_NAMESPACE}.{name}")
