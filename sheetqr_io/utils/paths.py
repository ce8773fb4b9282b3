"""Filesystem helpers for output folders and file names."""

# Module responsibilities:
# - Turn sheet names into directory names that are legal on every desktop OS.
# - Resolve per-sheet output folders without colliding on empty names.

from __future__ import annotations

import re
from pathlib import Path

_ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r"\s+")
_LEADING_DOTS = re.compile(r"^\.+")
_TRAILING_DOTS = re.compile(r"\.+$")


def sanitize_directory_name(name: str) -> str:
    """Replace characters that are illegal in Windows file/directory names.

    Illegal characters and whitespace runs become ``_``; a run of leading or
    trailing dots collapses to a single ``_``.
    """

    cleaned = _ILLEGAL_CHARS.sub("_", name)
    cleaned = _WHITESPACE.sub("_", cleaned)
    cleaned = _LEADING_DOTS.sub("_", cleaned)
    cleaned = _TRAILING_DOTS.sub("_", cleaned)
    return cleaned.strip()


def sheet_output_dir(base: Path, sheet_name: str | None, index: int) -> Path:
    """Return the output folder for the ``index``-th (0-based) sheet.

    Args:
        base: Directory chosen by the user.
        sheet_name: Sheet name, sanitized before use.
        index: Position of the sheet in the request, used for the fallback name.

    Returns:
        ``base / <sanitized name>`` or ``base / sheet-<index + 1>``.
    """

    dirname = sanitize_directory_name(sheet_name) if sheet_name else ""
    if not dirname:
        dirname = f"sheet-{index + 1}"
    return base / dirname
