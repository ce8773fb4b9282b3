"""Command registry invoked by the GUI shell.

Every endpoint is a plain function registered by name. ``invoke`` validates
the call arguments against the function signature, runs it and wraps the
outcome in a :class:`CommandResult` so the front end can branch on
``error.kind`` instead of parsing messages.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ValidationError, validate_call

from sheetqr.core.errors import CommandNotFoundError, SheetQRError
from sheetqr.core.logger import get_logger
from sheetqr_io.errors import SheetIOError

from . import excel_commands, file_commands, qrcode_commands

INVALID_ARGUMENTS = "invalid_arguments"

COMMANDS: Dict[str, Callable[..., Any]] = {
    "get_sheet_names": excel_commands.get_sheet_names,
    "get_sheet_data": excel_commands.get_sheet_data,
    "generate_qrcode": qrcode_commands.generate_qrcode,
    "save_image": file_commands.save_image,
    "export_cheat_sheets": file_commands.export_cheat_sheets,
}

_VALIDATED: Dict[str, Callable[..., Any]] = {
    name: validate_call(func) for name, func in COMMANDS.items()
}


class CommandFailure(BaseModel):
    kind: str
    message: str


class CommandResult(BaseModel):
    """Envelope returned for every invocation."""

    command: str
    ok: bool
    value: Any = None
    error: Optional[CommandFailure] = None

    @classmethod
    def success(cls, command: str, value: Any) -> "CommandResult":
        return cls(command=command, ok=True, value=value)

    @classmethod
    def failure(cls, command: str, kind: str, message: str) -> "CommandResult":
        return cls(command=command, ok=False, error=CommandFailure(kind=kind, message=message))


def resolve(name: str) -> Callable[..., Any]:
    try:
        return _VALIDATED[name]
    except KeyError:
        raise CommandNotFoundError(f"Unknown command: {name}") from None


def _kind_of(exc: SheetIOError | SheetQRError) -> str:
    kind = exc.kind
    return str(getattr(kind, "value", kind))


def invoke(name: str, **params: Any) -> CommandResult:
    """Run command ``name`` with keyword ``params``.

    Domain failures and argument validation errors become failed results;
    anything else propagates to the caller.
    """

    try:
        logger = get_logger()
    except SheetQRError as exc:
        return CommandResult.failure(name, _kind_of(exc), exc.message)
    logger.debug("Invoking command %s", name)
    try:
        value = resolve(name)(**params)
    except ValidationError as exc:
        logger.warning("Command %s rejected arguments: %s", name, exc)
        return CommandResult.failure(name, INVALID_ARGUMENTS, str(exc))
    except (SheetIOError, SheetQRError) as exc:
        logger.warning("Command %s failed: %s", name, exc.message)
        return CommandResult.failure(name, _kind_of(exc), exc.message)
    return CommandResult.success(name, value)


__all__ = [
    "COMMANDS",
    "CommandFailure",
    "CommandResult",
    "invoke",
    "resolve",
]
