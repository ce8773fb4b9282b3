"""Custom exceptions used across SheetQR."""


class SheetQRError(Exception):
    """Base error for the application."""

    kind = "application"

    @property
    def message(self) -> str:
        return str(self)


class ConfigError(SheetQRError):
    """Configuration related error."""

    kind = "config"


class CommandNotFoundError(SheetQRError):
    """Raised when an unknown command name is invoked."""

    kind = "unknown_command"


class CheatSheetError(SheetQRError):
    """Raised when cheat sheet pages cannot be rendered or written."""

    kind = "cheat_sheet"
