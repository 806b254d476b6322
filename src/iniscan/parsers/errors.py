from __future__ import annotations

from typing import Optional


class IniError(Exception):
    """Base class for everything the INI parser raises."""


class ArgumentError(IniError, ValueError):
    """A required argument was missing or empty (caller bug)."""


class SourceNotFoundError(IniError, FileNotFoundError):
    """
    The source path does not exist.

    Kept separate from ParserCreateError so callers can treat a missing
    config file as "use defaults" instead of a hard failure.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"INI source not found: {path}")
        self.path = path


class ParserCreateError(IniError, OSError):
    """Any other failure while opening the source (directory, permissions, ...)."""

    def __init__(self, path: str, detail: str = "") -> None:
        msg = f"Cannot open INI source: {path}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)
        self.path = path
        self.detail = detail


class AllocationError(IniError, MemoryError):
    """Copying or trimming a line ran out of memory."""


class IniSyntaxError(IniError):
    """A malformed line: unterminated header, empty header or missing `=`."""

    def __init__(self, path: str, line: int, reason: str, text: Optional[str] = None) -> None:
        super().__init__(f"parse error at {path}:{line}: {reason}")
        self.path = path
        self.line = line
        self.reason = reason
        self.text = text


class ParserClosedError(IniError, ValueError):
    """The parser was used after close()/dispose()."""
