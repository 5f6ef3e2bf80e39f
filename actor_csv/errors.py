from __future__ import annotations

from typing import Optional


class ConversionError(Exception):
    """Base class for every fatal conversion failure."""


class UsageError(ConversionError):
    pass


class FileAccessError(ConversionError):
    """An input or output file could not be opened, read or written."""

    def __init__(self, path: str, cause: OSError, action: str = "open") -> None:
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Could not {action} file '{path}': {reason}")


class ParseError(ConversionError):
    """Input is not valid JSON, or its top-level value is not an array."""

    def __init__(self, source: str, reason: str, cause: Optional[Exception] = None) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"Could not parse '{source}': {reason}")
