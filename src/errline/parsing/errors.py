"""
Parse failures for diagnostic lines.

Every failure names the field it is about and, for the numeric fields,
keeps the ValueError that caused it. `parse()` attaches the 1-based input
line number and the offending text before re-raising.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    MISSING_FILE_PATH = "missing_file_path"
    INVALID_FILE_PATH = "invalid_file_path"
    MISSING_LINE = "missing_line"
    INVALID_LINE = "invalid_line"
    MISSING_COLUMN = "missing_column"
    INVALID_COLUMN = "invalid_column"
    MISSING_MESSAGE = "missing_message"


class ErrorLineError(ValueError):
    """Base class for every way a diagnostic line can be malformed."""

    kind: ErrorKind
    description: str = "malformed diagnostic line"

    def __init__(self, cause: Optional[Exception] = None):
        super().__init__(self.description)
        self.cause = cause
        self.lineno: Optional[int] = None
        self.text: Optional[str] = None

    def at(self, lineno: int, text: str) -> "ErrorLineError":
        """Record where in the input this failure happened."""
        self.lineno = lineno
        self.text = text
        return self

    def __str__(self) -> str:
        msg = self.description
        if self.cause is not None:
            msg = f"{msg}: {self.cause}"
        if self.lineno is not None:
            msg = f"line {self.lineno}: {msg}"
        return msg


class MissingFilePath(ErrorLineError):
    kind = ErrorKind.MISSING_FILE_PATH
    description = "missing file_path"


class InvalidFilePath(ErrorLineError):
    # Any string is a valid path, so nothing raises this today.
    kind = ErrorKind.INVALID_FILE_PATH
    description = "invalid file_path"


class MissingLine(ErrorLineError):
    kind = ErrorKind.MISSING_LINE
    description = "missing line"


class InvalidLine(ErrorLineError):
    kind = ErrorKind.INVALID_LINE
    description = "invalid line"


class MissingColumn(ErrorLineError):
    kind = ErrorKind.MISSING_COLUMN
    description = "missing column"


class InvalidColumn(ErrorLineError):
    kind = ErrorKind.INVALID_COLUMN
    description = "invalid column"


class MissingMessage(ErrorLineError):
    kind = ErrorKind.MISSING_MESSAGE
    description = "missing message"
