import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from .errors import (
    ErrorLineError,
    InvalidColumn,
    InvalidFilePath,
    InvalidLine,
    MissingColumn,
    MissingFilePath,
    MissingLine,
    MissingMessage,
)
from .filter import numbered_lines

DELIMITER = ":"

# Optional '+', then ASCII digits only. int() alone would also accept
# whitespace, underscores and non-ASCII digits.
RE_UNSIGNED = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class ErrorLine:
    """
    One diagnostic: where it points and what it says.
    Example: ./main.go:3:1:syntax error: non-declaration statement outside function body
    """
    file_path: Path
    line: int
    column: int
    message: str

    def to_snippet_args(self) -> Tuple[int, int, str]:
        """The (line, column, message) triple the snippet renderer takes."""
        return self.line, self.column, self.message


def _parse_path(token: str) -> Path:
    try:
        return Path(token)
    except (TypeError, ValueError) as e:
        raise InvalidFilePath(e) from e


def _parse_unsigned(token: str) -> int:
    if not token:
        raise ValueError("cannot parse integer from empty string")
    if not RE_UNSIGNED.fullmatch(token):
        raise ValueError("invalid digit found in string")
    return int(token)


def parse_line(line: str) -> ErrorLine:
    """
    Parse a single `path:line:column:message` line.
    Fields are checked left to right and the first problem is raised.
    """
    # maxsplit=3 keeps every ':' of the message inside the last token
    tokens = line.split(DELIMITER, 3)

    if not tokens:
        raise MissingFilePath()
    file_path = _parse_path(tokens[0])

    if len(tokens) < 2:
        raise MissingLine()
    try:
        line_no = _parse_unsigned(tokens[1])
    except ValueError as e:
        raise InvalidLine(e) from e

    if len(tokens) < 3:
        raise MissingColumn()
    try:
        column = _parse_unsigned(tokens[2])
    except ValueError as e:
        raise InvalidColumn(e) from e

    if len(tokens) < 4:
        raise MissingMessage()
    message = tokens[3].strip()

    return ErrorLine(
        file_path=file_path,
        line=line_no,
        column=column,
        message=message,
    )


def parse(text: str) -> List[ErrorLine]:
    """
    Parse a whole diagnostic stream. Comment lines are skipped.
    The first malformed line aborts the batch; nothing is returned for it.
    """
    records = []
    for lineno, line in numbered_lines(text):
        try:
            records.append(parse_line(line))
        except ErrorLineError as e:
            e.at(lineno, line)
            raise
    return records
