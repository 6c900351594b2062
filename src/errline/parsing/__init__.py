from .filter import filter_lines, numbered_lines, split_lines, COMMENT_MARKER
from .error_line import ErrorLine, parse, parse_line, DELIMITER
from .errors import (
    ErrorKind,
    ErrorLineError,
    MissingFilePath,
    InvalidFilePath,
    MissingLine,
    InvalidLine,
    MissingColumn,
    InvalidColumn,
    MissingMessage,
)
