from typing import Iterator, Tuple

COMMENT_MARKER = "#"


def split_lines(text: str) -> Iterator[str]:
    """
    Split on '\\n' only, dropping a trailing '\\r' from each line.
    A final newline does not produce an extra empty line.
    """
    if not text:
        return
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    for part in parts:
        yield part[:-1] if part.endswith("\r") else part


def numbered_lines(text: str) -> Iterator[Tuple[int, str]]:
    """
    Yield (lineno, line) for every candidate line, lineno being the
    1-based position in the original text (comments are counted).
    """
    for lineno, line in enumerate(split_lines(text), start=1):
        if line.startswith(COMMENT_MARKER):
            continue
        yield lineno, line


def filter_lines(text: str) -> Iterator[str]:
    """Drop comment lines, keep everything else (blank lines included) in order."""
    for _, line in numbered_lines(text):
        yield line
