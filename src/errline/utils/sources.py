import logging
from pathlib import Path
from typing import Dict, Union

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SourceReadError(OSError):
    """A diagnostic pointed at a file that could not be read."""

    def __init__(self, path: PathLike, reason: str):
        super().__init__(f"cannot read {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


def read_source(path: PathLike) -> str:
    """
    Return the full text of `path`.
    Undecodable bytes are replaced rather than failing the whole run.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise SourceReadError(path, e.strerror or str(e)) from e


class SourceCache:
    """
    Reads each referenced file once per engine run.
    """
    def __init__(self):
        self._files: Dict[Path, str] = {}

    def get(self, path: PathLike) -> str:
        key = Path(path)
        if key not in self._files:
            log.debug("reading source %s", key)
            self._files[key] = read_source(key)
        return self._files[key]

    def as_dict(self) -> Dict[str, str]:
        return {str(p): text for p, text in self._files.items()}

    def clear(self):
        self._files.clear()
