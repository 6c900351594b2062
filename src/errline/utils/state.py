from dataclasses import dataclass, field
from typing import Dict, List, Optional
from ..parsing.error_line import ErrorLine


@dataclass
class ErrlineState:
    """
    The result of the last engine run.
    Either `records` is the full batch or `error` explains why there is none.
    """
    input_path: str = ""
    input_text: str = ""
    records: List[ErrorLine] = field(default_factory=list)
    sources: Dict[str, str] = field(default_factory=dict)
    error: str = ""
    last_update: float = 0.0

    @property
    def has_errors(self) -> bool:
        return bool(self.error)

    def source_for(self, record: ErrorLine) -> Optional[str]:
        return self.sources.get(str(record.file_path))

    def update_records(self, records: List[ErrorLine], sources: Dict[str, str]):
        self.records = records
        self.sources = sources
        self.error = ""

    def fail(self, message: str):
        self.records = []
        self.sources = {}
        self.error = message
