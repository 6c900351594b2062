"""
Snippet Panel
=============
Shows the annotated source excerpt for whichever diagnostic is
highlighted in the list.
"""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual.widgets import Static

from ..parsing.error_line import ErrorLine
from ..rendering.snippet import SnippetRenderer


class SnippetPanel(Static):
    """
    Right-hand panel: the rendered snippet for the current record.
    """

    DEFAULT_CSS = """
    SnippetPanel {
        height: 1fr;
        background: #252526;
        border-left: solid #3c3c3c;
        padding: 0 1;
    }
    """

    def __init__(self, renderer: Optional[SnippetRenderer] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._renderer = renderer if renderer else SnippetRenderer()
        self._current: Optional[ErrorLine] = None

    @property
    def current(self) -> Optional[ErrorLine]:
        return self._current

    def show_record(self, record: ErrorLine, source: Optional[str]) -> None:
        self._current = record
        if source is None:
            t = Text()
            t.append(f"{record.file_path}", style="bold cyan")
            t.append(" │ ", style="dim")
            t.append("(source not loaded)", style="dim italic")
            self.update(t)
            return
        self.update(self._renderer.render_record(record, source))

    def show_empty(self) -> None:
        self._current = None
        t = Text()
        t.append("errline ", style="bold cyan")
        t.append("│ ", style="dim")
        t.append("(no diagnostics)", style="dim italic")
        self.update(t)
