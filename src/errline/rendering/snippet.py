"""
Snippet Renderer
================
Turns (source text, line, column, message) into an annotated excerpt:

    error: expected ';'
      --> main.c:3:9
         │
        2 │ int main() {
    ►   3 │     int x
         │         ^ expected ';'
        4 │ }

The gutter layout follows the source peek panel: dim context lines, the
target line marked with ► in bold yellow.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.text import Text

from ..parsing.error_line import ErrorLine
from ..parsing.filter import split_lines

S_HEADER = "bold red"
S_MESSAGE = "bold"
S_LOCATOR = "bold cyan"
S_GUTTER = "dim"
S_TARGET_GUTTER = "bold yellow"
S_TARGET_CODE = "bold white"
S_CONTEXT_CODE = "dim"
S_CARET = "bold red"
S_NOTE = "italic yellow"

MIN_GUTTER_WIDTH = 4


class SnippetRenderer:
    """
    Renders one diagnostic against the text of the file it points into.

    Args:
        context_lines: How many lines to show above and below the target.
        color:         When False every span is left unstyled.
        tab_width:     Tab size used when the Text is rendered.
    """

    def __init__(self, context_lines: int = 3, color: bool = True, tab_width: int = 4) -> None:
        if context_lines < 0:
            raise ValueError(f"context_lines must be >= 0, got {context_lines}")
        self.context_lines = context_lines
        self.color = color
        self.tab_width = tab_width

    # ── Public API ──────────────────────────────────────────

    def render(
        self,
        source: str,
        line: int,
        column: int,
        message: str,
        path: Optional[Union[str, Path]] = None,
    ) -> Text:
        """
        Build the annotated snippet.

        Args:
            source:  Full text of the referenced file.
            line:    1-based line number; 0 is treated as 1.
            column:  1-based column number; 0 is treated as 1.
            message: Text printed in the header and next to the caret.
            path:    Shown in the locator line when given.
        """
        line = max(line, 1)
        column = max(column, 1)
        # Compilers count lines by "\n" only; form feeds stay inside their line
        lines = list(split_lines(source))

        out = Text(tab_size=self.tab_width)
        self._render_header(out, message, path, line, column)

        if line > len(lines):
            out.append("\n")
            out.append(
                f"note: line {line} is out of range (file has {len(lines)} lines)",
                style=self._s(S_NOTE),
            )
            return out

        first = max(1, line - self.context_lines)
        last = min(len(lines), line + self.context_lines)
        width = max(MIN_GUTTER_WIDTH, len(str(last)))

        out.append("\n")
        out.append(self._blank_gutter(width), style=self._s(S_GUTTER))

        for num in range(first, last + 1):
            code = lines[num - 1]
            out.append("\n")
            if num == line:
                out.append(f"► {num:>{width}} │ ", style=self._s(S_TARGET_GUTTER))
                out.append(code, style=self._s(S_TARGET_CODE))
                out.append("\n")
                self._render_caret(out, code, column, message, width)
            else:
                out.append(f"  {num:>{width}} │ ", style=self._s(S_GUTTER))
                out.append(code, style=self._s(S_CONTEXT_CODE))

        return out

    def render_record(self, record: ErrorLine, source: str) -> Text:
        line, column, message = record.to_snippet_args()
        return self.render(source, line, column, message, path=record.file_path)

    # ── Internal rendering ──────────────────────────────────

    def _s(self, style: str) -> str:
        return style if self.color else ""

    def _blank_gutter(self, width: int) -> str:
        return f"  {'':>{width}} │"

    def _render_header(
        self,
        out: Text,
        message: str,
        path: Optional[Union[str, Path]],
        line: int,
        column: int,
    ) -> None:
        out.append("error", style=self._s(S_HEADER))
        out.append(": ")
        out.append(message, style=self._s(S_MESSAGE))
        if path is not None:
            out.append("\n")
            out.append("  --> ", style=self._s(S_GUTTER))
            out.append(f"{path}:{line}:{column}", style=self._s(S_LOCATOR))

    def _render_caret(self, out: Text, code: str, column: int, message: str, width: int) -> None:
        # Keep tabs from the prefix so the caret lands under the same cell.
        prefix_len = min(column - 1, len(code))
        padding = "".join(ch if ch == "\t" else " " for ch in code[:prefix_len])
        out.append(f"{self._blank_gutter(width)} ", style=self._s(S_GUTTER))
        out.append(padding)
        out.append("^", style=self._s(S_CARET))
        if message:
            out.append(" ")
            out.append(message, style=self._s(S_CARET))


def render_to_str(renderable, color: bool = True, width: Optional[int] = None) -> str:
    """Print a rich renderable into a string instead of the terminal."""
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        force_terminal=color,
        color_system="standard" if color else None,
        no_color=not color,
        width=width or 120,
        highlight=False,
    )
    console.print(renderable, soft_wrap=True)
    return buffer.getvalue()

