from textual.app import App, ComposeResult
from textual.widgets import Footer, OptionList, TextArea
from textual.containers import Horizontal, Vertical
from textual.binding import Binding
from textual.message import Message
from rich.text import Text
from ..engine import ErrlineEngine
from ..parsing.error_line import ErrorLine
from ..utils.state import ErrlineState
from .snippet_panel import SnippetPanel

C_BG = "#1e1e1e"
C_ACCENT1 = "#45d3ee" # Cyan
C_ACCENT2 = "#9FBFC5" # Muted Blue


def record_label(record: ErrorLine) -> Text:
    """One row of the diagnostic list: `path:line:col  message`."""
    label = Text()
    label.append(f"{record.file_path}:{record.line}:{record.column}", style=f"bold {C_ACCENT1}")
    label.append("  ")
    label.append(record.message or "(no message)")
    return label


class ErrlineApp(App):
    """Browse a batch of diagnostics with the source snippet alongside."""

    CSS = f"""
    Screen {{ background: {C_BG}; }}

    #main-layout {{ height: 1fr; width: 100%; }}

    #diagnostics {{
        width: 2fr;
        height: 1fr;
        border: solid {C_ACCENT2};
    }}

    #snippet {{ width: 3fr; }}

    #error-view {{ color: #ff6b6b; display: none; height: 1fr; margin: 1 2; }}
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "refresh", "Reload", show=True),
    ]

    class StateUpdated(Message):
        def __init__(self, state: ErrlineState) -> None:
            super().__init__()
            self.state = state

    def __init__(self, engine: ErrlineEngine):
        super().__init__()
        self.engine = engine
        # the watcher calls back from its own thread; post_message is thread-safe
        self.engine.on_update_callback = lambda state: self.post_message(self.StateUpdated(state))
        self._records: list[ErrorLine] = []
        self._state = ErrlineState()

    def compose(self) -> ComposeResult:
        with Vertical(id="main-layout"):
            yield TextArea(id="error-view", read_only=True)
            with Horizontal(id="browser"):
                yield OptionList(id="diagnostics")
                yield SnippetPanel(self.engine.renderer, id="snippet")
        yield Footer()

    def on_mount(self) -> None:
        self.engine.start()

    def action_refresh(self) -> None:
        self.engine.refresh()

    def on_errline_app_state_updated(self, message: StateUpdated) -> None:
        state = message.state
        self._state = state
        error_view = self.query_one("#error-view", TextArea)
        browser = self.query_one("#browser", Horizontal)
        diagnostics = self.query_one("#diagnostics", OptionList)
        panel = self.query_one("#snippet", SnippetPanel)

        if state.has_errors:
            browser.display, error_view.display = False, True
            error_view.text = f"Error: {state.error}"
            self._records = []
            diagnostics.clear_options()
            panel.show_empty()
            return

        browser.display, error_view.display = True, False
        self._records = list(state.records)
        diagnostics.clear_options()
        diagnostics.add_options([record_label(r) for r in self._records])
        if self._records:
            diagnostics.highlighted = 0
            self._show(0)
        else:
            panel.show_empty()

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        self._show(event.option_index)

    def _show(self, idx: int) -> None:
        if not 0 <= idx < len(self._records):
            return
        record = self._records[idx]
        self.query_one("#snippet", SnippetPanel).show_record(record, self._state.source_for(record))

    def on_unmount(self) -> None: self.engine.stop()

def run_tui(engine: ErrlineEngine):
    app = ErrlineApp(engine)
    app.run()
