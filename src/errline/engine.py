import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

from rich.text import Text

from .parsing import ErrorLine, ErrorLineError, parse
from .rendering.snippet import SnippetRenderer
from .utils.sources import SourceCache, SourceReadError, read_source
from .utils.state import ErrlineState
from .utils.watcher import FileWatcher

log = logging.getLogger(__name__)


class ErrlineEngine:
    """
    Diagnostic text in, rendered snippets out.

    `run()` is the one-shot path used by the CLI: it raises on the first
    malformed line or unreadable source. `refresh()` is the long-running
    path used by watch mode and the TUI: it re-reads `input_path` and
    publishes the outcome through `state` and `on_update_callback`.
    """

    def __init__(self, renderer: Optional[SnippetRenderer] = None, input_path: Optional[str] = None):
        self.renderer = renderer if renderer else SnippetRenderer()
        self.state = ErrlineState(input_path=input_path or "")
        self.watcher: Optional[FileWatcher] = None
        self.on_update_callback: Optional[Callable[[ErrlineState], None]] = None
        # refresh() is called from the watcher thread and from the UI thread
        self._lock = threading.Lock()

    def load(self, text: str) -> List[Tuple[ErrorLine, str]]:
        """Parse `text` and pair every record with the text of its file."""
        sources = SourceCache()
        records = parse(text)
        log.debug("parsed %d diagnostic(s)", len(records))
        return [(record, sources.get(record.file_path)) for record in records]

    def render(self, record: ErrorLine, source: str) -> Text:
        return self.renderer.render_record(record, source)

    def run(self, text: str) -> List[Text]:
        return [self.render(record, source) for record, source in self.load(text)]

    # ── Watch / TUI ─────────────────────────────────────────

    def start(self):
        self.refresh()
        if self.state.input_path:
            self.watcher = FileWatcher()
            self.watcher.start_watching(self.state.input_path, self._on_input_changed)

    def stop(self):
        if self.watcher is not None:
            self.watcher.stop_watching()
            self.watcher = None

    def _on_input_changed(self, path: str):
        log.debug("input changed: %s", path)
        self.refresh()

    def set_input(self, text: str):
        """Use `text` as the diagnostic batch without reading a file."""
        with self._lock:
            self._publish(text)

    def refresh(self):
        with self._lock:
            input_path = self.state.input_path
            if not input_path:
                self._publish(self.state.input_text)
                return
            log.info("refreshing %s", input_path)
            try:
                text = read_source(input_path)
            except SourceReadError as e:
                log.error("cannot read input: %s", e)
                state = ErrlineState(input_path=input_path)
                state.fail(str(e))
                self._notify(state)
                return
            self._publish(text)

    def _publish(self, text: str):
        # Every run gets its own state so subscribers never see a half-updated one
        state = ErrlineState(input_path=self.state.input_path, input_text=text)
        try:
            pairs = self.load(text)
        except (ErrorLineError, SourceReadError) as e:
            log.error("%s", e)
            state.fail(str(e))
        else:
            state.update_records(
                [record for record, _ in pairs],
                {str(record.file_path): source for record, source in pairs},
            )
        self._notify(state)

    def _notify(self, state: ErrlineState):
        state.last_update = time.time()
        self.state = state
        if self.on_update_callback:
            self.on_update_callback(state)
