import sys
import os
import time
import argparse
import logging
from rich.console import Console
from .engine import ErrlineEngine
from .parsing import ErrorLineError
from .rendering.snippet import SnippetRenderer
from .ui.app import run_tui
from .utils.config import ConfigManager
from .utils.log import setup_logging
from .utils.sources import SourceReadError, read_source
from .utils.state import ErrlineState

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="errline",
        description="Render file:line:column:message diagnostics as annotated source snippets",
    )
    parser.add_argument("-i", "--input", help="Read diagnostics from this file instead of stdin")
    parser.add_argument("-C", "--context", type=int, help="Lines of context around each diagnostic")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--tui", action="store_true", help="Browse the diagnostics interactively (needs --input)")
    parser.add_argument("--watch", action="store_true", help="Re-render when the input file changes (needs --input)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug logging to stderr")
    return parser


def _fail(message: str):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _build_renderer(args, config: ConfigManager) -> SnippetRenderer:
    context = args.context if args.context is not None else config.get("context_lines", 3)
    color = False if args.no_color else bool(config.get("color", True))
    return SnippetRenderer(
        context_lines=context,
        color=color,
        tab_width=config.get("tab_width", 4),
    )


def _print_batch(console: Console, engine: ErrlineEngine, text: str):
    for snippet in engine.run(text):
        console.print(snippet, soft_wrap=True)
        console.print()


def _watch(console: Console, engine: ErrlineEngine):
    def on_update(state: ErrlineState):
        console.clear()
        if state.has_errors:
            console.print(f"Error: {state.error}", style="bold red", markup=False, highlight=False)
            return
        for record in state.records:
            console.print(engine.render(record, state.source_for(record)), soft_wrap=True)
            console.print()

    engine.on_update_callback = on_update
    engine.start()
    try:
        while True:
            time.sleep(0.5)
    finally:
        engine.stop()


def run():
    parser = _build_parser()
    args = parser.parse_args()

    if args.context is not None and args.context < 0:
        _fail("--context must be zero or more")

    if (args.tui or args.watch) and not args.input:
        _fail("--tui and --watch need an input file (-i FILE)")

    config = ConfigManager()
    setup_logging(verbose=args.verbose, log_file=config.get("log_file"))

    input_path = os.path.abspath(args.input) if args.input else None
    if input_path and not os.path.exists(input_path):
        _fail(f"File not found: {input_path}")

    renderer = _build_renderer(args, config)
    engine = ErrlineEngine(renderer, input_path=input_path if (args.tui or args.watch) else None)
    console = Console(no_color=not renderer.color, highlight=False)

    try:
        if args.tui:
            run_tui(engine)
        elif args.watch:
            _watch(console, engine)
        else:
            text = read_source(input_path) if input_path else sys.stdin.read()
            _print_batch(console, engine, text)
    except KeyboardInterrupt:
        pass
    except (ErrorLineError, SourceReadError) as e:
        log.error("%s", e)
        _fail(str(e))


if __name__ == "__main__":
    run()
