"""
Tests for the errline CLI: stdin/file input, fatal errors and
the --tui / --watch routing.
"""
import io
import os
from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest
from errline.main import _build_parser, run

RESOURCES = Path(__file__).parent.parent / "resources"


def _run(argv, stdin=""):
    with patch("sys.argv", ["errline", *argv]):
        with patch("sys.stdin", io.StringIO(stdin)):
            run()


class TestArgParser:

    def test_defaults(self):
        args = _build_parser().parse_args([])
        assert args.input is None
        assert args.context is None
        assert args.no_color is False
        assert args.tui is False
        assert args.watch is False

    def test_all_flags(self):
        args = _build_parser().parse_args(["-i", "diag.txt", "-C", "2", "--no-color", "--watch", "-v"])
        assert args.input == "diag.txt"
        assert args.context == 2
        assert args.no_color is True
        assert args.watch is True
        assert args.verbose is True


class TestRunStdin:

    def test_example_from_stdin(self, monkeypatch, capsys):
        monkeypatch.chdir(RESOURCES)
        _run([], stdin=(RESOURCES / "example").read_text())
        out = capsys.readouterr().out
        assert "error: syntax error: non-declaration statement outside function body" in out
        assert "main.go:3:1" in out
        assert 'fmt.Println("hello")' in out
        assert "\x1b[" not in out

    def test_unwritable_home_uses_defaults(self, tmp_path, monkeypatch, capsys):
        home = tmp_path / "not-a-dir"
        home.write_text("")
        monkeypatch.setenv("HOME", str(home))
        monkeypatch.chdir(RESOURCES)
        with patch("errline.main.setup_logging"):
            _run([], stdin=(RESOURCES / "example").read_text())
        assert 'fmt.Println("hello")' in capsys.readouterr().out

    def test_empty_stdin_prints_nothing(self, capsys):
        _run([], stdin="")
        assert capsys.readouterr().out == ""

    def test_parse_error_is_fatal(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run([], stdin="./a.go:x:1:oops\n")
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "Error: line 1: invalid line" in captured.err
        assert captured.out == ""

    def test_missing_source_is_fatal(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run([], stdin=f"{tmp_path}/gone.c:1:1:m\n")
        assert exc_info.value.code == 1
        assert "gone.c" in capsys.readouterr().err

    def test_no_partial_output(self, monkeypatch, capsys):
        monkeypatch.chdir(RESOURCES)
        with pytest.raises(SystemExit):
            _run([], stdin="./main.go:3:1:fine\n./missing.go:1:1:boom\n")
        assert capsys.readouterr().out == ""

    def test_context_flag(self, monkeypatch, capsys):
        monkeypatch.chdir(RESOURCES)
        _run(["-C", "0"], stdin="./main.go:3:1:m\n")
        out = capsys.readouterr().out
        assert "package main" not in out
        assert 'fmt.Println("hello")' in out


class TestRunInputFile:

    def test_reads_input_file(self, monkeypatch, capsys):
        monkeypatch.chdir(RESOURCES)
        _run(["-i", str(RESOURCES / "example")])
        assert "main.go:3:1" in capsys.readouterr().out

    def test_nonexistent_input_rejected(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            _run(["-i", str(tmp_path / "missing.txt")])
        assert exc_info.value.code == 1

    def test_negative_context_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            _run(["-C", "-1"])
        assert exc_info.value.code == 1


class TestRunModes:

    def test_tui_needs_input(self):
        with pytest.raises(SystemExit) as exc_info:
            _run(["--tui"])
        assert exc_info.value.code == 1

    def test_watch_needs_input(self):
        with pytest.raises(SystemExit) as exc_info:
            _run(["--watch"])
        assert exc_info.value.code == 1

    def test_tui_gets_engine_for_input(self):
        mock_run_tui = MagicMock()
        with patch("errline.main.run_tui", mock_run_tui):
            _run(["--tui", "-i", str(RESOURCES / "example"), "-C", "1", "--no-color"])
        engine = mock_run_tui.call_args[0][0]
        assert engine.state.input_path == os.path.abspath(RESOURCES / "example")
        assert engine.renderer.context_lines == 1
        assert engine.renderer.color is False

    def test_watch_is_routed(self):
        mock_watch = MagicMock()
        with patch("errline.main._watch", mock_watch):
            _run(["--watch", "-i", str(RESOURCES / "example")])
        mock_watch.assert_called_once()

    def test_keyboard_interrupt_exits_quietly(self):
        with patch("errline.main._watch", side_effect=KeyboardInterrupt):
            _run(["--watch", "-i", str(RESOURCES / "example")])

    def test_config_context_used(self, isolated_home):
        (isolated_home / ".errline" / "config.json").write_text('{"context_lines": 7, "color": false}')
        mock_run_tui = MagicMock()
        with patch("errline.main.run_tui", mock_run_tui):
            _run(["--tui", "-i", str(RESOURCES / "example")])
        engine = mock_run_tui.call_args[0][0]
        assert engine.renderer.context_lines == 7
        assert engine.renderer.color is False
