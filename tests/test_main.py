"""Tests for slidetty.__main__ — CLI argument parsing and startup."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from slidetty.__main__ import main


@pytest.fixture(autouse=True)
def _reset_logging():
    """main() attaches a file handler to the slidetty logger; drop it afterwards."""
    yield
    log = logging.getLogger("slidetty")
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()


# ---------------------------------------------------------------------------
# init subcommand
# ---------------------------------------------------------------------------

class TestInit:
    def test_init_creates_deck(self, tmp_path, capsys):
        target = tmp_path / "deck"
        with patch("sys.argv", ["slidetty", "init", str(target)]):
            main()
        assert (target / "_title.md").exists()
        assert "Created deck" in capsys.readouterr().out

    def test_init_existing_target_exits_nonzero(self, tmp_path, capsys):
        with patch("sys.argv", ["slidetty", "init", str(tmp_path)]):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1
        assert "already exists" in capsys.readouterr().err

    def test_init_does_not_start_viewer(self, tmp_path):
        with patch("sys.argv", ["slidetty", "init", str(tmp_path / "d")]):
            with patch("slidetty.__main__.SlideApp") as mock_app:
                main()
        mock_app.assert_not_called()


# ---------------------------------------------------------------------------
# Viewer startup
# ---------------------------------------------------------------------------

class TestViewer:
    def test_bare_invocation_runs_app_on_default_dir(self, tmp_path):
        log = tmp_path / "s.log"
        with patch("sys.argv", ["slidetty", "--log-file", str(log)]):
            with patch("slidetty.__main__.SlideApp") as mock_app:
                main()
        mock_app.assert_called_once_with(Path("slides"), theme=None)
        mock_app.return_value.run.assert_called_once()

    def test_slides_option(self, tmp_path):
        with patch("sys.argv", ["slidetty", "--slides", str(tmp_path), "--log-file", str(tmp_path / "l.log")]):
            with patch("slidetty.__main__.SlideApp") as mock_app:
                main()
        assert mock_app.call_args[0][0] == tmp_path

    def test_theme_option_resolved(self, tmp_path):
        theme = tmp_path / "dark.ini"
        theme.write_text("[styles]\n")
        argv = ["slidetty", "--slides", str(tmp_path), "--theme", "dark.ini",
                "--log-file", str(tmp_path / "l.log")]
        with patch("sys.argv", argv):
            with patch("slidetty.__main__.SlideApp") as mock_app:
                main()
        assert mock_app.call_args[1]["theme"] == str(theme)

    def test_log_file_written(self, tmp_path):
        log = tmp_path / "s.log"
        with patch("sys.argv", ["slidetty", "--log-file", str(log), "-v"]):
            with patch("slidetty.__main__.SlideApp"):
                main()
        assert "CLI arguments" in log.read_text()

    def test_terminal_failure_exits_nonzero(self, tmp_path, capsys):
        app = MagicMock()
        app.run.side_effect = RuntimeError("no tty")
        with patch("sys.argv", ["slidetty", "--log-file", str(tmp_path / "l.log")]):
            with patch("slidetty.__main__.SlideApp", return_value=app):
                with pytest.raises(SystemExit) as exc_info:
                    main()
        assert exc_info.value.code == 1
        assert "Error running program: no tty" in capsys.readouterr().err
