"""Tests for slidetty.clipboard — platform copy tool wrapper."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from slidetty.clipboard import copy_to_clipboard, find_copy_command
from slidetty.errors import ClipboardError, ClipboardUnsupported


# ---------------------------------------------------------------------------
# find_copy_command
# ---------------------------------------------------------------------------

class TestFindCopyCommand:
    def test_macos_uses_pbcopy(self):
        with patch("slidetty.clipboard.platform.system", return_value="Darwin"):
            with patch("slidetty.clipboard.shutil.which", return_value="/usr/bin/pbcopy"):
                assert find_copy_command() == ["pbcopy"]

    def test_linux_x11_prefers_xclip(self, monkeypatch):
        monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
        monkeypatch.setenv("DISPLAY", ":0")
        with patch("slidetty.clipboard.platform.system", return_value="Linux"):
            with patch("slidetty.clipboard.shutil.which", return_value="/usr/bin/x"):
                assert find_copy_command() == ["xclip", "-selection", "clipboard"]

    def test_linux_falls_back_to_xsel(self, monkeypatch):
        monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
        monkeypatch.setenv("DISPLAY", ":0")
        with patch("slidetty.clipboard.platform.system", return_value="Linux"):
            with patch("slidetty.clipboard.shutil.which",
                       side_effect=lambda n: "/usr/bin/xsel" if n == "xsel" else None):
                assert find_copy_command() == ["xsel", "--clipboard", "--input"]

    def test_wayland(self, monkeypatch):
        monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
        monkeypatch.delenv("DISPLAY", raising=False)
        with patch("slidetty.clipboard.platform.system", return_value="Linux"):
            with patch("slidetty.clipboard.shutil.which", return_value="/usr/bin/wl-copy"):
                assert find_copy_command() == ["wl-copy"]

    def test_headless_linux_has_none(self, monkeypatch):
        monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
        monkeypatch.delenv("DISPLAY", raising=False)
        with patch("slidetty.clipboard.platform.system", return_value="Linux"):
            assert find_copy_command() is None

    def test_tool_missing_from_path(self):
        with patch("slidetty.clipboard.platform.system", return_value="Darwin"):
            with patch("slidetty.clipboard.shutil.which", return_value=None):
                assert find_copy_command() is None


# ---------------------------------------------------------------------------
# copy_to_clipboard
# ---------------------------------------------------------------------------

class TestCopyToClipboard:
    def test_unsupported_when_no_tool(self):
        with patch("slidetty.clipboard.find_copy_command", return_value=None):
            with pytest.raises(ClipboardUnsupported):
                copy_to_clipboard("ls")

    def test_unsupported_is_a_clipboard_error(self):
        assert issubclass(ClipboardUnsupported, ClipboardError)

    def test_text_piped_to_tool(self):
        mock_result = MagicMock()
        mock_result.returncode = 0
        with patch("slidetty.clipboard.find_copy_command", return_value=["pbcopy"]):
            with patch("slidetty.clipboard.subprocess.run", return_value=mock_result) as mock_run:
                copy_to_clipboard("echo hi")
        assert mock_run.call_args[0][0] == ["pbcopy"]
        assert mock_run.call_args[1]["input"] == "echo hi"

    def test_nonzero_exit_raises(self):
        mock_result = MagicMock()
        mock_result.returncode = 1
        mock_result.stderr = "Error: Can't open display\n"
        with patch("slidetty.clipboard.find_copy_command", return_value=["xclip"]):
            with patch("slidetty.clipboard.subprocess.run", return_value=mock_result):
                with pytest.raises(ClipboardError, match="Can't open display") as exc_info:
                    copy_to_clipboard("x")
        assert not isinstance(exc_info.value, ClipboardUnsupported)

    def test_timeout_raises(self):
        with patch("slidetty.clipboard.find_copy_command", return_value=["xclip"]):
            with patch("slidetty.clipboard.subprocess.run",
                       side_effect=subprocess.TimeoutExpired("xclip", 5)):
                with pytest.raises(ClipboardError):
                    copy_to_clipboard("x")
