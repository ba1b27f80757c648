"""Copy text to the system clipboard with the platform's copy tool."""

from __future__ import annotations

import logging
import os
import platform
import shutil
import subprocess

from .errors import ClipboardError, ClipboardUnsupported

logger = logging.getLogger(__name__)


def _candidates() -> list[list[str]]:
    system = platform.system()
    if system == "Darwin":
        return [["pbcopy"]]
    if system == "Windows":
        return [["clip"]]
    tools = []
    if os.environ.get("WAYLAND_DISPLAY"):
        tools.append(["wl-copy"])
    if os.environ.get("DISPLAY"):
        tools.append(["xclip", "-selection", "clipboard"])
        tools.append(["xsel", "--clipboard", "--input"])
    return tools


def find_copy_command() -> list[str] | None:
    """The first available copy command, or None in headless sessions."""
    for cmd in _candidates():
        if shutil.which(cmd[0]):
            return cmd
    return None


def copy_to_clipboard(text: str) -> None:
    """Put *text* on the clipboard.

    Raises ClipboardUnsupported when no copy tool can be used here, and
    ClipboardError when the tool runs but fails.
    """
    cmd = find_copy_command()
    if cmd is None:
        raise ClipboardUnsupported(f"no clipboard tool for {platform.system()}")

    logger.debug("Clipboard command: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, input=text, text=True, capture_output=True, timeout=5)
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise ClipboardError(f"{cmd[0]}: {exc}") from exc
    if result.returncode != 0:
        raise ClipboardError(f"{cmd[0]} exited with code {result.returncode}: {result.stderr.strip()}")
