"""Extract copyable shell commands from ```commands fenced blocks."""

from __future__ import annotations

import logging

from .models import COMMANDS_FENCE_RE, FENCE_CLOSE_RE

logger = logging.getLogger(__name__)


def extract_commands(content: str) -> list[str]:
    """Return the commands of every ``commands`` block in *content*, in order.

    One command per non-blank line; surrounding whitespace is stripped.  A
    block with no closing fence runs to the end of the slide.
    """
    commands: list[str] = []
    in_block = False

    for line in content.splitlines():
        if not in_block:
            if COMMANDS_FENCE_RE.match(line):
                in_block = True
            continue
        if FENCE_CLOSE_RE.match(line):
            in_block = False
            continue
        stripped = line.strip()
        if stripped:
            commands.append(stripped)

    if commands:
        logger.debug("Extracted %d command(s)", len(commands))
    return commands


def format_commands(commands: list[str]) -> str:
    """Render *commands* as a ``commands`` fenced block."""
    body = "".join(f"{cmd}\n" for cmd in commands)
    return f"```commands\n{body}```\n"
