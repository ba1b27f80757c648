"""Shared data models and parsing constants."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path


# A standalone line equal to this marker starts a progressive-reveal group.
REVEAL_MARKER = ":reveal:"

SLIDE_EXTENSION = ".md"
DEFAULT_SLIDES_DIR = "slides"

# Markdown list items: "- ", "* ", "+ " bullets or "12. " ordinals.
BULLET_RE = re.compile(r"^([ \t]*)([-*+] )")
ORDINAL_RE = re.compile(r"^([ \t]*)(\d+\. )")

# Opening fence of a copyable command block: ```commands
COMMANDS_FENCE_RE = re.compile(r"^\s*```commands\s*$")
FENCE_CLOSE_RE = re.compile(r"^\s*```\s*$")


@dataclass
class RevealConfig:
    directive_lines: list[int] = field(default_factory=list)
    items: list[list[int]] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        return len(self.items)

    @property
    def min_visible(self) -> int:
        return 1 if self.items else 0


@dataclass
class Slide:
    content: str
    path: Path | None = None
    reveal: RevealConfig = field(default_factory=RevealConfig)
    commands: list[str] = field(default_factory=list)
    reveal_cursor: int = 0
    version: int = 0


@dataclass
class Deck:
    directory: Path
    slides: list[Slide] = field(default_factory=list)
    title: str = ""
    author: str = ""
    theme: str = "auto"
