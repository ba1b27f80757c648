"""Error types raised by the deck store, clipboard adapter and renderer."""

from __future__ import annotations

from pathlib import Path


class SlidettyError(Exception):
    """Base class for recoverable slidetty errors."""


class DirectoryReadError(SlidettyError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot read directory {path}: {reason}")
        self.path = path


class FileReadError(SlidettyError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path


class FileWriteError(SlidettyError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot write {path}: {reason}")
        self.path = path


class InvalidSlideIndex(SlidettyError):
    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"invalid slide index: {index} (deck has {count} slides)")
        self.index = index


class ClipboardError(SlidettyError):
    """The clipboard tool exists but failed."""


class ClipboardUnsupported(ClipboardError):
    """No clipboard tool is available on this system (e.g. headless)."""


class RenderError(SlidettyError):
    """Markdown could not be rendered to terminal text."""
