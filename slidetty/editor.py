"""Editor submode — the in-progress edit of one slide and its panel layout."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

MIN_PANEL_WIDTH = 28
MIN_PANEL_HEIGHT = 10
PANEL_HORIZ_PAD = 4
PANEL_VERT_PAD = 4


@dataclass(frozen=True)
class EditorLayout:
    panel_width: int
    panel_height: int
    editor_width: int
    editor_height: int


@dataclass(frozen=True)
class EditorSession:
    target_index: int
    target_path: Path | None
    buffer: str
    layout: EditorLayout
    error: str | None = None
    saving: bool = False

    @property
    def path_label(self) -> str:
        return self.target_path.name if self.target_path else "unsaved slide"


def _clamp(value: int, low: int, high: int) -> int:
    if value < low:
        return low
    if value > high:
        return high
    return value


def editor_geometry(width: int, height: int) -> EditorLayout:
    """Size the floating edit panel for a *width* x *height* terminal.

    The panel takes roughly 70% of the width and 40% of the height, never
    smaller than the minimum panel size.
    """
    width = max(width, MIN_PANEL_WIDTH + 2)
    height = max(height, MIN_PANEL_HEIGHT + 2)

    max_panel_width = width - 4
    if max_panel_width < MIN_PANEL_WIDTH:
        max_panel_width = width - 2
        if max_panel_width < MIN_PANEL_WIDTH:
            max_panel_width = width
    panel_width = _clamp(round(width * 0.7), MIN_PANEL_WIDTH, max_panel_width)

    max_panel_height = height - 12
    if max_panel_height < MIN_PANEL_HEIGHT:
        max_panel_height = height - 8
        if max_panel_height < MIN_PANEL_HEIGHT:
            max_panel_height = height - 4
    # On tiny terminals the height cap can fall below the minimum.
    panel_height = _clamp(round(height * 0.4), MIN_PANEL_HEIGHT, max(max_panel_height, MIN_PANEL_HEIGHT))

    editor_width = _clamp(panel_width - PANEL_HORIZ_PAD, 12, panel_width - 2)
    editor_height = _clamp(panel_height - PANEL_VERT_PAD, 6, panel_height - 2)
    return EditorLayout(panel_width, panel_height, editor_width, editor_height)


def open_session(index: int, path: Path | None, content: str, width: int, height: int) -> EditorSession:
    return EditorSession(
        target_index=index,
        target_path=path,
        buffer=content,
        layout=editor_geometry(width, height),
    )
