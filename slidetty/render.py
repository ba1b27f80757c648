"""Terminal rendering: markdown styling via rich, status bar, slide fitting."""

from __future__ import annotations

import functools
import io
import logging
from dataclasses import dataclass

from rich.console import Console
from rich.markdown import Markdown
from rich.text import Text
from rich.theme import Theme

from .errors import RenderError

logger = logging.getLogger(__name__)

DEFAULT_WRAP = 80
DEFAULT_TITLE = "Slidetty"
DEFAULT_AUTHOR = "Unknown"

# Powerline separator (needs a Nerd Font).
CHEVRON = "\ue0b0"

_OUTER_STYLE = "bright_white on #000080"
_INNER_STYLE = "bright_white on #1e3a8a"


@dataclass(frozen=True)
class Renderer:
    """Styling settings; rebuilt on every resize rather than mutated."""

    wrap_width: int = DEFAULT_WRAP
    theme: str = "auto"


def build_renderer(width: int, theme: str) -> Renderer:
    wrap = width - 4 if width > 4 else DEFAULT_WRAP
    return Renderer(wrap_width=wrap, theme=theme)


@functools.lru_cache(maxsize=8)
def _load_theme(path: str) -> Theme:
    try:
        return Theme.read(path)
    except Exception as exc:
        raise RenderError(f"cannot load theme {path}: {exc}") from exc


def render_markdown(content: str, renderer: Renderer) -> str:
    """Render *content* to ANSI-styled text wrapped at the renderer width.

    Raises RenderError when rich cannot render the markdown or load the theme.
    """
    theme = None if renderer.theme == "auto" else _load_theme(renderer.theme)
    console = Console(
        file=io.StringIO(),
        width=renderer.wrap_width,
        theme=theme,
        force_terminal=True,
        color_system="truecolor",
    )
    try:
        with console.capture() as capture:
            console.print(Markdown(content))
    except Exception as exc:
        raise RenderError(str(exc)) from exc
    return capture.get()


def render_slide_text(content: str, renderer: Renderer) -> str:
    """Like render_markdown, but degrades to a literal error message."""
    try:
        return render_markdown(content, renderer)
    except RenderError as exc:
        logger.warning("Markdown render failed: %s", exc)
        return f"Error rendering markdown: {exc}"


def fit_lines(rendered: str, height: int) -> str:
    """Truncate or pad *rendered* to exactly *height* lines."""
    lines = rendered.rstrip("\n").split("\n")
    if height <= 0:
        return ""
    lines = lines[:height]
    lines += [""] * (height - len(lines))
    return "\n".join(lines)


def _truncate(text: str, width: int) -> str:
    if len(text) <= width - 2:
        return text
    keep = max(width - 5, 0)
    return text[:keep] + "..."


def status_bar(index: int, count: int, author: str, title: str, width: int) -> Text:
    """Three-section status line: slide counter, author, title."""
    section = max((width - 2) // 3, 6)
    left_width = center_width = section
    right_width = max(width - left_width - center_width - 2, 6)

    slide_info = _truncate(f"Slide {index + 1}/{count}", left_width)
    author_text = _truncate(author or DEFAULT_AUTHOR, center_width)
    title_text = _truncate(title or DEFAULT_TITLE, right_width)

    bar = Text(no_wrap=True, overflow="crop")
    bar.append(f" {slide_info}".ljust(left_width), style=_OUTER_STYLE)
    bar.append(CHEVRON, style="#000080 on #1e3a8a")
    bar.append(author_text.center(center_width), style=_INNER_STYLE)
    bar.append(CHEVRON, style="#1e3a8a on #000080")
    bar.append(f"{title_text} ".rjust(right_width), style=_OUTER_STYLE)
    return bar
