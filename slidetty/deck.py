"""Deck store — read a slides directory, reload single slides, write edits."""

from __future__ import annotations

import logging
from pathlib import Path

from .commands import extract_commands
from .errors import DirectoryReadError, FileReadError, FileWriteError, InvalidSlideIndex
from .models import SLIDE_EXTENSION, Deck, Slide
from .reveal import analyze_reveal

logger = logging.getLogger(__name__)

TITLE_FILE = "_title.md"
AUTHOR_FILE = "_author.md"
THEME_FILE = "_theme.md"

THEME_SEARCH_DIRS = (Path.home() / ".config" / "slidetty" / "themes",)


def build_slide(content: str, path: Path | None = None) -> Slide:
    """Create a Slide with reveal units and commands derived from *content*."""
    reveal = analyze_reveal(content)
    return Slide(
        content=content,
        path=path,
        reveal=reveal,
        commands=extract_commands(content),
        reveal_cursor=reveal.min_visible,
    )


def list_slide_files(directory: Path) -> list[Path]:
    """Slide files in *directory*, sorted by name.

    Names starting with ``_`` are reserved for deck metadata and skipped.
    """
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise DirectoryReadError(directory, exc.strerror or str(exc)) from exc

    files = [
        p for p in entries
        if p.suffix == SLIDE_EXTENSION and not p.name.startswith("_") and p.is_file()
    ]
    return sorted(files, key=lambda p: p.name)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FileReadError(path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    except OSError as exc:
        raise FileReadError(path, exc.strerror or str(exc)) from exc


def _read_metadata(directory: Path, name: str) -> str:
    path = directory / name
    if not path.is_file():
        return ""
    return _read_text(path).strip()


def load_theme(directory: Path) -> str:
    """The deck theme from ``_theme.md``; ``auto`` when missing or empty."""
    return _read_metadata(directory, THEME_FILE) or "auto"


def resolve_theme(value: str, directory: Path) -> str:
    """Resolve a theme value to ``auto`` or an existing style file path.

    Relative paths are tried as given, then against the deck directory, the
    working directory and the user theme directory.
    """
    if value == "auto":
        return value

    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        search = [candidate]
    else:
        search = [candidate, directory / candidate, Path.cwd() / candidate]
        search += [d / candidate for d in THEME_SEARCH_DIRS]

    for path in search:
        if path.is_file():
            logger.debug("Theme %r resolved to %s", value, path)
            return str(path)

    logger.warning("Theme %r not found, falling back to auto", value)
    return "auto"


def load_deck(directory: Path) -> Deck:
    """Read every slide and the metadata files from *directory*."""
    files = list_slide_files(directory)
    deck = Deck(
        directory=directory,
        title=_read_metadata(directory, TITLE_FILE),
        author=_read_metadata(directory, AUTHOR_FILE),
        theme=resolve_theme(load_theme(directory), directory),
    )
    for path in files:
        deck.slides.append(build_slide(_read_text(path), path))

    logger.info("Loaded %d slide(s) from %s", len(deck.slides), directory)
    return deck


def reload_slide(directory: Path, index: int) -> Slide:
    """Re-read the slide at *index*, re-listing the directory first.

    The listing is refreshed so that a file renamed on disk is picked up at
    its new position.
    """
    files = list_slide_files(directory)
    if not 0 <= index < len(files):
        raise InvalidSlideIndex(index, len(files))

    path = files[index]
    slide = build_slide(_read_text(path), path)
    logger.debug("Reloaded slide %d from %s", index, path)
    return slide


def save_slide(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FileWriteError(path, exc.strerror or str(exc)) from exc
    logger.info("Saved %s (%d chars)", path, len(content))
