"""Application state machine.

``update(state, event)`` is the only way state changes.  It returns the next
state together with a list of effects (file reads and writes, clipboard
copies, timer ticks) for the host to carry out; their outcomes come back as
further events.  The host never mutates state directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Union

from .deck import build_slide
from .editor import EditorSession, editor_geometry, open_session
from .models import Deck, Slide
from .notification import TICK_SECONDS, Notification, open_notification, tick, truncate_message
from .render import Renderer, build_renderer
from .reveal import apply_reveal, clamp_reveal, step_reveal

logger = logging.getLogger(__name__)

QUIT_KEYS = ("q", "ctrl+c")
NEXT_KEYS = ("down", "j")
PREV_KEYS = ("up", "k")
FORWARD_KEYS = ("right", "l")
BACK_KEYS = ("left", "h")
EDIT_KEY = "e"
RELOAD_KEY = "r"
CANCEL_KEY = "escape"
SAVE_KEY = "ctrl+s"
# Hotkeys copying the 1st..10th command of the current slide.
COPY_KEYS = "asdfgzxcvb"

NOTIFY_MARGIN = 4


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Viewing:
    pass


@dataclass(frozen=True)
class Editing:
    session: EditorSession


Mode = Union[Viewing, Editing]


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class DeckLoaded:
    deck: Deck


@dataclass(frozen=True)
class DeckLoadFailed:
    message: str


@dataclass(frozen=True)
class SlideReloaded:
    index: int
    slide: Slide
    version: int


@dataclass(frozen=True)
class SlideReloadFailed:
    index: int
    message: str


@dataclass(frozen=True)
class EditorChanged:
    text: str


@dataclass(frozen=True)
class SlideSaved:
    index: int
    content: str
    path: Path | None


@dataclass(frozen=True)
class SlideSaveFailed:
    message: str


@dataclass(frozen=True)
class ClipboardFailed:
    message: str
    unsupported: bool = False


@dataclass(frozen=True)
class Tick:
    generation: int


Event = Union[
    Resize, KeyPress, DeckLoaded, DeckLoadFailed, SlideReloaded, SlideReloadFailed,
    EditorChanged, SlideSaved, SlideSaveFailed, ClipboardFailed, Tick,
]


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoadDeck:
    directory: Path


@dataclass(frozen=True)
class ReloadSlide:
    directory: Path
    index: int
    # Slide version when the reload was requested; stale results are dropped.
    version: int


@dataclass(frozen=True)
class WriteSlide:
    index: int
    path: Path
    content: str


@dataclass(frozen=True)
class CopyToClipboard:
    text: str


@dataclass(frozen=True)
class ScheduleTick:
    generation: int
    delay: float = TICK_SECONDS


@dataclass(frozen=True)
class Quit:
    pass


Effect = Union[LoadDeck, ReloadSlide, WriteSlide, CopyToClipboard, ScheduleTick, Quit]


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AppState:
    directory: Path
    slides: list[Slide] = field(default_factory=list)
    current: int = 0
    title: str = ""
    author: str = ""
    theme: str = "auto"
    # Theme given on the command line; wins over the deck's _theme.md.
    theme_override: str | None = None
    width: int = 0
    height: int = 0
    renderer: Renderer = field(default_factory=Renderer)
    progress: float = 0.0
    error: str | None = None
    mode: Mode = field(default_factory=Viewing)
    notification: Notification | None = None
    loaded: bool = False

    @property
    def editing(self) -> bool:
        return isinstance(self.mode, Editing)

    @property
    def current_slide(self) -> Slide | None:
        if 0 <= self.current < len(self.slides):
            return self.slides[self.current]
        return None


def initial_state(directory: Path, theme: str | None = None) -> AppState:
    resolved = theme or "auto"
    return AppState(
        directory=directory,
        theme=resolved,
        theme_override=theme,
        renderer=build_renderer(0, resolved),
    )


def startup_effects(state: AppState) -> list[Effect]:
    return [LoadDeck(state.directory)]


def visible_content(state: AppState) -> str | None:
    """Current slide markdown with reveal filtering applied."""
    slide = state.current_slide
    if slide is None:
        return None
    return apply_reveal(slide.content, slide.reveal, slide.reveal_cursor)


def update(state: AppState, event: Event) -> tuple[AppState, list[Effect]]:
    if isinstance(state.mode, Editing):
        return _update_editing(state, state.mode.session, event)
    return _update_viewing(state, event)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _progress(index: int, count: int) -> float:
    return (index + 1) / count if count else 0.0


def _replace_slide(state: AppState, index: int, slide: Slide) -> AppState:
    slides = list(state.slides)
    slides[index] = slide
    return replace(state, slides=slides)


def _resize(state: AppState, event: Resize) -> AppState:
    return replace(
        state,
        width=event.width,
        height=event.height,
        renderer=build_renderer(event.width, state.theme),
    )


def _refresh_slide(old: Slide, fresh: Slide) -> Slide:
    """Carry the reveal cursor over to *fresh*, clamped to its new bounds."""
    return replace(
        fresh,
        path=fresh.path or old.path,
        reveal_cursor=clamp_reveal(old.reveal_cursor, fresh.reveal.total_items),
        version=old.version + 1,
    )


def _commit(state: AppState, index: int, content: str, path: Path | None) -> AppState:
    if not 0 <= index < len(state.slides):
        logger.warning("Dropping save for slide %d: deck has %d slides", index, len(state.slides))
        return state
    fresh = _refresh_slide(state.slides[index], build_slide(content, path))
    logger.debug("Committed slide %d (version %d)", index, fresh.version)
    return replace(_replace_slide(state, index, fresh), error=None)


def _notify(state: AppState, message: str) -> tuple[AppState, list[Effect]]:
    text = truncate_message(message, state.width, NOTIFY_MARGIN)
    note = open_notification(text, state.notification)
    return replace(state, notification=note), [ScheduleTick(note.generation)]


def _update_common(state: AppState, event: Event) -> tuple[AppState, list[Effect]] | None:
    """Events handled the same way in every mode."""
    if isinstance(event, Tick):
        note, again = tick(state.notification, event.generation)
        effects: list[Effect] = [ScheduleTick(note.generation)] if again and note else []
        return replace(state, notification=note), effects

    if isinstance(event, ClipboardFailed):
        if event.unsupported:
            return _notify(state, f"Clipboard unavailable: {event.message}")
        return _notify(state, f"Copy failed: {event.message}")

    return None


# ---------------------------------------------------------------------------
# Viewing
# ---------------------------------------------------------------------------

def _update_viewing(state: AppState, event: Event) -> tuple[AppState, list[Effect]]:
    common = _update_common(state, event)
    if common is not None:
        return common

    if isinstance(event, Resize):
        return _resize(state, event), []

    if isinstance(event, KeyPress):
        return _handle_key(state, event.key)

    if isinstance(event, DeckLoaded):
        return _deck_loaded(state, event.deck), []

    if isinstance(event, DeckLoadFailed):
        logger.error("Deck load failed: %s", event.message)
        return replace(state, error=event.message), []

    if isinstance(event, SlideReloaded):
        return _slide_reloaded(state, event), []

    if isinstance(event, (SlideReloadFailed, SlideSaveFailed)):
        logger.error("Slide I/O failed: %s", event.message)
        return replace(state, error=event.message), []

    if isinstance(event, SlideSaved):
        # The editor was closed while the write was in flight; the file is on
        # disk, so keep memory in step with it.
        return _commit(state, event.index, event.content, event.path), []

    return state, []


def _deck_loaded(state: AppState, deck: Deck) -> AppState:
    theme = state.theme_override or deck.theme
    current = state.current
    if deck.slides and current >= len(deck.slides):
        current = len(deck.slides) - 1
    if not deck.slides:
        current = 0
    return replace(
        state,
        slides=list(deck.slides),
        current=current,
        title=deck.title,
        author=deck.author,
        theme=theme,
        renderer=build_renderer(state.width, theme),
        progress=_progress(current, len(deck.slides)),
        error=None,
        loaded=True,
    )


def _slide_reloaded(state: AppState, event: SlideReloaded) -> AppState:
    if not 0 <= event.index < len(state.slides):
        logger.debug("Ignoring reload of slide %d: out of range", event.index)
        return state
    old = state.slides[event.index]
    if old.version != event.version:
        logger.debug(
            "Ignoring stale reload of slide %d (requested at v%d, now v%d)",
            event.index, event.version, old.version,
        )
        return state
    fresh = _refresh_slide(old, event.slide)
    return replace(_replace_slide(state, event.index, fresh), error=None)


def _goto(state: AppState, index: int) -> AppState:
    if not state.slides:
        return state
    index = max(0, min(index, len(state.slides) - 1))
    if index == state.current:
        return state
    return replace(state, current=index, progress=_progress(index, len(state.slides)))


def adjust_reveal(state: AppState, delta: int) -> tuple[AppState, bool]:
    """Move the current slide's reveal cursor; report whether it moved."""
    slide = state.current_slide
    if slide is None:
        return state, False
    cursor, changed = step_reveal(slide.reveal_cursor, slide.reveal.total_items, delta)
    if not changed:
        return state, False
    return _replace_slide(state, state.current, replace(slide, reveal_cursor=cursor)), True


def _handle_key(state: AppState, key: str) -> tuple[AppState, list[Effect]]:
    if key in QUIT_KEYS:
        return state, [Quit()]

    if not state.slides:
        if key == RELOAD_KEY:
            return state, [LoadDeck(state.directory)]
        return state, []

    if key == EDIT_KEY:
        return _enter_edit(state), []

    if key == RELOAD_KEY:
        slide = state.slides[state.current]
        return state, [ReloadSlide(state.directory, state.current, slide.version)]

    if key in NEXT_KEYS or key in PREV_KEYS:
        delta = 1 if key in NEXT_KEYS else -1
        state, changed = adjust_reveal(state, delta)
        if changed:
            return state, []
        return _goto(state, state.current + delta), []

    if key in FORWARD_KEYS:
        return _goto(state, state.current + 1), []

    if key in BACK_KEYS:
        return _goto(state, state.current - 1), []

    if len(key) == 1 and key in COPY_KEYS:
        return _copy_command(state, COPY_KEYS.index(key))

    return state, []


def _enter_edit(state: AppState) -> AppState:
    slide = state.current_slide
    if slide is None:
        return state
    session = open_session(state.current, slide.path, slide.content, state.width, state.height)
    logger.debug("Editing slide %d (%s)", state.current, session.path_label)
    return replace(state, mode=Editing(session))


def _copy_command(state: AppState, index: int) -> tuple[AppState, list[Effect]]:
    slide = state.current_slide
    if slide is None or index >= len(slide.commands):
        return state, []
    command = slide.commands[index]
    state, effects = _notify(state, f"Copied: {command}")
    return state, [CopyToClipboard(command), *effects]


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------

def _update_editing(
    state: AppState, session: EditorSession, event: Event,
) -> tuple[AppState, list[Effect]]:
    common = _update_common(state, event)
    if common is not None:
        return common

    if isinstance(event, EditorChanged):
        return replace(state, mode=Editing(replace(session, buffer=event.text))), []

    if isinstance(event, Resize):
        layout = editor_geometry(event.width, event.height)
        state = _resize(state, event)
        return replace(state, mode=Editing(replace(session, layout=layout))), []

    if isinstance(event, KeyPress):
        if event.key == CANCEL_KEY:
            return replace(state, mode=Viewing()), []
        if event.key == SAVE_KEY:
            return _save(state, session)
        # Everything else is handled by the text area itself.
        return state, []

    if isinstance(event, SlideSaved):
        state = _commit(state, event.index, event.content, event.path)
        if event.index != session.target_index:
            # A write from an earlier, cancelled session.
            return state, []
        if session.buffer != event.content:
            # Typed while the write was in flight; keep the newer text open.
            pending = replace(session, saving=False, error=None)
            return replace(state, mode=Editing(pending)), []
        return replace(state, mode=Viewing()), []

    if isinstance(event, SlideReloadFailed):
        logger.error("Slide reload failed: %s", event.message)
        return replace(state, error=event.message), []

    if isinstance(event, SlideSaveFailed):
        logger.error("Save failed: %s", event.message)
        failed = replace(session, error=event.message, saving=False)
        return replace(state, mode=Editing(failed)), []

    logger.debug("Ignoring %s while editing", type(event).__name__)
    return state, []


def _save(state: AppState, session: EditorSession) -> tuple[AppState, list[Effect]]:
    if session.saving:
        return state, []
    if session.target_path is None:
        state = _commit(state, session.target_index, session.buffer, None)
        return replace(state, mode=Viewing()), []
    saving = replace(session, saving=True, error=None)
    effect = WriteSlide(session.target_index, session.target_path, session.buffer)
    return replace(state, mode=Editing(saving)), [effect]
