"""Carry out state-machine effects and turn their outcomes into events."""

from __future__ import annotations

import logging

from .clipboard import copy_to_clipboard
from .deck import load_deck, reload_slide, save_slide
from .errors import ClipboardError, ClipboardUnsupported, SlidettyError
from .state import (
    ClipboardFailed,
    CopyToClipboard,
    DeckLoaded,
    DeckLoadFailed,
    Effect,
    Event,
    LoadDeck,
    ReloadSlide,
    SlideReloaded,
    SlideReloadFailed,
    SlideSaved,
    SlideSaveFailed,
    WriteSlide,
)

logger = logging.getLogger(__name__)


def perform_effect(effect: Effect) -> Event | None:
    """Run one I/O effect synchronously.

    Returns the event reporting the outcome, or None when there is nothing to
    report (a successful clipboard copy).  Timer and quit effects belong to
    the host and are not handled here.
    """
    logger.debug("Performing %s", type(effect).__name__)

    if isinstance(effect, LoadDeck):
        try:
            return DeckLoaded(load_deck(effect.directory))
        except SlidettyError as exc:
            return DeckLoadFailed(str(exc))

    if isinstance(effect, ReloadSlide):
        try:
            slide = reload_slide(effect.directory, effect.index)
        except SlidettyError as exc:
            return SlideReloadFailed(effect.index, str(exc))
        return SlideReloaded(effect.index, slide, effect.version)

    if isinstance(effect, WriteSlide):
        try:
            save_slide(effect.path, effect.content)
        except SlidettyError as exc:
            return SlideSaveFailed(str(exc))
        return SlideSaved(effect.index, effect.content, effect.path)

    if isinstance(effect, CopyToClipboard):
        try:
            copy_to_clipboard(effect.text)
        except ClipboardUnsupported as exc:
            logger.info("Clipboard unsupported: %s", exc)
            return ClipboardFailed(str(exc), unsupported=True)
        except ClipboardError as exc:
            logger.warning("Clipboard copy failed: %s", exc)
            return ClipboardFailed(str(exc))
        return None

    raise ValueError(f"Effect {effect!r} must be handled by the host")
