"""Full-screen textual host for the slide state machine."""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import ProgressBar, Static, TextArea

from .editor import EditorSession
from .effects import perform_effect
from .render import fit_lines, render_slide_text, status_bar
from .state import (
    CANCEL_KEY,
    COPY_KEYS,
    SAVE_KEY,
    AppState,
    EditorChanged,
    Editing,
    Effect,
    Event,
    KeyPress,
    Quit,
    Resize,
    ScheduleTick,
    Tick,
    initial_state,
    startup_effects,
    update,
    visible_content,
)

logger = logging.getLogger(__name__)


class EditorScreen(ModalScreen):
    """Floating panel with a text area for the slide being edited."""

    BINDINGS = [
        Binding("escape", "cancel", "Close", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
    ]

    DEFAULT_CSS = """
    EditorScreen {
        align: center middle;
    }

    #editor_panel {
        border: round #7c3aed;
        background: #0f172a;
        padding: 1 2;
    }

    #editor_help {
        color: #94a3b8;
        height: auto;
    }
    """

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        with Vertical(id="editor_panel"):
            yield TextArea(self.session.buffer, id="editor_text")
            yield Static(id="editor_help")

    def on_mount(self) -> None:
        self.apply_session(self.session)
        self.query_one("#editor_text", TextArea).focus()

    def apply_session(self, session: EditorSession) -> None:
        self.session = session
        layout = session.layout
        panel = self.query_one("#editor_panel")
        panel.styles.width = layout.panel_width
        panel.styles.height = layout.panel_height
        self.query_one("#editor_text", TextArea).styles.height = layout.editor_height

        help_lines = [session.path_label, "esc to close - ctrl+s to save"]
        if session.saving:
            help_lines.append("saving...")
        if session.error:
            help_lines.append(f"error: {session.error}")
        self.query_one("#editor_help", Static).update(Text("\n".join(help_lines)))

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.app.feed(EditorChanged(event.text_area.text))

    def action_cancel(self) -> None:
        self.app.feed(KeyPress(CANCEL_KEY))

    def action_save(self) -> None:
        self.app.feed(KeyPress(SAVE_KEY))


class SlideApp(App):
    """Presents a slides directory; all decisions are made by ``state.update``."""

    # ctrl+c quits outright, even with the editor open.
    BINDINGS = [Binding("ctrl+c", "quit", "Quit", show=False, priority=True)]

    CSS = """
    #slide {
        height: 1fr;
    }

    #commands {
        height: auto;
        color: $text-muted;
        padding: 0 2;
    }

    #notice {
        height: 1;
        color: $warning;
        padding: 0 2;
    }

    #status {
        height: 1;
    }

    #progress {
        height: 1;
        padding: 0 2;
    }

    #progress Bar {
        width: 1fr;
    }
    """

    def __init__(self, directory: Path, theme: str | None = None) -> None:
        super().__init__()
        self.state: AppState = initial_state(directory, theme)
        self._editor: EditorScreen | None = None
        self._view_ready = False

    def compose(self) -> ComposeResult:
        self._slide = Static(id="slide")
        self._commands = Static(id="commands")
        self._notice = Static(id="notice")
        self._status = Static(id="status")
        self._progress = ProgressBar(total=100, show_eta=False, show_percentage=False, id="progress")
        yield self._slide
        yield self._commands
        yield self._notice
        yield self._status
        yield self._progress

    def on_mount(self) -> None:
        self._view_ready = True
        self.feed(Resize(self.size.width, self.size.height))
        for effect in startup_effects(self.state):
            self._run_effect(effect)

    def on_resize(self, event: events.Resize) -> None:
        self.feed(Resize(event.size.width, event.size.height))

    def on_key(self, event: events.Key) -> None:
        if self.state.editing:
            return
        self.feed(KeyPress(event.key))

    # -- event loop -------------------------------------------------------

    def feed(self, event: Event | None) -> None:
        if event is None:
            return
        self.state, effects = update(self.state, event)
        for effect in effects:
            self._run_effect(effect)
        self._sync()

    def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, Quit):
            self.exit()
        elif isinstance(effect, ScheduleTick):
            self.set_timer(effect.delay, partial(self.feed, Tick(effect.generation)))
        else:
            # Results come back through feed as a later, ordinary event.
            self.call_later(self._perform, effect)

    def _perform(self, effect: Effect) -> None:
        self.feed(perform_effect(effect))

    # -- view -------------------------------------------------------------

    def _sync(self) -> None:
        mode = self.state.mode
        if isinstance(mode, Editing):
            if self._editor is None:
                self._editor = EditorScreen(mode.session)
                self.push_screen(self._editor)
            elif self._editor.is_mounted:
                self._editor.apply_session(mode.session)
        elif self._editor is not None:
            self._editor = None
            self.pop_screen()
        self._render_main()

    def _render_main(self) -> None:
        if not self._view_ready:
            return
        state = self.state
        note = state.notification
        self._notice.display = note is not None
        self._notice.update(note.message if note else "")

        slide = state.current_slide
        hint = ""
        if slide is not None and not state.error:
            hint = "  ".join(
                f"[{key}] {cmd}" for key, cmd in zip(COPY_KEYS, slide.commands)
            )
        self._commands.display = bool(hint)
        self._commands.update(Text(hint, no_wrap=True, overflow="ellipsis"))

        if state.error:
            self._slide.update(Text(f"Error: {state.error}\n\nPress 'r' to retry, 'q' to quit."))
        elif not state.slides:
            message = "Loading slides..." if not state.loaded else f"No slides found in {state.directory}"
            self._slide.update(Text(f"{message}\n\nPress 'q' to quit."))
        else:
            reserved = 2 + (1 if note else 0) + (1 if hint else 0)
            rendered = render_slide_text(visible_content(state) or "", state.renderer)
            fitted = fit_lines(rendered, state.height - reserved)
            self._slide.update(Text.from_ansi(fitted))

        showing_deck = bool(state.slides) and not state.error
        self._status.display = showing_deck
        self._progress.display = showing_deck
        if showing_deck:
            self._status.update(
                status_bar(state.current, len(state.slides), state.author, state.title, state.width)
            )
            self._progress.update(progress=state.progress * 100)
