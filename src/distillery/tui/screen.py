"""The single review screen: routes keys to the engine and renders its state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.containers import Horizontal, Vertical
from textual.screen import Screen

from distillery.core.keys import to_key_input
from distillery.core.state import (
    BUSY_MODES,
    Error,
    PrPicker,
    RepoSelector,
    Submitting,
)
from distillery.keybindings import hints_for
from distillery.tui.formatters import loading_message, render_status
from distillery.tui.widgets import (
    DocumentView,
    ErrorPanel,
    KeybindingHint,
    LoadingPanel,
    PickerView,
    PrHeader,
    RepoSelectorView,
    Sidebar,
    StatusLine,
)

if TYPE_CHECKING:
    from textual import events
    from textual.app import ComposeResult

    from distillery.core.engine import Engine


class ReviewScreen(Screen[None]):
    """Every keypress becomes a ``KeyInput`` for the engine.

    Screen bindings are not inherited, so Tab and Shift+Tab reach the reducer
    instead of moving focus.
    """

    inherit_bindings = False

    def __init__(self, engine: Engine, **kwargs) -> None:
        super().__init__(**kwargs)
        self.engine = engine

    def compose(self) -> ComposeResult:
        with Vertical(id="body"):
            yield PrHeader(id="pr-header")
            with Horizontal(id="content"):
                yield Sidebar(id="sidebar")
                yield DocumentView(id="document")
                yield PickerView(id="picker")
            yield RepoSelectorView(id="repo-selector")
            yield LoadingPanel(id="loading")
            yield ErrorPanel(id="error")
        yield StatusLine(id="status")
        yield KeybindingHint(id="hints")

    def on_mount(self) -> None:
        self.refresh_view()

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        key = to_key_input(event.key, event.character)
        if key is None:
            return
        self.engine.enqueue(key)
        if not self.engine.is_draining:
            self.app.run_worker(self.engine.run_until_idle(), group="engine", exclusive=False)

    def refresh_view(self) -> None:
        """Repaint every widget from the engine's state."""
        state = self.engine.state
        mode = state.mode

        busy = isinstance(mode, BUSY_MODES) and not isinstance(mode, Submitting)
        picker = isinstance(mode, PrPicker)
        overlay = picker and state.show_picker and state.story is not None
        main = not busy and not picker and not isinstance(mode, (RepoSelector, Error))

        header = self.query_one(PrHeader)
        sidebar = self.query_one(Sidebar)
        document = self.query_one(DocumentView)
        picker_view = self.query_one(PickerView)
        repo_view = self.query_one(RepoSelectorView)
        loading = self.query_one(LoadingPanel)
        error = self.query_one(ErrorPanel)

        self.query_one("#content").display = main or picker
        header.display = main or overlay
        sidebar.display = main or overlay
        document.display = main
        picker_view.display = picker
        repo_view.display = isinstance(mode, RepoSelector)
        error.display = isinstance(mode, Error)
        loading.set_active(busy)

        if header.display:
            header.show(state)
        if sidebar.display:
            sidebar.show(state)
        if main:
            document.show(state)
        if picker:
            picker_view.show(state, overlay=overlay)
        if isinstance(mode, RepoSelector):
            repo_view.show(state)
        if isinstance(mode, Error):
            error.show(mode.message)
        if busy:
            loading.message = loading_message(mode)

        self.query_one(StatusLine).update(render_status(state))
        self.query_one(KeybindingHint).show_hints(hints_for(state))
