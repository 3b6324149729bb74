"""Loading and error panels."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from textual.reactive import reactive
from textual.widgets import Static

from distillery.tui.formatters import render_error

if TYPE_CHECKING:
    from textual.timer import Timer

SPINNER_FRAMES = ["⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷"]
SPINNER_INTERVAL_MS = 100


class LoadingPanel(Static):
    """Static description of what is being awaited, with a spinner."""

    DEFAULT_CLASSES = "loading"

    message: reactive[str] = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._frame_index = 0
        self._timer: Timer | None = None

    def on_mount(self) -> None:
        self._timer = self.set_interval(
            SPINNER_INTERVAL_MS / 1000, self._next_frame, pause=not self.display
        )

    def watch_message(self, _message: str) -> None:
        self._update_display()

    def set_active(self, active: bool) -> None:
        """Show the panel and run the spinner only while something is loading."""
        self.display = active
        if self._timer is None:
            return
        if active:
            self._timer.resume()
        else:
            self._timer.pause()

    def _next_frame(self) -> None:
        self._frame_index = (self._frame_index + 1) % len(SPINNER_FRAMES)
        self._update_display()

    def _update_display(self) -> None:
        frame = SPINNER_FRAMES[self._frame_index]
        self.update(f"\n[bold yellow]{frame} {escape(self.message)}[/]")


class ErrorPanel(Static):
    DEFAULT_CLASSES = "error-panel"

    def show(self, message: str) -> None:
        self.update(render_error(message))
