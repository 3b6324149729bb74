"""Bottom bars: status message and per-mode keybinding hints."""

from __future__ import annotations

from textual.reactive import reactive
from textual.widgets import Static

from distillery.tui.formatters import render_hints


class KeybindingHint(Static):
    """Shows (key, description) hints for the current mode."""

    DEFAULT_CLASSES = "keybinding-hint"

    hints: reactive[str] = reactive("")

    def watch_hints(self, hints: str) -> None:
        self.update(hints)

    def show_hints(self, hint_list: list[tuple[str, str]]) -> None:
        self.hints = render_hints(hint_list) if hint_list else ""


class StatusLine(Static):
    DEFAULT_CLASSES = "status-line"
