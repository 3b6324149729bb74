"""Header widget: app name, PR reference and title."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

from distillery.tui.formatters import render_header

if TYPE_CHECKING:
    from distillery.core.state import AppState


class PrHeader(Static):
    DEFAULT_CLASSES = "pr-header"

    def show(self, state: AppState) -> None:
        self.update(render_header(state))
