"""Sidebar widget: review progress, features, and the selected feature's diffs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

from distillery.tui.formatters import render_sidebar

if TYPE_CHECKING:
    from distillery.core.state import AppState


class Sidebar(Static):
    DEFAULT_CLASSES = "sidebar"

    def show(self, state: AppState) -> None:
        self.update(render_sidebar(state))
