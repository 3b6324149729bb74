"""Selection lists: pull-request picker and repository selector."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

from distillery.tui.formatters import render_picker, render_repo_selector

if TYPE_CHECKING:
    from distillery.core.state import AppState


class PickerView(Static):
    """PR picker; bordered as "PR Picker" when shown over a loaded story."""

    DEFAULT_CLASSES = "picker"

    def show(self, state: AppState, *, overlay: bool) -> None:
        self.set_class(overlay, "-overlay")
        self.border_title = "PR Picker" if overlay else "Pull Requests"
        self.update(render_picker(state))


class RepoSelectorView(Static):
    DEFAULT_CLASSES = "repo-selector"

    def on_mount(self) -> None:
        self.border_title = "Repositories"

    def show(self, state: AppState) -> None:
        self.update(render_repo_selector(state))
