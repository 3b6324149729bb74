"""Keybindings for the Distillery TUI.

Review keys are interpreted by the reducer, not by Textual bindings; the
tables here only describe them for the hint bar. Textual ``Binding`` objects
are used for the few app-level keys that sit outside the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.binding import Binding, BindingType

from distillery.core.state import (
    EditingAction,
    Error,
    PrPicker,
    RepoSelector,
    Submitting,
    Viewing,
)

if TYPE_CHECKING:
    from distillery.core.state import AppState

type Hint = tuple[str, str]

# =============================================================================
# App Bindings
# =============================================================================

APP_BINDINGS: list[BindingType] = [
    Binding("f12", "toggle_debug_log", "Debug", show=False, priority=True),
]

DEBUG_LOG_BINDINGS: list[BindingType] = [
    Binding("escape", "close", "Close"),
    Binding("f12", "close", "Close", show=False),
    Binding("c", "clear_logs", "Clear"),
    Binding("s", "save_logs", "Save"),
]

# =============================================================================
# Per-mode hints
# =============================================================================

LOADING_HINTS: list[Hint] = [("q", "Quit")]

REPO_SELECTOR_HINTS: list[Hint] = [
    ("j/↓", "Down"),
    ("k/↑", "Up"),
    ("Enter", "Select"),
    ("r", "Refresh"),
    ("q", "Quit"),
]

PICKER_BACK_HINTS: list[Hint] = [
    ("j/↓", "Down"),
    ("k/↑", "Up"),
    ("Enter", "Select"),
    ("Esc", "Back"),
    ("r", "Refresh"),
    ("q", "Quit"),
]

PICKER_CANCEL_HINTS: list[Hint] = [
    ("j/↓", "Down"),
    ("k/↑", "Up"),
    ("Enter", "Select"),
    ("r", "Refresh"),
    ("Esc", "Cancel"),
]

VIEWING_HINTS: list[Hint] = [
    ("j/k", "Scroll"),
    ("Space/b", "Page"),
    ("h/l", "Diff"),
    ("n/p", "Feature"),
    ("v", "Viewed"),
    ("1-3", "Actions"),
    ("Enter", "Edit"),
    ("o", "PRs"),
    ("O", "Repos"),
    ("q", "Quit"),
]

ERROR_HINTS: list[Hint] = [("q", "Quit"), ("r", "Retry")]


def hints_for(state: AppState) -> list[Hint]:
    """(key, description) pairs for the bar under the current mode."""
    mode = state.mode
    if isinstance(mode, RepoSelector):
        return REPO_SELECTOR_HINTS
    if isinstance(mode, PrPicker):
        if state.repo_list and not state.show_picker:
            return PICKER_BACK_HINTS
        return PICKER_CANCEL_HINTS
    if isinstance(mode, Viewing):
        return VIEWING_HINTS
    if isinstance(mode, EditingAction):
        return [
            ("Editing", mode.action.title),
            ("Type", "Edit text"),
            ("Ctrl+S", "Submit"),
            ("Esc", "Done"),
        ]
    if isinstance(mode, Submitting):
        return [("Submitting", mode.action.title)]
    if isinstance(mode, Error):
        return ERROR_HINTS
    return LOADING_HINTS
