"""Read-only widgets that render ``AppState``."""

from distillery.tui.widgets.document import DocumentView
from distillery.tui.widgets.header import PrHeader
from distillery.tui.widgets.keybinding_hint import KeybindingHint, StatusLine
from distillery.tui.widgets.lists import PickerView, RepoSelectorView
from distillery.tui.widgets.panels import ErrorPanel, LoadingPanel
from distillery.tui.widgets.sidebar import Sidebar

__all__ = [
    "DocumentView",
    "ErrorPanel",
    "KeybindingHint",
    "LoadingPanel",
    "PickerView",
    "PrHeader",
    "RepoSelectorView",
    "Sidebar",
    "StatusLine",
]
