"""The review document, scrolled by the engine rather than by Textual."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

from distillery.tui.formatters import render_document

if TYPE_CHECKING:
    from distillery.core.state import AppState


class DocumentView(Static):
    """Shows the document starting at ``state.scroll_offset``.

    The offset is owned by the reducer, so the widget never scrolls itself;
    an offset past the end keeps the last line on screen.
    """

    DEFAULT_CLASSES = "document"

    def show(self, state: AppState) -> None:
        lines = render_document(state)
        start = min(state.scroll_offset, max(len(lines) - 1, 0))
        self.update("\n".join(lines[start:]))
