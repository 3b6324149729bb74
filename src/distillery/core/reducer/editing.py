"""Input while a review draft is being edited."""

from __future__ import annotations

from typing import TYPE_CHECKING

from distillery.core.actions import KeyCode
from distillery.core.commands import CreateNextPrIssue, PostComment, PostReview
from distillery.core.reducer.helpers import current_pr_ref
from distillery.core.state import Submitting, Viewing
from distillery.domain.models import ReviewAction

if TYPE_CHECKING:
    from distillery.core.actions import KeyInput
    from distillery.core.commands import Command
    from distillery.core.state import AppState

EMPTY_TEXT_STATUS = "Cannot submit empty text"
MISSING_CONTEXT_STATUS = "Missing PR context"
DEFAULT_ISSUE_TITLE = "Follow-up work"


def handle_input(state: AppState, key: KeyInput) -> list[Command]:
    if key.is_ctrl("s"):
        return submit(state)
    if key.is_key(KeyCode.ESCAPE):
        state.stop_editing()
    elif key.is_key(KeyCode.ENTER):
        state.insert_char("\n")
    elif key.is_key(KeyCode.BACKSPACE):
        state.delete_char()
    elif key.is_key(KeyCode.LEFT):
        state.cursor_left()
    elif key.is_key(KeyCode.RIGHT):
        state.cursor_right()
    elif key.text is not None:
        state.insert_char(key.text)
    return []


def submit(state: AppState) -> list[Command]:
    """Turn the active draft into exactly one submission command."""
    action = state.selected_action
    text = state.current_action_text()
    if not text:
        state.status = EMPTY_TEXT_STATUS
        return []

    ref = current_pr_ref(state)
    if ref is None:
        state.status = MISSING_CONTEXT_STATUS
        state.mode = Viewing()
        return []
    owner, repo, number = ref

    state.mode = Submitting(action)
    if action is ReviewAction.REQUEST_CHANGES:
        return [PostReview(owner=owner, repo=repo, number=number, body=text)]
    if action is ReviewAction.CLARIFICATION_QUESTIONS:
        return [PostComment(owner=owner, repo=repo, number=number, body=text)]
    title, body = split_issue_text(text)
    return [CreateNextPrIssue(owner=owner, repo=repo, number=number, title=title, body=body)]


def split_issue_text(text: str) -> tuple[str, str]:
    """First line becomes the issue title, the rest its body."""
    lines = text.splitlines() or [""]
    title = lines[0].strip() or DEFAULT_ISSUE_TITLE
    return title, "\n".join(lines[1:])
