"""Input while reading the story."""

from __future__ import annotations

from typing import TYPE_CHECKING

from distillery.core.actions import KeyCode
from distillery.core.commands import FetchPrList, FetchRepoList
from distillery.core.reducer.helpers import current_repo, quit_app
from distillery.domain.models import ReviewAction

if TYPE_CHECKING:
    from distillery.core.actions import KeyInput
    from distillery.core.commands import Command
    from distillery.core.state import AppState


def handle_input(state: AppState, key: KeyInput) -> list[Command]:
    if key.is_char("q"):
        return quit_app(state)

    if key.is_char("o"):
        repo = current_repo(state)
        if repo is None:
            state.status = "No repository context"
            return []
        owner, name = repo
        return [FetchPrList(owner=owner, repo=name)]
    if key.is_char("O"):
        return [FetchRepoList()]

    if key.is_char("j") or key.is_key(KeyCode.DOWN):
        state.scroll_by(1)
    elif key.is_char("k") or key.is_key(KeyCode.UP):
        state.scroll_by(-1)
    elif key.is_ctrl("d") or key.is_char(" ") or key.is_key(KeyCode.PAGE_DOWN):
        state.page_down()
    elif key.is_ctrl("u") or key.is_char("b") or key.is_key(KeyCode.PAGE_UP):
        state.page_up()
    elif key.is_char("n") or key.is_key(KeyCode.TAB):
        state.next_feature()
    elif key.is_char("p") or key.is_key(KeyCode.BACKTAB):
        state.prev_feature()
    elif key.is_char("l") or key.is_key(KeyCode.RIGHT):
        state.next_diff()
    elif key.is_char("h") or key.is_key(KeyCode.LEFT):
        state.prev_diff()
    elif key.is_char("v"):
        state.toggle_viewed()
    elif key.is_key(KeyCode.ENTER):
        state.start_editing()
    elif key.text is not None:
        action = ReviewAction.from_digit(key.text)
        if action is not None:
            state.select_action(action)
    return []
