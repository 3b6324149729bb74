"""Repository selector input."""

from __future__ import annotations

from typing import TYPE_CHECKING

from distillery.core.actions import KeyCode
from distillery.core.commands import FetchPrList, FetchRepoList
from distillery.core.reducer.helpers import quit_app
from distillery.core.state import LoadingPrList, LoadingRepoList

if TYPE_CHECKING:
    from distillery.core.actions import KeyInput
    from distillery.core.commands import Command
    from distillery.core.state import AppState


def handle_input(state: AppState, key: KeyInput) -> list[Command]:
    if key.is_char("q") or key.is_key(KeyCode.ESCAPE):
        return quit_app(state)
    if key.is_char("j") or key.is_key(KeyCode.DOWN):
        state.repo_selector_down()
        return []
    if key.is_char("k") or key.is_key(KeyCode.UP):
        state.repo_selector_up()
        return []
    if key.is_char("r"):
        state.mode = LoadingRepoList()
        return [FetchRepoList()]
    if key.is_key(KeyCode.ENTER):
        return _select_repo(state)
    return []


def _select_repo(state: AppState) -> list[Command]:
    repo = state.selected_repo()
    if repo is None:
        return []
    # A new repository leaves nothing of the previous PR behind.
    state.reset_for_new_pr()
    state.pr = None
    state.current_repo = (repo.owner, repo.name)
    state.current_pr_number = None
    state.mode = LoadingPrList()
    return [FetchPrList(owner=repo.owner, repo=repo.name)]
