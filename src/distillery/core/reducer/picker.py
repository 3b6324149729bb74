"""Pull-request picker input."""

from __future__ import annotations

from typing import TYPE_CHECKING

from distillery.core.actions import KeyCode
from distillery.core.commands import FetchPr, FetchPrList
from distillery.core.reducer.helpers import current_repo, quit_app
from distillery.core.state import LoadingPr

if TYPE_CHECKING:
    from distillery.core.actions import KeyInput
    from distillery.core.commands import Command
    from distillery.core.state import AppState


def handle_input(state: AppState, key: KeyInput) -> list[Command]:
    if key.is_char("q"):
        if state.story is None:
            return quit_app(state)
        state.close_picker()
        return []
    if key.is_key(KeyCode.ESCAPE, KeyCode.BACKSPACE):
        return _back(state)
    if key.is_char("j") or key.is_key(KeyCode.DOWN):
        state.picker_down()
        return []
    if key.is_char("k") or key.is_key(KeyCode.UP):
        state.picker_up()
        return []
    if key.is_char("r"):
        repo = current_repo(state)
        if repo is None:
            return []
        owner, name = repo
        return [FetchPrList(owner=owner, repo=name)]
    if key.is_key(KeyCode.ENTER):
        return _select_pr(state)
    return []


def _back(state: AppState) -> list[Command]:
    """Close the overlay, fall back to the repo list, or leave."""
    if state.story is not None:
        state.close_picker()
        return []
    if state.repo_list:
        state.back_to_repo_selector()
        return []
    return quit_app(state)


def _select_pr(state: AppState) -> list[Command]:
    pr = state.selected_pr()
    repo = current_repo(state)
    if pr is None or repo is None:
        return []
    owner, name = repo
    state.reset_for_new_pr()
    state.pr = None
    state.current_repo = repo
    state.current_pr_number = pr.number
    state.mode = LoadingPr()
    return [FetchPr(owner=owner, repo=name, number=pr.number)]
