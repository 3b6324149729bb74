"""Input on the error screen: quit or retry the most specific fetch."""

from __future__ import annotations

from typing import TYPE_CHECKING

from distillery.core.commands import FetchPr, FetchPrList, FetchRepoList
from distillery.core.reducer.helpers import current_pr_ref, current_repo, quit_app
from distillery.core.state import LoadingPr, LoadingPrList, LoadingRepoList

if TYPE_CHECKING:
    from distillery.core.actions import KeyInput
    from distillery.core.commands import Command
    from distillery.core.state import AppState


def handle_input(state: AppState, key: KeyInput) -> list[Command]:
    if key.is_char("q"):
        return quit_app(state)
    if key.is_char("r"):
        return retry(state)
    return []


def retry(state: AppState) -> list[Command]:
    pr_ref = current_pr_ref(state)
    if pr_ref is not None:
        owner, repo, number = pr_ref
        state.mode = LoadingPr()
        return [FetchPr(owner=owner, repo=repo, number=number)]
    repo_ref = current_repo(state)
    if repo_ref is not None:
        owner, repo = repo_ref
        state.mode = LoadingPrList()
        return [FetchPrList(owner=owner, repo=repo)]
    state.mode = LoadingRepoList()
    return [FetchRepoList()]
