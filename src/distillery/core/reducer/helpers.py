"""Context lookups shared by the sub-reducers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from distillery.domain.models import PrContext

if TYPE_CHECKING:
    from distillery.core.state import AppState

CACHED_PR_TITLE = "Cached PR"


def current_repo(state: AppState) -> tuple[str, str] | None:
    """(owner, repo) of the repository in focus, if any."""
    if state.current_repo is not None:
        return state.current_repo
    if state.pr is not None:
        return (state.pr.owner, state.pr.repo)
    return None


def current_pr_ref(state: AppState) -> tuple[str, str, int] | None:
    """(owner, repo, number) of the pull request in focus, if any."""
    if state.pr is not None:
        return (state.pr.owner, state.pr.repo, state.pr.number)
    if state.current_repo is not None and state.current_pr_number is not None:
        owner, repo = state.current_repo
        return (owner, repo, state.current_pr_number)
    return None


def ensure_cached_pr_context(state: AppState) -> None:
    """Give a cache-loaded story a placeholder PR so headers and submissions work."""
    if state.pr is not None:
        return
    ref = current_pr_ref(state)
    if ref is None:
        return
    owner, repo, number = ref
    state.pr = PrContext(owner=owner, repo=repo, number=number, title=CACHED_PR_TITLE)


def quit_app(state: AppState) -> list:
    state.should_quit = True
    return []
