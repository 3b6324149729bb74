"""The reducer: ``(state, action, config) -> commands``.

All state transitions live here. Keypresses are routed to a sub-reducer by the
current mode; command outcomes are routed by action type. The reducer performs
no I/O and never raises for user input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from distillery.core.actions import (
    CacheLoaded,
    KeyInput,
    PrListLoaded,
    PrLoaded,
    RepoListLoaded,
    StoryGenerated,
    SubmissionResult,
)
from distillery.core.reducer import editing, error, loading, picker, repo, results, viewing
from distillery.core.state import (
    EditingAction,
    Error,
    GeneratingStory,
    LoadingPr,
    LoadingPrList,
    LoadingRepoList,
    PrPicker,
    RepoSelector,
    Submitting,
    Viewing,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from distillery.config import AppConfig
    from distillery.core.actions import Action
    from distillery.core.commands import Command
    from distillery.core.state import AppState

_INPUT_HANDLERS: dict[type, Callable[[AppState, KeyInput], list[Command]]] = {
    RepoSelector: repo.handle_input,
    PrPicker: picker.handle_input,
    Viewing: viewing.handle_input,
    EditingAction: editing.handle_input,
    Error: error.handle_input,
    LoadingRepoList: loading.handle_input,
    LoadingPrList: loading.handle_input,
    LoadingPr: loading.handle_input,
    GeneratingStory: loading.handle_input,
    Submitting: loading.handle_input,
}

_RESULT_HANDLERS: dict[type, Callable[..., list[Command]]] = {
    RepoListLoaded: results.handle_repo_list_loaded,
    PrListLoaded: results.handle_pr_list_loaded,
    PrLoaded: results.handle_pr_loaded,
    StoryGenerated: results.handle_story_generated,
    CacheLoaded: results.handle_cache_loaded,
    SubmissionResult: results.handle_submission_result,
}


def reduce(state: AppState, action: Action, config: AppConfig) -> list[Command]:
    """Apply one action to ``state`` in place and return the commands to run."""
    if isinstance(action, KeyInput):
        return _INPUT_HANDLERS[type(state.mode)](state, action)
    return _RESULT_HANDLERS[type(action)](state, action, config)


__all__ = ["reduce"]
