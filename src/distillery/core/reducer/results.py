"""Folding completed command outcomes back into state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from distillery.core.actions import Err, Ok
from distillery.core.commands import FetchPr, GenerateStory, SaveCache
from distillery.core.reducer.helpers import current_pr_ref, ensure_cached_pr_context
from distillery.core.state import (
    Error,
    GeneratingStory,
    LoadingPr,
    PrPicker,
    RepoSelector,
    Viewing,
)

if TYPE_CHECKING:
    from distillery.config import AppConfig
    from distillery.core.actions import (
        CacheLoaded,
        PrListLoaded,
        PrLoaded,
        RepoListLoaded,
        StoryGenerated,
        SubmissionResult,
    )
    from distillery.core.commands import Command
    from distillery.core.state import AppState

CACHE_HIT_STATUS = "Loaded from cache"
MISSING_CONTEXT_ERROR = "Missing PR context"


def handle_repo_list_loaded(
    state: AppState, action: RepoListLoaded, config: AppConfig
) -> list[Command]:
    result = action.result
    if isinstance(result, Err):
        state.mode = Error(f"Failed to fetch repo list: {result.message}")
        return []
    state.repo_list = list(result.value)
    state.repo_selected = 0
    state.show_picker = False
    state.mode = RepoSelector()
    return []


def handle_pr_list_loaded(
    state: AppState, action: PrListLoaded, config: AppConfig
) -> list[Command]:
    result = action.result
    if isinstance(result, Err):
        state.mode = Error(f"Failed to fetch PR list: {result.message}")
        return []
    state.pr_list = list(result.value)
    state.picker_selected = 0
    # Over an existing story the picker is an overlay; otherwise it is the screen.
    state.show_picker = state.story is not None
    state.mode = PrPicker()
    return []


def handle_pr_loaded(state: AppState, action: PrLoaded, config: AppConfig) -> list[Command]:
    result = action.result
    if isinstance(result, Err):
        state.mode = Error(result.message)
        return []
    pr = result.value
    state.current_repo = (pr.owner, pr.repo)
    state.current_pr_number = pr.number
    state.pr = pr
    state.mode = GeneratingStory()
    return [GenerateStory(pr=pr)]


def handle_story_generated(
    state: AppState, action: StoryGenerated, config: AppConfig
) -> list[Command]:
    result = action.result
    if isinstance(result, Err):
        state.mode = Error(result.message)
        return []
    story = result.value
    state.load_story(story)
    state.show_picker = False
    state.mode = Viewing()
    return [SaveCache(path=config.cache_file, story=story)]


def handle_cache_loaded(state: AppState, action: CacheLoaded, config: AppConfig) -> list[Command]:
    if action.story is not None:
        state.load_story(action.story)
        state.show_picker = False
        state.status = CACHE_HIT_STATUS
        state.mode = Viewing()
        ensure_cached_pr_context(state)
        return []

    ref = current_pr_ref(state)
    if ref is None:
        state.mode = Error(MISSING_CONTEXT_ERROR)
        return []
    owner, repo, number = ref
    state.mode = LoadingPr()
    return [FetchPr(owner=owner, repo=repo, number=number)]


def handle_submission_result(
    state: AppState, action: SubmissionResult, config: AppConfig
) -> list[Command]:
    if isinstance(action.result, Ok):
        state.status = f"{action.action.title} submitted successfully!"
    else:
        state.status = f"Error: {action.result.message}"
    state.show_picker = False
    state.mode = Viewing()
    return []
