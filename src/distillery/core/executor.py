"""Executes commands against the collaborators and reports outcomes as actions.

This is the only place in the core that catches exceptions: whatever a
collaborator raises becomes an ``Err`` carried by the result action, so the
reducer sees plain data and the terminal never crashes on an I/O failure.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Protocol

from distillery.core.actions import (
    CacheLoaded,
    Err,
    Ok,
    PrListLoaded,
    PrLoaded,
    RepoListLoaded,
    StoryGenerated,
    SubmissionResult,
)
from distillery.core.commands import (
    CreateNextPrIssue,
    FetchPr,
    FetchPrList,
    FetchRepoList,
    GenerateStory,
    LoadCache,
    PostComment,
    PostReview,
    SaveCache,
    describe_command,
)
from distillery.domain.models import ReviewAction
from distillery.integrations import cache as story_cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from distillery.core.actions import Action
    from distillery.core.commands import Command
    from distillery.domain.models import PrContext, Story
    from distillery.integrations.github import GitHubClient

logger = logging.getLogger(__name__)


class StorySource(Protocol):
    """Port for the narrative generator."""

    async def generate(self, pr: PrContext) -> Story: ...


class StoryCache(Protocol):
    """Port for the local story cache."""

    def load(self, path: str) -> Story | None: ...

    def save(self, path: str, story: Story) -> None: ...


class FileStoryCache:
    """:class:`StoryCache` backed by a JSON file on disk."""

    def load(self, path: str) -> Story | None:
        return story_cache.load_story(path)

    def save(self, path: str, story: Story) -> None:
        story_cache.save_story(path, story)


class CommandExecutor:
    """Runs one command at a time and turns its outcome into an action.

    ``execute`` returns ``None`` for fire-and-forget commands (cache writes).
    """

    def __init__(
        self,
        github: GitHubClient,
        generator: StorySource,
        cache: StoryCache | None = None,
    ) -> None:
        self._github = github
        self._generator = generator
        self._cache = cache or FileStoryCache()
        self._handlers: dict[type, Callable[..., Awaitable[Action | None]]] = {
            FetchRepoList: self._fetch_repo_list,
            FetchPrList: self._fetch_pr_list,
            FetchPr: self._fetch_pr,
            GenerateStory: self._generate_story,
            LoadCache: self._load_cache,
            SaveCache: self._save_cache,
            PostReview: self._post_review,
            PostComment: self._post_comment,
            CreateNextPrIssue: self._create_next_pr_issue,
        }

    async def execute(self, command: Command) -> Action | None:
        logger.debug("Executing %s", describe_command(command))
        return await self._handlers[type(command)](command)

    async def _fetch_repo_list(self, command: FetchRepoList) -> Action:
        try:
            repos = await self._github.fetch_repo_list()
        except Exception as exc:
            return RepoListLoaded(_failure(command, exc))
        return RepoListLoaded(Ok(repos))

    async def _fetch_pr_list(self, command: FetchPrList) -> Action:
        try:
            prs = await self._github.fetch_pr_list(command.owner, command.repo)
        except Exception as exc:
            return PrListLoaded(_failure(command, exc))
        return PrListLoaded(Ok(prs))

    async def _fetch_pr(self, command: FetchPr) -> Action:
        try:
            pr = await self._github.fetch_pr(command.owner, command.repo, command.number)
        except Exception as exc:
            return PrLoaded(_failure(command, exc))
        return PrLoaded(Ok(pr))

    async def _generate_story(self, command: GenerateStory) -> Action:
        try:
            story = await self._generator.generate(command.pr)
        except Exception as exc:
            return StoryGenerated(_failure(command, exc))
        return StoryGenerated(Ok(story))

    async def _load_cache(self, command: LoadCache) -> Action:
        try:
            story = await asyncio.to_thread(self._cache.load, command.path)
        except Exception as exc:
            # A broken cache is a miss; the reducer falls back to fetching.
            _failure(command, exc)
            story = None
        return CacheLoaded(story)

    async def _save_cache(self, command: SaveCache) -> None:
        try:
            await asyncio.to_thread(self._cache.save, command.path, command.story)
        except Exception as exc:
            _failure(command, exc)

    async def _post_review(self, command: PostReview) -> Action:
        action = ReviewAction.REQUEST_CHANGES
        try:
            await self._github.post_review(
                command.owner, command.repo, command.number, command.body
            )
        except Exception as exc:
            return SubmissionResult(action, _failure(command, exc))
        return SubmissionResult(action, Ok(None))

    async def _post_comment(self, command: PostComment) -> Action:
        action = ReviewAction.CLARIFICATION_QUESTIONS
        try:
            await self._github.post_comment(
                command.owner, command.repo, command.number, command.body
            )
        except Exception as exc:
            return SubmissionResult(action, _failure(command, exc))
        return SubmissionResult(action, Ok(None))

    async def _create_next_pr_issue(self, command: CreateNextPrIssue) -> Action:
        action = ReviewAction.NEXT_PR
        try:
            await self._github.create_next_pr_issue(
                command.owner, command.repo, command.number, command.title, command.body
            )
        except Exception as exc:
            return SubmissionResult(action, _failure(command, exc))
        return SubmissionResult(action, Ok(None))


_EXPECTED_ERRORS: tuple[type[BaseException], ...] = (RuntimeError, OSError, ValueError)


def _failure(command: Command, exc: Exception) -> Err:
    """Log a collaborator failure and wrap it for the reducer."""
    if isinstance(exc, _EXPECTED_ERRORS):
        logger.warning("%s failed: %s", describe_command(command), exc)
    else:
        logger.exception("Unexpected error in %s", describe_command(command))
    return Err(str(exc) or type(exc).__name__)
