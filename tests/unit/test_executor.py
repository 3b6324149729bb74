"""Unit tests for the command executor: every outcome comes back as data."""

from __future__ import annotations

import pytest
from tests.helpers import FakeCache, FakeGenerator, FakeGitHub, make_pr, make_story

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
)
from distillery.core.executor import CommandExecutor, FileStoryCache
from distillery.domain.models import ReviewAction
from distillery.integrations.github import GhCliError

pytestmark = pytest.mark.unit


def build(
    github: FakeGitHub | None = None,
    generator: FakeGenerator | None = None,
    cache: FakeCache | None = None,
) -> CommandExecutor:
    return CommandExecutor(
        github or FakeGitHub(),
        generator or FakeGenerator(),
        cache or FakeCache(),
    )


class TestFetches:
    @pytest.mark.asyncio
    async def test_fetch_repo_list_ok(self):
        github = FakeGitHub()

        action = await build(github).execute(FetchRepoList())

        assert action == RepoListLoaded(Ok(github.repos))

    @pytest.mark.asyncio
    async def test_fetch_pr_list_passes_repo(self):
        github = FakeGitHub()

        action = await build(github).execute(FetchPrList("acme", "widgets"))

        assert isinstance(action, PrListLoaded)
        assert isinstance(action.result, Ok)
        assert github.calls == [("fetch_pr_list", ("acme", "widgets"))]

    @pytest.mark.asyncio
    async def test_fetch_pr_ok(self):
        action = await build().execute(FetchPr("acme", "widgets", 42))

        assert action == PrLoaded(Ok(make_pr("acme", "widgets", 42)))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("command", "method", "action_type"),
        [
            (FetchRepoList(), "fetch_repo_list", RepoListLoaded),
            (FetchPrList("acme", "widgets"), "fetch_pr_list", PrListLoaded),
            (FetchPr("acme", "widgets", 1), "fetch_pr", PrLoaded),
        ],
    )
    async def test_gh_failures_become_err(self, command, method, action_type):
        github = FakeGitHub()
        github.fail[method] = GhCliError("gh pr view failed: Could not resolve")

        action = await build(github).execute(command)

        assert isinstance(action, action_type)
        assert action.result == Err("gh pr view failed: Could not resolve")

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_captured(self):
        github = FakeGitHub()
        github.fail["fetch_repo_list"] = KeyError("nameWithOwner")

        action = await build(github).execute(FetchRepoList())

        assert isinstance(action, RepoListLoaded)
        assert isinstance(action.result, Err)
        assert "nameWithOwner" in action.result.message

    @pytest.mark.asyncio
    async def test_empty_error_message_falls_back_to_type_name(self):
        github = FakeGitHub()
        github.fail["fetch_repo_list"] = TimeoutError()

        action = await build(github).execute(FetchRepoList())

        assert action == RepoListLoaded(Err("TimeoutError"))


class TestGeneration:
    @pytest.mark.asyncio
    async def test_generate_story_ok(self):
        story = make_story()
        generator = FakeGenerator(story)
        pr = make_pr()

        action = await build(generator=generator).execute(GenerateStory(pr))

        assert action == StoryGenerated(Ok(story))
        assert generator.prompts == [pr]

    @pytest.mark.asyncio
    async def test_generate_story_error_keeps_raw_text(self):
        generator = FakeGenerator(error=RuntimeError("OpenAI API error: rate limited"))

        action = await build(generator=generator).execute(GenerateStory(make_pr()))

        assert action == StoryGenerated(Err("OpenAI API error: rate limited"))


class TestCache:
    @pytest.mark.asyncio
    async def test_load_hit_and_miss(self):
        story = make_story()

        assert await build(cache=FakeCache(story)).execute(LoadCache("x")) == CacheLoaded(story)
        assert await build(cache=FakeCache()).execute(LoadCache("x")) == CacheLoaded(None)

    @pytest.mark.asyncio
    async def test_broken_cache_is_a_miss(self):
        cache = FakeCache()

        def fail(path):
            raise OSError("disk gone")

        cache.load = fail

        assert await build(cache=cache).execute(LoadCache("x")) == CacheLoaded(None)

    @pytest.mark.asyncio
    async def test_save_produces_no_action(self):
        cache = FakeCache()
        story = make_story()

        assert await build(cache=cache).execute(SaveCache("out.json", story)) is None
        assert cache.saved == [("out.json", story)]

    @pytest.mark.asyncio
    async def test_save_failure_is_swallowed(self):
        cache = FakeCache()

        def fail(path, story):
            raise OSError("read-only")

        cache.save = fail

        assert await build(cache=cache).execute(SaveCache("out.json", make_story())) is None

    @pytest.mark.asyncio
    async def test_file_cache_round_trips_through_disk(self, tmp_path):
        path = str(tmp_path / "nested" / "cache.json")
        story = make_story()
        executor = CommandExecutor(FakeGitHub(), FakeGenerator(), FileStoryCache())

        await executor.execute(SaveCache(path, story))

        assert await executor.execute(LoadCache(path)) == CacheLoaded(story)


class TestSubmissions:
    @pytest.mark.asyncio
    async def test_post_review(self):
        github = FakeGitHub()

        action = await build(github).execute(PostReview("acme", "widgets", 42, "fix it"))

        assert action == SubmissionResult(ReviewAction.REQUEST_CHANGES, Ok(None))
        assert github.calls == [("post_review", ("acme", "widgets", 42, "fix it"))]

    @pytest.mark.asyncio
    async def test_post_comment_failure(self):
        github = FakeGitHub()
        github.fail["post_comment"] = GhCliError("gh pr comment failed: HTTP 403")

        action = await build(github).execute(PostComment("acme", "widgets", 42, "why?"))

        assert action == SubmissionResult(
            ReviewAction.CLARIFICATION_QUESTIONS, Err("gh pr comment failed: HTTP 403")
        )

    @pytest.mark.asyncio
    async def test_create_next_pr_issue(self):
        github = FakeGitHub()

        action = await build(github).execute(
            CreateNextPrIssue("acme", "widgets", 42, "Add retries", "- backoff")
        )

        assert action == SubmissionResult(ReviewAction.NEXT_PR, Ok(None))
        assert github.calls == [
            ("create_next_pr_issue", ("acme", "widgets", 42, "Add retries", "- backoff"))
        ]
