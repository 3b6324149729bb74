"""Shared fixtures for app-level smoke tests."""

from __future__ import annotations

import pytest
from tests.helpers import ScriptedExecutor, make_pr, make_pr_item, make_repo_item, make_story

from distillery.core.actions import (
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
    PostComment,
    PostReview,
)
from distillery.domain.models import ReviewAction


@pytest.fixture
def happy_responses():
    """Scripted results for a repository with two PRs and a four-diff story."""
    return {
        FetchRepoList: lambda command: RepoListLoaded(
            Ok([make_repo_item("acme", "widgets"), make_repo_item("acme", "gears")])
        ),
        FetchPrList: lambda command: PrListLoaded(Ok([make_pr_item(7), make_pr_item(42)])),
        FetchPr: lambda command: PrLoaded(
            Ok(make_pr(command.owner, command.repo, command.number))
        ),
        GenerateStory: lambda command: StoryGenerated(Ok(make_story((3, 1)))),
        PostReview: lambda command: SubmissionResult(ReviewAction.REQUEST_CHANGES, Ok(None)),
        PostComment: lambda command: SubmissionResult(
            ReviewAction.CLARIFICATION_QUESTIONS, Ok(None)
        ),
        CreateNextPrIssue: lambda command: SubmissionResult(ReviewAction.NEXT_PR, Ok(None)),
    }


@pytest.fixture
def scripted_executor(happy_responses) -> ScriptedExecutor:
    return ScriptedExecutor(happy_responses)
