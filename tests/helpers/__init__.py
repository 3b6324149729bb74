"""Test helpers package."""

from tests.helpers.factories import (
    make_block,
    make_feature,
    make_pr,
    make_pr_item,
    make_repo_item,
    make_story,
)
from tests.helpers.fakes import FakeCache, FakeGenerator, FakeGitHub, ScriptedExecutor
from tests.helpers.wait import wait_until

__all__ = [
    "FakeCache",
    "FakeGenerator",
    "FakeGitHub",
    "ScriptedExecutor",
    "make_block",
    "make_feature",
    "make_pr",
    "make_pr_item",
    "make_repo_item",
    "make_story",
    "wait_until",
]
