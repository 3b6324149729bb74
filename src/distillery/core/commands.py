"""Commands: inert descriptions of side effects the reducer asks for.

Nothing in this module performs I/O; ``CommandExecutor`` gives commands their
meaning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from distillery.domain.models import PrContext, Story


@dataclass(frozen=True, slots=True)
class FetchRepoList:
    pass


@dataclass(frozen=True, slots=True)
class FetchPrList:
    owner: str
    repo: str


@dataclass(frozen=True, slots=True)
class FetchPr:
    owner: str
    repo: str
    number: int


@dataclass(frozen=True, slots=True)
class GenerateStory:
    pr: PrContext


@dataclass(frozen=True, slots=True)
class LoadCache:
    path: str


@dataclass(frozen=True, slots=True)
class SaveCache:
    path: str
    story: Story


@dataclass(frozen=True, slots=True)
class PostReview:
    owner: str
    repo: str
    number: int
    body: str


@dataclass(frozen=True, slots=True)
class PostComment:
    owner: str
    repo: str
    number: int
    body: str


@dataclass(frozen=True, slots=True)
class CreateNextPrIssue:
    owner: str
    repo: str
    number: int
    title: str
    body: str


type Command = (
    FetchRepoList
    | FetchPrList
    | FetchPr
    | GenerateStory
    | LoadCache
    | SaveCache
    | PostReview
    | PostComment
    | CreateNextPrIssue
)


def describe_command(command: Command) -> str:
    """Short log-friendly description (omits bodies, diffs and stories)."""
    if isinstance(command, FetchPrList):
        return f"FetchPrList({command.owner}/{command.repo})"
    if isinstance(command, (FetchPr, PostReview, PostComment, CreateNextPrIssue)):
        return f"{type(command).__name__}({command.owner}/{command.repo}#{command.number})"
    if isinstance(command, GenerateStory):
        return f"GenerateStory({command.pr.reference})"
    if isinstance(command, (LoadCache, SaveCache)):
        return f"{type(command).__name__}({command.path})"
    return f"{type(command).__name__}()"
