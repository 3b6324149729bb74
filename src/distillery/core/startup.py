"""Resolving command-line arguments into the first screen and first commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from distillery.core.commands import FetchPr, FetchPrList, FetchRepoList, LoadCache
from distillery.core.state import LoadingPr, LoadingPrList, LoadingRepoList
from distillery.integrations.github import parse_pr_reference, parse_repo_reference

if TYPE_CHECKING:
    from distillery.config import AppConfig
    from distillery.core.commands import Command
    from distillery.core.state import AppState


@dataclass(frozen=True, slots=True)
class RepoSelectorStart:
    pass


@dataclass(frozen=True, slots=True)
class PrPickerStart:
    owner: str
    repo: str


@dataclass(frozen=True, slots=True)
class DirectPrStart:
    owner: str
    repo: str
    number: int


type StartupMode = RepoSelectorStart | PrPickerStart | DirectPrStart


def resolve_startup_mode(pr_ref: str | None, repo: str | None) -> StartupMode:
    """Pick the entry point from the positional reference and ``--repo``.

    Raises:
        ValueError: on a malformed reference.
    """
    if pr_ref:
        if "#" in pr_ref or "github.com" in pr_ref:
            owner, name, number = parse_pr_reference(pr_ref)
            return DirectPrStart(owner, name, number)
        owner, name = parse_repo_reference(pr_ref)
        return PrPickerStart(owner, name)
    if repo:
        owner, name = parse_repo_reference(repo)
        return PrPickerStart(owner, name)
    return RepoSelectorStart()


def bootstrap(state: AppState, mode: StartupMode, config: AppConfig) -> list[Command]:
    """Put ``state`` in its first loading mode and return the commands to start with."""
    if isinstance(mode, DirectPrStart):
        state.current_repo = (mode.owner, mode.repo)
        state.current_pr_number = mode.number
        state.mode = LoadingPr()
        if config.use_cache:
            return [LoadCache(path=config.cache_file)]
        return [FetchPr(owner=mode.owner, repo=mode.repo, number=mode.number)]
    if isinstance(mode, PrPickerStart):
        state.current_repo = (mode.owner, mode.repo)
        state.mode = LoadingPrList()
        return [FetchPrList(owner=mode.owner, repo=mode.repo)]
    state.mode = LoadingRepoList()
    return [FetchRepoList()]
