"""Unit tests for resolving the entry point from command-line arguments."""

from __future__ import annotations

import pytest

from distillery.config import AppConfig
from distillery.core.commands import FetchPr, FetchPrList, FetchRepoList, LoadCache
from distillery.core.startup import (
    DirectPrStart,
    PrPickerStart,
    RepoSelectorStart,
    bootstrap,
    resolve_startup_mode,
)
from distillery.core.state import AppState, LoadingPr, LoadingPrList, LoadingRepoList

pytestmark = pytest.mark.unit


class TestResolveStartupMode:
    def test_no_arguments_opens_repo_selector(self):
        assert resolve_startup_mode(None, None) == RepoSelectorStart()

    def test_pr_reference(self):
        assert resolve_startup_mode("acme/widgets#42", None) == DirectPrStart("acme", "widgets", 42)

    def test_pr_url(self):
        mode = resolve_startup_mode("https://github.com/acme/widgets/pull/9", None)
        assert mode == DirectPrStart("acme", "widgets", 9)

    def test_bare_repo_opens_picker(self):
        assert resolve_startup_mode("acme/widgets", None) == PrPickerStart("acme", "widgets")

    def test_repo_option_opens_picker(self):
        assert resolve_startup_mode(None, "acme/gears") == PrPickerStart("acme", "gears")

    def test_positional_reference_wins_over_repo_option(self):
        mode = resolve_startup_mode("acme/widgets#1", "acme/gears")
        assert mode == DirectPrStart("acme", "widgets", 1)

    @pytest.mark.parametrize(("pr_ref", "repo"), [("acme#x", None), ("widgets", None), (None, "x")])
    def test_malformed_input(self, pr_ref, repo):
        with pytest.raises(ValueError):
            resolve_startup_mode(pr_ref, repo)


class TestBootstrap:
    def test_repo_selector(self, config):
        state = AppState()

        assert bootstrap(state, RepoSelectorStart(), config) == [FetchRepoList()]
        assert isinstance(state.mode, LoadingRepoList)

    def test_picker(self, config):
        state = AppState()

        assert bootstrap(state, PrPickerStart("acme", "widgets"), config) == [
            FetchPrList("acme", "widgets")
        ]
        assert isinstance(state.mode, LoadingPrList)
        assert state.current_repo == ("acme", "widgets")

    def test_direct_pr_fetches(self, config):
        state = AppState()

        commands = bootstrap(state, DirectPrStart("acme", "widgets", 42), config)

        assert commands == [FetchPr("acme", "widgets", 42)]
        assert isinstance(state.mode, LoadingPr)
        assert state.current_pr_number == 42

    def test_direct_pr_with_cache_loads_cache_first(self):
        config = AppConfig(api_key="k", use_cache=True, cache_file="c.json")
        state = AppState()

        assert bootstrap(state, DirectPrStart("acme", "widgets", 42), config) == [
            LoadCache("c.json")
        ]
        assert state.current_repo == ("acme", "widgets")
