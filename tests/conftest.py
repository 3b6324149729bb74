"""Pytest fixtures for Distillery tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="distillery-tests-"))
os.environ["DISTILLERY_DATA_DIR"] = str(_TEST_BASE_DIR / "data")
os.environ["DISTILLERY_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")

from distillery.config import AppConfig  # noqa: E402
from distillery.core.state import AppState, Viewing  # noqa: E402
from tests.helpers.factories import make_pr, make_story  # noqa: E402
from tests.helpers.fakes import FakeCache, FakeGenerator, FakeGitHub  # noqa: E402

settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    """Runtime config whose cache file lives in the test's temp dir."""
    return AppConfig(api_key="sk-test", model="test-model", cache_file=str(tmp_path / "cache.json"))


@pytest.fixture
def story():
    return make_story()


@pytest.fixture
def viewing_state(story) -> AppState:
    """State after a story for acme/widgets#42 finished generating."""
    state = AppState()
    state.pr = make_pr()
    state.current_repo = ("acme", "widgets")
    state.current_pr_number = 42
    state.load_story(story)
    state.mode = Viewing()
    return state


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()
