"""Hypothesis tests for AppState navigation, progress and draft editing."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, initialize, invariant, rule
from tests.helpers import make_story

from distillery.config import AppConfig
from distillery.core.actions import KeyCode, KeyInput
from distillery.core.reducer import reduce
from distillery.core.state import AppState, EditingAction, Viewing
from distillery.domain.models import ReviewAction

pytestmark = pytest.mark.unit

diff_counts = st.lists(st.integers(min_value=0, max_value=4), min_size=0, max_size=5).map(tuple)
draft_text = st.text(max_size=30)
insertable = st.characters(exclude_categories=("Cs",))


class NavigationMachine(RuleBasedStateMachine):
    """Feature and diff selection stay in range; feature changes reset diff and scroll."""

    @initialize(counts=diff_counts)
    def load(self, counts: tuple[int, ...]) -> None:
        self.state = AppState(mode=Viewing())
        self.state.load_story(make_story(counts))
        self.counts = counts

    @invariant()
    def feature_in_range(self) -> None:
        if not self.counts:
            assert self.state.selected_feature == 0
        else:
            assert 0 <= self.state.selected_feature <= len(self.counts) - 1

    @invariant()
    def diff_in_range(self) -> None:
        if not self.counts:
            assert self.state.selected_diff == 0
            return
        total = self.counts[self.state.selected_feature]
        assert 0 <= self.state.selected_diff <= max(total - 1, 0)

    @invariant()
    def progress_is_consistent(self) -> None:
        for index, total in enumerate(self.counts):
            viewed, reported_total = self.state.feature_progress(index)
            assert reported_total == total
            assert 0 <= viewed <= total
        viewed_total, total = self.state.total_progress()
        assert viewed_total == len(self.state.viewed_diffs)
        assert total == sum(self.counts)

    @invariant()
    def viewed_pairs_address_real_blocks(self) -> None:
        for feature_idx, diff_idx in self.state.viewed_diffs:
            assert 0 <= diff_idx < self.counts[feature_idx]

    @invariant()
    def scroll_never_negative(self) -> None:
        assert self.state.scroll_offset >= 0

    @rule()
    def next_feature(self) -> None:
        before = self.state.selected_feature
        self.state.next_feature()
        if self.state.selected_feature != before:
            assert self.state.selected_diff == 0
            assert self.state.scroll_offset == 0

    @rule()
    def prev_feature(self) -> None:
        before = self.state.selected_feature
        self.state.prev_feature()
        if self.state.selected_feature != before:
            assert self.state.selected_diff == 0
            assert self.state.scroll_offset == 0

    @rule()
    def next_diff(self) -> None:
        self.state.next_diff()

    @rule()
    def prev_diff(self) -> None:
        self.state.prev_diff()

    @rule(delta=st.integers(min_value=-50, max_value=50))
    def scroll(self, delta: int) -> None:
        self.state.scroll_by(delta)

    @rule()
    def toggle_viewed(self) -> None:
        self.state.toggle_viewed()

    @rule()
    def toggle_twice_is_identity(self) -> None:
        before = set(self.state.viewed_diffs)
        self.state.toggle_viewed()
        self.state.toggle_viewed()
        assert self.state.viewed_diffs == before


class EditingMachine(RuleBasedStateMachine):
    """The cursor stays within the active draft whatever the edit sequence."""

    @initialize(text=draft_text, action=st.sampled_from(list(ReviewAction)))
    def start(self, text: str, action: ReviewAction) -> None:
        self.state = AppState(mode=Viewing())
        self.state.selected_action = action
        self.state.action_texts.set(action, text)
        self.state.start_editing()

    @invariant()
    def cursor_in_bounds(self) -> None:
        assert 0 <= self.state.cursor_pos <= len(self.state.current_action_text())

    @rule(char=insertable)
    def insert(self, char: str) -> None:
        self.state.insert_char(char)

    @rule()
    def delete(self) -> None:
        self.state.delete_char()

    @rule()
    def left(self) -> None:
        self.state.cursor_left()

    @rule()
    def right(self) -> None:
        self.state.cursor_right()

    @rule(char=insertable)
    def insert_then_delete_is_identity(self, char: str) -> None:
        text = self.state.current_action_text()
        cursor = self.state.cursor_pos
        self.state.insert_char(char)
        self.state.delete_char()
        assert self.state.current_action_text() == text
        assert self.state.cursor_pos == cursor

    @rule(action=st.sampled_from(list(ReviewAction)))
    def switch_draft(self, action: ReviewAction) -> None:
        self.state.stop_editing()
        self.state.selected_action = action
        self.state.start_editing()
        assert self.state.cursor_pos == len(self.state.current_action_text())


class DraftKeysMachine(RuleBasedStateMachine):
    """Keys reduced in Viewing and EditingAction never push the cursor out of its draft."""

    @initialize(texts=st.tuples(draft_text, draft_text, draft_text))
    def start(self, texts: tuple[str, str, str]) -> None:
        self.state = AppState(mode=Viewing())
        for action, text in zip(ReviewAction, texts, strict=True):
            self.state.action_texts.set(action, text)
        self.config = AppConfig(api_key="sk-test")

    def press(self, key: KeyInput) -> None:
        assert reduce(self.state, key, self.config) == []

    @invariant()
    def cursor_in_bounds(self) -> None:
        assert 0 <= self.state.cursor_pos <= len(self.state.current_action_text())

    @rule(digit=st.sampled_from(["1", "2", "3"]))
    def choose_action(self, digit: str) -> None:
        self.press(KeyInput(digit))

    @rule(code=st.sampled_from([KeyCode.ENTER, KeyCode.ESCAPE, KeyCode.BACKSPACE]))
    def named_key(self, code: KeyCode) -> None:
        self.press(KeyInput(code))

    @rule(code=st.sampled_from([KeyCode.LEFT, KeyCode.RIGHT]))
    def arrow(self, code: KeyCode) -> None:
        if isinstance(self.state.mode, EditingAction):
            self.press(KeyInput(code))

    @rule(char=st.sampled_from(["a", "é", "字"]))
    def type_char(self, char: str) -> None:
        if isinstance(self.state.mode, EditingAction):
            self.press(KeyInput(char))


TestNavigationMachine = NavigationMachine.TestCase
TestEditingMachine = EditingMachine.TestCase
TestDraftKeysMachine = DraftKeysMachine.TestCase


class TestStoryLifecycle:
    @given(counts=diff_counts)
    def test_loading_a_story_resets_progress(self, counts):
        state = AppState(mode=Viewing())
        state.load_story(make_story((2, 2)))
        state.toggle_viewed()
        state.next_feature()

        state.load_story(make_story(counts))

        assert state.viewed_diffs == set()
        assert state.selected_feature == 0
        assert state.selected_diff == 0
        assert state.total_progress() == (0, sum(counts))

    @given(text=draft_text)
    def test_drafts_are_seeded_from_story(self, text):
        state = AppState()
        state.load_story(make_story(suggested_changes=text))

        assert state.current_action_text() == text

    def test_feature_progress_out_of_range_is_empty(self):
        state = AppState()
        state.load_story(make_story((1,)))

        assert state.feature_progress(5) == (0, 0)
        assert state.feature_progress(-1) == (0, 0)
