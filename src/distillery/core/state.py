"""Application state: the single source of truth mutated only by the reducer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from distillery.domain.models import ReviewAction
from distillery.limits import PAGE_SCROLL

if TYPE_CHECKING:
    from distillery.domain.models import (
        DiffBlock,
        Feature,
        PrContext,
        PrListItem,
        RepoListItem,
        Story,
    )


@dataclass(frozen=True, slots=True)
class RepoSelector:
    pass


@dataclass(frozen=True, slots=True)
class LoadingRepoList:
    pass


@dataclass(frozen=True, slots=True)
class PrPicker:
    pass


@dataclass(frozen=True, slots=True)
class LoadingPrList:
    pass


@dataclass(frozen=True, slots=True)
class LoadingPr:
    pass


@dataclass(frozen=True, slots=True)
class GeneratingStory:
    pass


@dataclass(frozen=True, slots=True)
class Viewing:
    pass


@dataclass(frozen=True, slots=True)
class EditingAction:
    action: ReviewAction


@dataclass(frozen=True, slots=True)
class Submitting:
    action: ReviewAction


@dataclass(frozen=True, slots=True)
class Error:
    message: str


type Mode = (
    RepoSelector
    | LoadingRepoList
    | PrPicker
    | LoadingPrList
    | LoadingPr
    | GeneratingStory
    | Viewing
    | EditingAction
    | Submitting
    | Error
)

ALL_MODES: tuple[type, ...] = (
    RepoSelector,
    LoadingRepoList,
    PrPicker,
    LoadingPrList,
    LoadingPr,
    GeneratingStory,
    Viewing,
    EditingAction,
    Submitting,
    Error,
)

# Modes waiting on a command result; only quit is honoured while in them.
BUSY_MODES: tuple[type, ...] = (
    LoadingRepoList,
    LoadingPrList,
    LoadingPr,
    GeneratingStory,
    Submitting,
)


@dataclass
class ActionTexts:
    """Editable drafts for the three review actions."""

    request_changes: str = ""
    clarification: str = ""
    next_pr: str = ""

    @classmethod
    def from_story(cls, story: Story) -> ActionTexts:
        return cls(
            request_changes=story.suggested_changes,
            clarification=story.clarification_questions,
            next_pr=story.next_pr,
        )

    def get(self, action: ReviewAction) -> str:
        if action is ReviewAction.REQUEST_CHANGES:
            return self.request_changes
        if action is ReviewAction.CLARIFICATION_QUESTIONS:
            return self.clarification
        return self.next_pr

    def set(self, action: ReviewAction, text: str) -> None:
        if action is ReviewAction.REQUEST_CHANGES:
            self.request_changes = text
        elif action is ReviewAction.CLARIFICATION_QUESTIONS:
            self.clarification = text
        else:
            self.next_pr = text


@dataclass
class AppState:
    """Everything the renderer shows and the reducer mutates.

    Positions into ``story.narrative`` and the current feature's diff blocks
    are always valid (or 0 when the list is empty), and ``viewed_diffs`` only
    holds pairs that address a real diff block of the current story.
    ``cursor_pos`` counts code points, the same unit used for insertion and
    removal, so it can never land inside a character.
    """

    mode: Mode = field(default_factory=LoadingPr)
    pr: PrContext | None = None
    story: Story | None = None
    selected_feature: int = 0
    selected_diff: int = 0
    selected_action: ReviewAction = ReviewAction.REQUEST_CHANGES
    scroll_offset: int = 0
    action_texts: ActionTexts = field(default_factory=ActionTexts)
    cursor_pos: int = 0
    status: str | None = None
    should_quit: bool = False
    viewed_diffs: set[tuple[int, int]] = field(default_factory=set)
    pr_list: list[PrListItem] = field(default_factory=list)
    picker_selected: int = 0
    show_picker: bool = False
    repo_list: list[RepoListItem] = field(default_factory=list)
    repo_selected: int = 0
    current_repo: tuple[str, str] | None = None
    current_pr_number: int | None = None

    @classmethod
    def with_repo_selector(cls) -> AppState:
        return cls(mode=LoadingRepoList())

    @classmethod
    def with_picker(cls, owner: str, repo: str) -> AppState:
        return cls(mode=LoadingPrList(), show_picker=True, current_repo=(owner, repo))

    # ------------------------------------------------------------------ #
    # Story and drafts                                                    #
    # ------------------------------------------------------------------ #

    def load_story(self, story: Story) -> None:
        """Install a new story, seeding drafts and forgetting per-story progress."""
        self.action_texts = ActionTexts.from_story(story)
        self.story = story
        self.selected_feature = 0
        self.selected_diff = 0
        self.scroll_offset = 0
        self.viewed_diffs.clear()
        self.cursor_pos = 0

    def reset_for_new_pr(self) -> None:
        self.story = None
        self.selected_feature = 0
        self.selected_diff = 0
        self.scroll_offset = 0
        self.viewed_diffs.clear()
        self.action_texts = ActionTexts()
        self.cursor_pos = 0
        self.show_picker = False

    def current_action_text(self) -> str:
        return self.action_texts.get(self.selected_action)

    def _set_current_action_text(self, text: str) -> None:
        self.action_texts.set(self.selected_action, text)

    # ------------------------------------------------------------------ #
    # Feature / diff navigation                                           #
    # ------------------------------------------------------------------ #

    def current_feature(self) -> Feature | None:
        if self.story is None or self.selected_feature >= len(self.story.narrative):
            return None
        return self.story.narrative[self.selected_feature]

    def current_diff(self) -> DiffBlock | None:
        feature = self.current_feature()
        if feature is None or self.selected_diff >= len(feature.diff_blocks):
            return None
        return feature.diff_blocks[self.selected_diff]

    def next_feature(self) -> None:
        if self.story is None:
            return
        if self.selected_feature < len(self.story.narrative) - 1:
            self.selected_feature += 1
            self.selected_diff = 0
            self.scroll_offset = 0

    def prev_feature(self) -> None:
        if self.selected_feature > 0:
            self.selected_feature -= 1
            self.selected_diff = 0
            self.scroll_offset = 0

    def next_diff(self) -> None:
        feature = self.current_feature()
        if feature is None:
            return
        if self.selected_diff < len(feature.diff_blocks) - 1:
            self.selected_diff += 1

    def prev_diff(self) -> None:
        if self.selected_diff > 0:
            self.selected_diff -= 1

    def toggle_viewed(self) -> None:
        if self.current_diff() is None:
            return
        key = (self.selected_feature, self.selected_diff)
        if key in self.viewed_diffs:
            self.viewed_diffs.remove(key)
        else:
            self.viewed_diffs.add(key)

    def is_diff_viewed(self, feature_idx: int, diff_idx: int) -> bool:
        return (feature_idx, diff_idx) in self.viewed_diffs

    def feature_progress(self, feature_idx: int) -> tuple[int, int]:
        """Viewed/total diff counts for one feature."""
        if self.story is None or not 0 <= feature_idx < len(self.story.narrative):
            return (0, 0)
        total = len(self.story.narrative[feature_idx].diff_blocks)
        viewed = sum(1 for diff_idx in range(total) if (feature_idx, diff_idx) in self.viewed_diffs)
        return (viewed, total)

    def total_progress(self) -> tuple[int, int]:
        """Viewed/total diff counts across the whole story."""
        if self.story is None:
            return (0, 0)
        return (len(self.viewed_diffs), self.story.total_diffs)

    def scroll_by(self, delta: int) -> None:
        self.scroll_offset = max(0, self.scroll_offset + delta)

    def page_down(self) -> None:
        self.scroll_by(PAGE_SCROLL)

    def page_up(self) -> None:
        self.scroll_by(-PAGE_SCROLL)

    # ------------------------------------------------------------------ #
    # Review actions and text editing                                     #
    # ------------------------------------------------------------------ #

    def select_action(self, action: ReviewAction) -> None:
        """Switch the active draft, keeping the cursor inside it."""
        self.selected_action = action
        self.cursor_pos = min(self.cursor_pos, len(self.current_action_text()))

    def start_editing(self) -> None:
        self.cursor_pos = len(self.current_action_text())
        self.mode = EditingAction(self.selected_action)

    def stop_editing(self) -> None:
        self.mode = Viewing()

    def insert_char(self, char: str) -> None:
        text = self.current_action_text()
        cursor = min(self.cursor_pos, len(text))
        self._set_current_action_text(text[:cursor] + char + text[cursor:])
        self.cursor_pos = cursor + len(char)

    def delete_char(self) -> None:
        text = self.current_action_text()
        cursor = min(self.cursor_pos, len(text))
        if cursor == 0:
            return
        self._set_current_action_text(text[: cursor - 1] + text[cursor:])
        self.cursor_pos = cursor - 1

    def cursor_left(self) -> None:
        self.cursor_pos = max(0, self.cursor_pos - 1)

    def cursor_right(self) -> None:
        self.cursor_pos = min(self.cursor_pos + 1, len(self.current_action_text()))

    # ------------------------------------------------------------------ #
    # Picker / repo selector                                              #
    # ------------------------------------------------------------------ #

    def picker_down(self) -> None:
        if self.picker_selected < len(self.pr_list) - 1:
            self.picker_selected += 1

    def picker_up(self) -> None:
        self.picker_selected = max(0, self.picker_selected - 1)

    def selected_pr(self) -> PrListItem | None:
        if 0 <= self.picker_selected < len(self.pr_list):
            return self.pr_list[self.picker_selected]
        return None

    def close_picker(self) -> None:
        self.show_picker = False
        if self.story is not None:
            self.mode = Viewing()

    def repo_selector_down(self) -> None:
        if self.repo_selected < len(self.repo_list) - 1:
            self.repo_selected += 1

    def repo_selector_up(self) -> None:
        self.repo_selected = max(0, self.repo_selected - 1)

    def selected_repo(self) -> RepoListItem | None:
        if 0 <= self.repo_selected < len(self.repo_list):
            return self.repo_list[self.repo_selected]
        return None

    def back_to_repo_selector(self) -> None:
        self.show_picker = False
        self.pr_list = []
        self.picker_selected = 0
        self.mode = RepoSelector()
