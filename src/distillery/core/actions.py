"""Actions: everything that can perturb application state.

An action is either a keypress or the completed outcome of an asynchronous
command. Outcomes are plain data (``Ok`` / ``Err``); collaborators never raise
into the reducer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from distillery.domain.models import (
        PrContext,
        PrListItem,
        RepoListItem,
        ReviewAction,
        Story,
    )


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Err:
    message: str


type Outcome[T] = Ok[T] | Err


class KeyCode(StrEnum):
    """Named (non-character) keys."""

    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    DELETE = "delete"
    TAB = "tab"
    BACKTAB = "backtab"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"


class Modifiers(Flag):
    NONE = 0
    SHIFT = auto()
    CONTROL = auto()
    ALT = auto()


@dataclass(frozen=True, slots=True)
class KeyInput:
    """A raw keypress: a named key or a single printable character."""

    code: KeyCode | str
    modifiers: Modifiers = Modifiers.NONE

    @property
    def char(self) -> str | None:
        if isinstance(self.code, KeyCode):
            return None
        return self.code

    @property
    def text(self) -> str | None:
        """The character to insert; None for named keys and Ctrl/Alt chords."""
        if self.char is None or (Modifiers.CONTROL | Modifiers.ALT) & self.modifiers:
            return None
        return self.char

    @property
    def ctrl(self) -> bool:
        return Modifiers.CONTROL in self.modifiers

    def is_char(self, *chars: str) -> bool:
        """True for a plain (no Ctrl/Alt) press of one of ``chars``."""
        return self.text is not None and self.text in chars

    def is_ctrl(self, char: str) -> bool:
        return self.ctrl and self.char == char

    def is_key(self, *codes: KeyCode) -> bool:
        return isinstance(self.code, KeyCode) and self.code in codes


@dataclass(frozen=True, slots=True)
class RepoListLoaded:
    result: Outcome[list[RepoListItem]]


@dataclass(frozen=True, slots=True)
class PrListLoaded:
    result: Outcome[list[PrListItem]]


@dataclass(frozen=True, slots=True)
class PrLoaded:
    result: Outcome[PrContext]


@dataclass(frozen=True, slots=True)
class StoryGenerated:
    result: Outcome[Story]


@dataclass(frozen=True, slots=True)
class CacheLoaded:
    story: Story | None


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    action: ReviewAction
    result: Outcome[None]


type Action = (
    KeyInput
    | RepoListLoaded
    | PrListLoaded
    | PrLoaded
    | StoryGenerated
    | CacheLoaded
    | SubmissionResult
)


def describe_action(action: Action) -> str:
    """Short log-friendly description (never dumps diffs or stories)."""
    if isinstance(action, KeyInput):
        return f"KeyInput({action.code!s}, {action.modifiers.name or 'NONE'})"
    if isinstance(action, CacheLoaded):
        return f"CacheLoaded(hit={action.story is not None})"
    if isinstance(action, SubmissionResult):
        state = "ok" if isinstance(action.result, Ok) else "err"
        return f"SubmissionResult({action.action.name}, {state})"
    state = "ok" if isinstance(action.result, Ok) else "err"
    return f"{type(action).__name__}({state})"
