"""Domain models shared by the engine, the collaborators and the renderer."""

from __future__ import annotations

from enum import Enum, StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Role(StrEnum):
    """Position of a diff block in the dependency order of a change."""

    ROOT = "root"
    DOWNSTREAM = "downstream"
    SUPPORTING = "supporting"


class Significance(StrEnum):
    """Review priority of a diff block."""

    KEY = "key"
    STANDARD = "standard"
    NOISE = "noise"


class CiStatus(StrEnum):
    """Aggregated status-check state of a pull request."""

    SUCCESS = "success"
    FAILURE = "failure"
    PENDING = "pending"
    UNKNOWN = "unknown"

    @property
    def symbol(self) -> str:
        return _CI_SYMBOLS[self]


_CI_SYMBOLS = {
    CiStatus.SUCCESS: "✓",
    CiStatus.FAILURE: "✗",
    CiStatus.PENDING: "●",
    CiStatus.UNKNOWN: "○",
}


class ReviewAction(Enum):
    """The three submittable outcomes of a review."""

    REQUEST_CHANGES = "request_changes"
    CLARIFICATION_QUESTIONS = "clarification_questions"
    NEXT_PR = "next_pr"

    @property
    def title(self) -> str:
        return _ACTION_TITLES[self]

    @classmethod
    def from_digit(cls, digit: str) -> ReviewAction | None:
        """Map the 1/2/3 shortcut keys to an action."""
        return _ACTION_DIGITS.get(digit)


_ACTION_TITLES = {
    ReviewAction.REQUEST_CHANGES: "Request Changes",
    ReviewAction.CLARIFICATION_QUESTIONS: "Clarification Questions",
    ReviewAction.NEXT_PR: "Next PR",
}

_ACTION_DIGITS = {
    "1": ReviewAction.REQUEST_CHANGES,
    "2": ReviewAction.CLARIFICATION_QUESTIONS,
    "3": ReviewAction.NEXT_PR,
}


class PrContext(BaseModel):
    """A fetched pull request: metadata plus the unified diff."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    number: int
    title: str
    body: str = ""
    diff: str = ""
    author: str = ""
    base_branch: str = ""
    head_branch: str = ""

    @property
    def reference(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


class PrListItem(BaseModel):
    """Summary row for the pull-request picker."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    author: str = ""
    head_branch: str = ""
    is_draft: bool = False
    review_requested: bool = False
    ci_status: CiStatus = CiStatus.UNKNOWN
    additions: int = 0
    deletions: int = 0


class RepoListItem(BaseModel):
    """Summary row for the repository selector."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str
    description: str = ""
    is_fork: bool = False
    is_private: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class Hunk(BaseModel):
    header: str
    lines: str


class DiffBlock(BaseModel):
    """One reviewable unit of change."""

    label: str
    role: Role
    significance: Significance
    context: str
    hunks: list[Hunk] = Field(default_factory=list)


class Feature(BaseModel):
    """A logical grouping of related diff blocks, in reviewer reading order."""

    title: str
    why: str
    changes: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    tests: list[str] = Field(default_factory=list)
    diff_blocks: list[DiffBlock] = Field(default_factory=list)


class Focus(BaseModel):
    key_change: str
    review_these: list[str] = Field(default_factory=list)
    skim_these: list[str] = Field(default_factory=list)


class StoryData(BaseModel):
    files_touched: int = 0
    additions: int = 0
    deletions: int = 0


class Story(BaseModel):
    """The generated narrative for one pull request."""

    summary: str
    focus: Focus
    narrative: list[Feature] = Field(default_factory=list)
    data: StoryData = Field(default_factory=StoryData)
    open_questions: list[str] = Field(default_factory=list)
    suggested_changes: str = ""
    clarification_questions: str = ""
    next_pr: str = ""

    @property
    def total_diffs(self) -> int:
        return sum(len(feature.diff_blocks) for feature in self.narrative)
