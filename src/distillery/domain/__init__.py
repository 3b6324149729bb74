"""Passive domain types and prompt construction."""

from distillery.domain.models import (
    CiStatus,
    DiffBlock,
    Feature,
    Focus,
    Hunk,
    PrContext,
    PrListItem,
    RepoListItem,
    ReviewAction,
    Role,
    Significance,
    Story,
    StoryData,
)

__all__ = [
    "CiStatus",
    "DiffBlock",
    "Feature",
    "Focus",
    "Hunk",
    "PrContext",
    "PrListItem",
    "RepoListItem",
    "ReviewAction",
    "Role",
    "Significance",
    "Story",
    "StoryData",
]
