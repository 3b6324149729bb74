"""Collaborators that perform the I/O described by commands."""

from distillery.integrations.cache import load_story, save_story
from distillery.integrations.github import GhCliClient, GhCliError, GitHubClient
from distillery.integrations.llm import StoryGenerationError, StoryGenerator

__all__ = [
    "GhCliClient",
    "GhCliError",
    "GitHubClient",
    "StoryGenerationError",
    "StoryGenerator",
    "load_story",
    "save_story",
]
