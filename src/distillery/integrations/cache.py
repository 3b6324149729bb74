"""Local story cache: one JSON file holding the last generated story."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from distillery.atomic import atomic_write
from distillery.domain.models import Story

logger = logging.getLogger(__name__)


def load_story(path: str | Path) -> Story | None:
    """Read a cached story; anything missing or unreadable is a miss."""
    cache_path = Path(path)
    try:
        raw = cache_path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.debug("Cache miss for %s: %s", cache_path, exc)
        return None
    try:
        return Story.model_validate_json(raw)
    except ValidationError as exc:
        logger.debug("Ignoring invalid cache file %s: %s", cache_path, exc)
        return None


def save_story(path: str | Path, story: Story) -> None:
    """Write the story; failures are logged and otherwise ignored."""
    cache_path = Path(path)
    try:
        atomic_write(cache_path, story.model_dump_json(indent=2))
    except OSError as exc:
        logger.warning("Failed to write cache file %s: %s", cache_path, exc)
        return
    logger.debug("Cached story to %s", cache_path)
