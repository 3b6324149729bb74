"""Story generation through the OpenAI Responses API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from distillery.domain.models import Story
from distillery.domain.prompt import (
    SCHEMA_NAME,
    build_system_prompt,
    build_user_prompt,
    story_json_schema,
)
from distillery.limits import LLM_TIMEOUT

if TYPE_CHECKING:
    from distillery.domain.models import PrContext

logger = logging.getLogger(__name__)


class StoryGenerationError(RuntimeError):
    """The model call failed or produced something that is not a Story."""


def build_request(pr: PrContext, model: str) -> dict[str, Any]:
    """Keyword arguments for ``responses.create``."""
    return {
        "model": model,
        "input": [
            {"role": "system", "content": build_system_prompt()},
            {"role": "user", "content": build_user_prompt(pr)},
        ],
        "text": {
            "format": {
                "type": "json_schema",
                "name": SCHEMA_NAME,
                "schema": story_json_schema(),
                "strict": True,
            }
        },
    }


def extract_output_text(response: Any) -> str:
    """Pull the first content part out of a Responses API result.

    Raises:
        StoryGenerationError: when there is no content or the model refused.
    """
    for item in getattr(response, "output", None) or []:
        for part in getattr(item, "content", None) or []:
            part_type = getattr(part, "type", None)
            if part_type == "refusal":
                raise StoryGenerationError(f"Model refused request: {part.refusal}")
            if part_type == "output_text":
                return part.text
    raise StoryGenerationError("No content in OpenAI response")


def parse_story(text: str) -> Story:
    try:
        return Story.model_validate_json(text)
    except ValidationError as exc:
        raise StoryGenerationError(f"Failed to parse story JSON: {exc}") from exc


class StoryGenerator:
    """Turns a fetched pull request into a :class:`Story`.

    Args:
        api_key: OpenAI API key.
        model: Model name passed through to the API.
        client: Pre-built client, mainly for tests.
    """

    def __init__(self, api_key: str, model: str, client: AsyncOpenAI | None = None) -> None:
        self.model = model
        self._client = client or AsyncOpenAI(api_key=api_key, timeout=LLM_TIMEOUT)

    async def generate(self, pr: PrContext) -> Story:
        logger.info("Generating story for %s with %s", pr.reference, self.model)
        try:
            response = await self._client.responses.create(**build_request(pr, self.model))
        except OpenAIError as exc:
            raise StoryGenerationError(f"OpenAI API error: {exc}") from exc
        story = parse_story(extract_output_text(response))
        logger.info(
            "Story ready: %d features, %d diff blocks", len(story.narrative), story.total_diffs
        )
        return story


__all__ = ["StoryGenerationError", "StoryGenerator", "build_request", "extract_output_text"]
