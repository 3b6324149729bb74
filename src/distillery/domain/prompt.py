"""Prompt and structured-output schema for story generation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from distillery.domain.models import PrContext

SCHEMA_NAME = "distillery_review"

SYSTEM_PROMPT = """\
You are a senior staff engineer performing a code review. Your task is to transform a raw PR \
diff into a structured narrative that helps reviewers understand the changes quickly and \
thoroughly.

## Your Goals

1. **Explain the "why", not just the "what"** - Good engineers can read code. They need to \
understand intent, trade-offs, and implications.

2. **Reorder by dependency, not by file** - Diffs are typically sorted alphabetically by \
filename, which obscures the logical flow. Identify the root changes that everything else \
depends on, even if they appear late in the diff. Present them first.

3. **Group by feature/concern** - Cluster related changes into coherent narrative sections. \
A feature might touch 5 files, but it's one logical unit.

4. **Surface risks and gaps** - Identify what could go wrong, what's missing, what \
assumptions are being made.

5. **Propose follow-up work** - Some things don't belong in this PR. Identify them clearly \
for a "Next PR" issue.

## Diff Block Roles

For each diff block, assign a role:
- **root**: The foundational change that other changes depend on. Often an interface, type \
definition, or core function.
- **downstream**: Changes that consume or react to a root change.
- **supporting**: Auxiliary changes like config, resources, or cleanup.

## Change Significance

For each diff block, assess significance (orthogonal to role):
- **key**: THE important change. Core logic, the feature, the fix. Typically 1-3 per PR.
- **standard**: Normal changes needing review but not the star.
- **noise**: Mechanical changes. Imports, formatting, boilerplate.

## Focus Section

Generate a "focus" object that tells reviewers where to spend time:
- **key_change**: Single sentence describing THE thing this PR does
- **review_these**: 2-4 specific locations deserving careful review (file:function format)
- **skim_these**: Categories that can be quickly scanned

## Review Actions

Generate three actionable outputs:
- **suggested_changes**: Specific, numbered improvements to request. Reference specific code.
- **clarification_questions**: Questions about unclear intent or missing context.
- **next_pr**: Follow-up work for a separate issue. The first line is the issue title, the \
following lines are bullet points of what it should address.

## Output Format

Return ONLY valid JSON matching the provided schema: summary, focus, narrative (features with \
title, why, changes, risks, tests and diff_blocks; each diff block has label, role, \
significance, context and hunks of header + lines), data (files_touched, additions, \
deletions), open_questions, suggested_changes, clarification_questions and next_pr.\
"""


def build_system_prompt() -> str:
    return SYSTEM_PROMPT


def build_user_prompt(pr: PrContext) -> str:
    """Render the PR context and diff for the generator."""
    body = pr.body if pr.body.strip() else "No description provided"
    return (
        "## PR Context\n\n"
        f"**Repository:** {pr.owner}/{pr.repo}\n"
        f"**PR Number:** #{pr.number}\n"
        f"**Title:** {pr.title}\n"
        f"**Author:** {pr.author}\n"
        f"**Branch:** {pr.head_branch} → {pr.base_branch}\n\n"
        "**Description from author:**\n"
        f"{body}\n\n"
        "## Git Diff\n\n"
        "```diff\n"
        f"{pr.diff}\n"
        "```\n\n"
        "Analyze this PR and return the structured JSON response."
    )


def _strings() -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}}


def _object(properties: dict[str, Any]) -> dict[str, Any]:
    """Strict object: every property required, nothing else allowed."""
    return {
        "type": "object",
        "additionalProperties": False,
        "required": list(properties),
        "properties": properties,
    }


def story_json_schema() -> dict[str, Any]:
    """JSON schema matching ``Story`` for strict structured output."""
    hunk = _object({"header": {"type": "string"}, "lines": {"type": "string"}})
    diff_block = _object(
        {
            "label": {"type": "string"},
            "role": {"type": "string", "enum": ["root", "downstream", "supporting"]},
            "significance": {"type": "string", "enum": ["key", "standard", "noise"]},
            "context": {"type": "string"},
            "hunks": {"type": "array", "items": hunk},
        }
    )
    feature = _object(
        {
            "title": {"type": "string"},
            "why": {"type": "string"},
            "changes": _strings(),
            "risks": _strings(),
            "tests": _strings(),
            "diff_blocks": {"type": "array", "items": diff_block},
        }
    )
    return _object(
        {
            "summary": {"type": "string"},
            "focus": _object(
                {
                    "key_change": {"type": "string"},
                    "review_these": _strings(),
                    "skim_these": _strings(),
                }
            ),
            "narrative": {"type": "array", "items": feature},
            "data": _object(
                {
                    "files_touched": {"type": "number"},
                    "additions": {"type": "number"},
                    "deletions": {"type": "number"},
                }
            ),
            "open_questions": _strings(),
            "suggested_changes": {"type": "string"},
            "clarification_questions": {"type": "string"},
            "next_pr": {"type": "string"},
        }
    )
