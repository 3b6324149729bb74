"""Numeric limits and timeouts - no circular dependencies."""

from __future__ import annotations

GH_TIMEOUT = 60.0
LLM_TIMEOUT = 600.0

GH_LIST_LIMIT = 50
PAGE_SCROLL = 20

MAX_LOG_LINES = 2000
MAX_LOG_MESSAGE_LENGTH = 4096
