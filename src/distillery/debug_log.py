"""In-memory capture of ``distillery`` log records.

The TUI owns the terminal while it runs, so records from every
``distillery.*`` logger land in a bounded ring buffer instead of stderr. The
F12 modal tails the buffer and ``dstl --log-file`` dumps it on exit.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from distillery.atomic import atomic_write
from distillery.limits import MAX_LOG_LINES, MAX_LOG_MESSAGE_LENGTH

TRUNCATION_MARKER = "... [truncated]"
EXPORT_TITLE = "# Distillery Debug Log Export"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LogEntry:
    level: str
    logger: str
    message: str
    created: float

    def clock(self, *, millis: bool = False) -> str:
        stamp = datetime.fromtimestamp(self.created)
        if millis:
            return stamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        return stamp.strftime("%H:%M:%S")

    def as_line(self) -> str:
        return f"{self.clock(millis=True)} [{self.level}] {self.logger}: {self.message}"


log_buffer: deque[LogEntry] = deque(maxlen=MAX_LOG_LINES)

# Bumped on every clear so viewers know to start over.
_buffer_generation: int = 0


def clip_message(message: str) -> str:
    if len(message) <= MAX_LOG_MESSAGE_LENGTH:
        return message
    return message[:MAX_LOG_MESSAGE_LENGTH] + TRUNCATION_MARKER


class DebugLogHandler(logging.Handler):
    """Append each record, tracebacks included, to ``log_buffer``."""

    def __init__(self, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = LogEntry(
                level=record.levelname,
                logger=record.name,
                message=clip_message(self.format(record)),
                created=record.created,
            )
        except Exception:
            self.handleError(record)
            return
        log_buffer.append(entry)


def setup_debug_logging(level: int = logging.DEBUG) -> None:
    """Route the ``distillery`` logger tree into the buffer. Safe to call twice."""
    root = logging.getLogger("distillery")
    root.setLevel(level)
    if any(isinstance(handler, DebugLogHandler) for handler in root.handlers):
        return
    root.addHandler(DebugLogHandler())
    logger.info("Debug logging initialized at %s", logging.getLevelName(level))


def clear_log_buffer() -> None:
    global _buffer_generation
    log_buffer.clear()
    _buffer_generation += 1


def get_buffer_generation() -> int:
    return _buffer_generation


def export_logs_to_file(file_path: str | Path) -> int:
    """Write the buffer to ``file_path`` and return the number of entries."""
    entries = list(log_buffer)
    lines = [
        EXPORT_TITLE,
        f"# Total entries: {len(entries)}",
        f"# Buffer generation: {_buffer_generation}",
        "# " + "=" * 76,
        "",
        *(entry.as_line() for entry in entries),
    ]
    atomic_write(file_path, "\n".join(lines) + "\n")
    return len(entries)
