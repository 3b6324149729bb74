"""Debug log viewer modal (F12)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, RichLog, Rule

from distillery.debug_log import (
    LogEntry,
    clear_log_buffer,
    export_logs_to_file,
    get_buffer_generation,
    log_buffer,
)
from distillery.keybindings import DEBUG_LOG_BINDINGS
from distillery.paths import get_debug_log_path

if TYPE_CHECKING:
    from textual.app import ComposeResult
    from textual.timer import Timer

_LEVEL_COLORS = {
    "DEBUG": "dim",
    "INFO": "blue",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold red",
}


class DebugLogModal(ModalScreen[None]):
    """Live view of the in-memory log buffer."""

    BINDINGS = DEBUG_LOG_BINDINGS

    def __init__(self, export_path: Path | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._export_path = export_path
        self._line_count = 0
        self._buffer_generation = 0
        self._refresh_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="debug-log-container"):
            yield Label("Debug Logs", classes="modal-title")
            yield Label(
                "[dim]F12/Esc to close | c to clear | s to save[/dim]",
                classes="modal-subtitle",
            )
            yield Rule()
            yield RichLog(id="debug-log", markup=True, auto_scroll=True, wrap=True)

    def on_mount(self) -> None:
        self._buffer_generation = get_buffer_generation()
        self._update_logs()
        self._refresh_timer = self.set_interval(0.5, self._update_logs)

    def on_unmount(self) -> None:
        if self._refresh_timer is not None:
            self._refresh_timer.stop()
            self._refresh_timer = None

    def _update_logs(self) -> None:
        rich_log = self.query_one("#debug-log", RichLog)
        generation = get_buffer_generation()
        buffer_len = len(log_buffer)
        # Cleared, or the ring buffer dropped entries: start over.
        if generation != self._buffer_generation or buffer_len < self._line_count:
            self._buffer_generation = generation
            self._line_count = 0
            rich_log.clear()
        if buffer_len > self._line_count:
            for entry in list(log_buffer)[self._line_count :]:
                rich_log.write(self._format_entry(entry))
            self._line_count = buffer_len

    def _format_entry(self, entry: LogEntry) -> str:
        color = _LEVEL_COLORS.get(entry.level, "white")
        prefix = escape(f"{entry.clock()} [{entry.level}]")
        source = escape(entry.logger)
        return f"[{color}]{prefix}[/{color}] [dim]{source}[/dim] {escape(entry.message)}"

    def action_close(self) -> None:
        self.dismiss(None)

    def action_clear_logs(self) -> None:
        clear_log_buffer()
        self._buffer_generation = get_buffer_generation()
        self._line_count = 0
        rich_log = self.query_one("#debug-log", RichLog)
        rich_log.clear()
        rich_log.write("[dim]Logs cleared[/dim]")

    def action_save_logs(self) -> None:
        path = self._export_path or get_debug_log_path()
        rich_log = self.query_one("#debug-log", RichLog)
        try:
            count = export_logs_to_file(path)
        except OSError as exc:
            rich_log.write(f"[red]✗ Failed to export logs: {escape(str(exc))}[/red]")
            return
        rich_log.write(f"[green]✓ Exported {count} log entries to {escape(str(path))}[/green]")
