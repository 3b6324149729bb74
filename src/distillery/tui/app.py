"""Main Distillery TUI application."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual.app import App

from distillery.core.engine import Engine
from distillery.core.executor import CommandExecutor
from distillery.core.startup import bootstrap
from distillery.core.state import AppState
from distillery.debug_log import setup_debug_logging
from distillery.integrations.github import GhCliClient
from distillery.integrations.llm import StoryGenerator
from distillery.keybindings import APP_BINDINGS
from distillery.theme import DISTILLERY_THEME, DISTILLERY_THEME_256, theme_name
from distillery.tui.debug_log import DebugLogModal
from distillery.tui.screen import ReviewScreen

if TYPE_CHECKING:
    from pathlib import Path

    from distillery.config import AppConfig
    from distillery.core.engine import Executor
    from distillery.core.startup import StartupMode

logger = logging.getLogger(__name__)


def build_executor(config: AppConfig) -> CommandExecutor:
    """Wire the real collaborators: gh CLI, OpenAI, and the file cache."""
    return CommandExecutor(
        github=GhCliClient(),
        generator=StoryGenerator(api_key=config.api_key, model=config.model),
    )


class DistilleryApp(App[None]):
    """Distillery TUI: browse a PR as a story and submit a review."""

    TITLE = "Distillery"
    CSS_PATH = "styles/distillery.tcss"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        config: AppConfig,
        startup: StartupMode,
        executor: Executor | None = None,
        log_file: Path | None = None,
    ) -> None:
        super().__init__()

        self.register_theme(DISTILLERY_THEME)
        self.register_theme(DISTILLERY_THEME_256)
        self.theme = theme_name()

        self.config = config
        self.log_file = log_file
        state = AppState()
        self._initial_commands = bootstrap(state, startup, config)
        self.engine = Engine(
            state,
            config,
            executor if executor is not None else build_executor(config),
            on_change=self._on_engine_change,
        )
        self._review_screen: ReviewScreen | None = None

    async def on_mount(self) -> None:
        setup_debug_logging()
        logger.info("Starting in %s", type(self.engine.state.mode).__name__)
        self._review_screen = ReviewScreen(self.engine)
        await self.push_screen(self._review_screen)
        self.run_worker(self.engine.start(self._initial_commands), group="engine")

    def _on_engine_change(self) -> None:
        if self.engine.state.should_quit:
            self.exit()
            return
        if self._review_screen is not None and self._review_screen.is_mounted:
            self._review_screen.refresh_view()

    def action_toggle_debug_log(self) -> None:
        if isinstance(self.screen, DebugLogModal):
            self.pop_screen()
        else:
            self.push_screen(DebugLogModal(export_path=self.log_file))
