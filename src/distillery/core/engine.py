"""The run loop: drain actions through the reducer and execute their commands.

One action is reduced at a time. Its commands run sequentially, each awaited
to completion, and each result is queued behind whatever is already waiting.
Keys typed while a command is in flight are therefore queued before that
command's result and are seen by the reducer in the busy mode that issued it.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Protocol

from distillery.core.actions import describe_action
from distillery.core.commands import describe_command
from distillery.core.reducer import reduce

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from distillery.config import AppConfig
    from distillery.core.actions import Action
    from distillery.core.commands import Command
    from distillery.core.state import AppState

logger = logging.getLogger(__name__)


class Executor(Protocol):
    async def execute(self, command: Command) -> Action | None: ...


class ActionQueue:
    """FIFO of pending actions."""

    def __init__(self) -> None:
        self._items: deque[Action] = deque()

    def push(self, action: Action) -> None:
        self._items.append(action)

    def pop(self) -> Action | None:
        return self._items.popleft() if self._items else None

    def __len__(self) -> int:
        return len(self._items)

    def snapshot(self) -> list[Action]:
        return list(self._items)


class Engine:
    """Owns the state and drives it from queued actions.

    Args:
        state: Mutable application state (mutated only through ``reduce``).
        config: Runtime configuration passed to the reducer.
        executor: Performs commands and returns result actions.
        on_change: Called after every state change and before every command,
            so the UI can repaint loading screens before blocking work starts.
    """

    def __init__(
        self,
        state: AppState,
        config: AppConfig,
        executor: Executor,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.state = state
        self.config = config
        self.executor = executor
        self.queue = ActionQueue()
        self._on_change = on_change
        self._draining = False

    @property
    def is_draining(self) -> bool:
        return self._draining

    def enqueue(self, action: Action) -> None:
        self.queue.push(action)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    async def _run_commands(self, commands: Iterable[Command]) -> None:
        for command in commands:
            if self.state.should_quit:
                return
            self._notify()
            logger.debug("Command %s", describe_command(command))
            result = await self.executor.execute(command)
            if result is not None:
                self.queue.push(result)

    async def start(self, commands: Iterable[Command]) -> None:
        """Run startup commands, then drain everything they produced."""
        if self._draining:
            return
        self._draining = True
        try:
            await self._run_commands(commands)
        finally:
            self._draining = False
        await self.run_until_idle()

    async def run_until_idle(self) -> None:
        """Process queued actions until the queue is empty or quit is requested.

        A call made while another drain is active returns at once; the active
        drain picks up anything queued in the meantime.
        """
        if self._draining:
            return
        self._draining = True
        try:
            while not self.state.should_quit:
                action = self.queue.pop()
                if action is None:
                    break
                logger.debug("Action %s in %s", describe_action(action), self.state.mode)
                commands = reduce(self.state, action, self.config)
                self._notify()
                if self.state.should_quit:
                    break
                await self._run_commands(commands)
        finally:
            self._draining = False
        self._notify()
