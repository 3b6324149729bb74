"""Input while a command is outstanding: only quitting is honoured.

Everything else is dropped on purpose so keys typed during a fetch cannot act
on state that the pending result is about to replace.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from distillery.core.actions import KeyCode
from distillery.core.reducer.helpers import quit_app

if TYPE_CHECKING:
    from distillery.core.actions import KeyInput
    from distillery.core.commands import Command
    from distillery.core.state import AppState


def handle_input(state: AppState, key: KeyInput) -> list[Command]:
    if key.is_char("q") or key.is_key(KeyCode.ESCAPE):
        return quit_app(state)
    return []
