"""State, actions, commands, the reducer, and the loop that drives them."""

from distillery.core.engine import ActionQueue, Engine
from distillery.core.reducer import reduce
from distillery.core.state import AppState

__all__ = ["ActionQueue", "AppState", "Engine", "reduce"]
