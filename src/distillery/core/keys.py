"""Translate terminal key names into ``KeyInput`` actions.

Key names follow Textual's convention (``"ctrl+s"``, ``"shift+tab"``,
``"pagedown"``); the core itself never imports Textual.
"""

from __future__ import annotations

from distillery.core.actions import KeyCode, KeyInput, Modifiers

_NAMED_KEYS: dict[str, KeyCode] = {
    "enter": KeyCode.ENTER,
    "escape": KeyCode.ESCAPE,
    "backspace": KeyCode.BACKSPACE,
    "delete": KeyCode.DELETE,
    "tab": KeyCode.TAB,
    "shift+tab": KeyCode.BACKTAB,
    "backtab": KeyCode.BACKTAB,
    "up": KeyCode.UP,
    "down": KeyCode.DOWN,
    "left": KeyCode.LEFT,
    "right": KeyCode.RIGHT,
    "home": KeyCode.HOME,
    "end": KeyCode.END,
    "pageup": KeyCode.PAGE_UP,
    "pagedown": KeyCode.PAGE_DOWN,
}

_MODIFIER_NAMES: dict[str, Modifiers] = {
    "shift": Modifiers.SHIFT,
    "ctrl": Modifiers.CONTROL,
    "alt": Modifiers.ALT,
    "meta": Modifiers.ALT,
}


def to_key_input(key: str, character: str | None = None) -> KeyInput | None:
    """Build a ``KeyInput`` from a key name and the character it produced.

    Returns None for keys the engine has no use for (function keys, bare
    modifier presses).
    """
    named = _NAMED_KEYS.get(key)
    if named is not None:
        return KeyInput(named)

    *modifier_names, base = key.split("+")
    modifiers = Modifiers.NONE
    for name in modifier_names:
        flag = _MODIFIER_NAMES.get(name)
        if flag is None:
            return None
        modifiers |= flag

    if modifiers & (Modifiers.CONTROL | Modifiers.ALT):
        if len(base) == 1:
            return KeyInput(base.lower() if base.isalpha() else base, modifiers)
        if base in _NAMED_KEYS:
            return KeyInput(_NAMED_KEYS[base], modifiers)
        return None

    if base in _NAMED_KEYS:
        return KeyInput(_NAMED_KEYS[base], modifiers)

    if character is not None and len(character) == 1 and character.isprintable():
        if character.isupper():
            modifiers |= Modifiers.SHIFT
        return KeyInput(character, modifiers)

    return None
