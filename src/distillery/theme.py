"""Textual themes for Distillery."""

from __future__ import annotations

import os

from textual.theme import Theme

# Still-house palette: copper stills, oak casks, and amber spirit
DISTILLERY_THEME = Theme(
    name="distillery",
    primary="#d08c4a",  # Copper
    secondary="#e2b45c",  # Amber
    accent="#5fb3b3",  # Verdigris
    foreground="#d5cfc4",
    background="#14110f",  # Charred oak
    surface="#1c1815",
    panel="#26201b",
    warning="#e2b45c",
    error="#e0604e",
    success="#8fbf6a",
    dark=True,
    variables={
        "border": "#3a322b",
        "border-blurred": "#3a322b80",
        "text-muted": "#7a7068",
        "text-disabled": "#7a706880",
        "scrollbar": "#3a322b",
        "scrollbar-hover": "#d08c4a",
        "scrollbar-active": "#e2b45c",
    },
)

# xterm-256 approximations of the palette above
DISTILLERY_THEME_256 = Theme(
    name="distillery-256",
    primary="#d7875f",  # color(173)
    secondary="#d7af5f",  # color(179)
    accent="#5fafaf",  # color(73)
    foreground="#d0d0d0",  # color(252)
    background="#121212",  # color(233)
    surface="#1c1c1c",  # color(234)
    panel="#262626",  # color(235)
    warning="#d7af5f",
    error="#d75f5f",  # color(167)
    success="#87af5f",  # color(107)
    dark=True,
    variables={
        "border": "#3a3a3a",
        "border-blurred": "#3a3a3a80",
        "text-muted": "#767676",
        "text-disabled": "#76767680",
        "scrollbar": "#3a3a3a",
        "scrollbar-hover": "#d7875f",
        "scrollbar-active": "#d7af5f",
    },
)

# Terminal.app sets COLORTERM in some shells but only renders 256 colors
_NO_TRUECOLOR_TERMINALS = frozenset({"apple_terminal"})
_TRUECOLOR_TERMINALS = frozenset(
    {"iterm.app", "vscode", "alacritty", "kitty", "wezterm", "ghostty", "warp", "tabby"}
)


def supports_truecolor() -> bool:
    """Best-effort 24-bit color detection from the environment.

    ``TEXTUAL_COLOR_SYSTEM=truecolor`` forces it on. Otherwise ``TERM_PROGRAM``
    is trusted before ``COLORTERM``.
    """
    if os.environ.get("TEXTUAL_COLOR_SYSTEM", "").lower() == "truecolor":
        return True
    term_program = os.environ.get("TERM_PROGRAM", "").lower()
    if term_program in _NO_TRUECOLOR_TERMINALS:
        return False
    if term_program in _TRUECOLOR_TERMINALS:
        return True
    if os.environ.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return True
    return bool(os.environ.get("WT_SESSION"))


def theme_name() -> str:
    return DISTILLERY_THEME.name if supports_truecolor() else DISTILLERY_THEME_256.name
