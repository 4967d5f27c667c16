"""Environment-based classification of terminal graphics support."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from .models import TerminalCapability, TerminalSignal

logger = logging.getLogger("termgreet.display")

# Checked in order; only terminals known to implement the kitty graphics
# protocol belong here. Unknown terminals fall through to BLOCK_ONLY.
KITTY_GRAPHICS_TERMINALS: tuple[TerminalSignal, ...] = (
    TerminalSignal(variable="KITTY_WINDOW_ID", terminal="kitty"),
    TerminalSignal(variable="TERM", terminal="kitty", contains="kitty"),
    TerminalSignal(variable="GHOSTTY_RESOURCES_DIR", terminal="ghostty"),
    TerminalSignal(variable="TERM_PROGRAM", terminal="ghostty", equals="ghostty"),
    TerminalSignal(variable="TERM", terminal="ghostty", equals="xterm-ghostty"),
    TerminalSignal(variable="TERM_PROGRAM", terminal="wezterm", equals="WezTerm"),
    TerminalSignal(variable="TERM", terminal="wezterm", equals="wezterm"),
)


def identify_terminal(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the first allow-listed terminal the environment points at."""
    env = os.environ if environ is None else environ
    for signal in KITTY_GRAPHICS_TERMINALS:
        if signal.matches(env):
            return signal.terminal
    return None


def in_multiplexer(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return bool(env.get("TMUX"))


def detect_capability(
    environ: Mapping[str, str] | None = None,
    prefer_kitty_graphics: bool = True,
) -> TerminalCapability:
    if not prefer_kitty_graphics:
        return TerminalCapability.BLOCK_ONLY

    terminal = identify_terminal(environ)
    if terminal is None:
        logger.debug("no graphics-capable terminal signal found", extra={"event": "capability_block_only"})
        return TerminalCapability.BLOCK_ONLY

    logger.debug(f"graphics-capable terminal detected: {terminal}", extra={"event": "capability_kitty"})
    return TerminalCapability.KITTY_GRAPHICS
