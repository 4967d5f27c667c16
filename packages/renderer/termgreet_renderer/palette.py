"""ANSI color tables, nearest-color quantization, and SGR helpers."""

from __future__ import annotations

import numpy as np

from .models import CellColor, ColorMode

RESET = "\x1b[0m"

# xterm default values for the 16 system colors, index order.
ANSI16_RGB: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
    (127, 127, 127),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (92, 92, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)

ANSI_COLOR_NAMES: tuple[str, ...] = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "bright_black",
    "bright_red",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "bright_white",
)

_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


def _build_xterm256() -> np.ndarray:
    colors = list(ANSI16_RGB)
    for r in _CUBE_LEVELS:
        for g in _CUBE_LEVELS:
            for b in _CUBE_LEVELS:
                colors.append((r, g, b))
    for i in range(24):
        v = 8 + 10 * i
        colors.append((v, v, v))
    return np.array(colors, dtype=np.int32)


XTERM256 = _build_xterm256()
ANSI16 = np.array(ANSI16_RGB, dtype=np.int32)


def nearest_index(rgb: tuple[int, int, int], palette: np.ndarray) -> int:
    """Index of the closest palette entry by Euclidean RGB distance, lowest index on ties."""
    diff = palette - np.array(rgb, dtype=np.int32)
    return int(np.argmin((diff * diff).sum(axis=1)))


def resolve_color(rgb: tuple[int, int, int], mode: ColorMode) -> CellColor:
    if mode == ColorMode.TRUECOLOR:
        return rgb
    if mode == ColorMode.COLOR256:
        return nearest_index(rgb, XTERM256)
    if mode == ColorMode.COLOR16:
        return nearest_index(rgb, ANSI16)
    return None


def ansi16_code(index: int) -> int:
    return 30 + index if index < 8 else 90 + (index - 8)


def color_sgr(color: CellColor, mode: ColorMode) -> str:
    if color is None or mode == ColorMode.MONOCHROME:
        return ""
    if mode == ColorMode.TRUECOLOR:
        r, g, b = color  # type: ignore[misc]
        return f"\x1b[38;2;{r};{g};{b}m"
    if mode == ColorMode.COLOR256:
        return f"\x1b[38;5;{color}m"
    return f"\x1b[{ansi16_code(int(color))}m"  # type: ignore[arg-type]


def colorize(text: str, color_name: str | None) -> str:
    """Wrap text in a named ANSI foreground color; unknown names leave it plain."""
    if not color_name:
        return text
    name = color_name.lower()
    if name not in ANSI_COLOR_NAMES:
        return text
    return f"\x1b[{ansi16_code(ANSI_COLOR_NAMES.index(name))}m{text}{RESET}"
