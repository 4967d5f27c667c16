"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class ColorMode(str, Enum):
    TRUECOLOR = "truecolor"
    COLOR256 = "256color"
    COLOR16 = "16color"
    MONOCHROME = "monochrome"


class SamplingMethod(str, Enum):
    AVERAGE = "average"
    DOMINANT = "dominant"
    WEIGHTED = "weighted"


class Layout(str, Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded row-major pixel samples, 1 (L), 2 (LA), 3 (RGB) or 4 (RGBA) channels."""

    width: int
    height: int
    data: bytes
    channels: int = 4

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Pixel buffer dimensions must be positive")
        if len(self.data) != self.width * self.height * self.channels:
            raise ValueError("Pixel data length does not match width*height*channels")

    def as_array(self) -> np.ndarray:
        arr = np.frombuffer(self.data, dtype=np.uint8)
        return arr.reshape((self.height, self.width, self.channels))


@dataclass(frozen=True)
class GeometryRequest:
    width: int | None
    height: int | None
    cell_width: int
    cell_height: int
    auto_fit: bool = False


@dataclass(frozen=True)
class RenderGeometry:
    columns: int
    rows: int
    pixel_width: int
    pixel_height: int


@dataclass(frozen=True)
class BlockRenderConfig:
    block_style: str = "default"
    custom_blocks: tuple[str, ...] = ("█", "▓", "▒", "░", " ")
    brightness_thresholds: tuple[float, ...] = (0.8, 0.6, 0.3, 0.1)
    color_mode: ColorMode = ColorMode.TRUECOLOR
    contrast: float = 1.0
    brightness_boost: float = 0.0
    sampling_method: SamplingMethod = SamplingMethod.AVERAGE
    enable_dithering: bool = False


CellColor = tuple[int, int, int] | int | None


@dataclass(frozen=True)
class BlockCell:
    glyph: str
    color: CellColor
    brightness: float
    rendered: float


@dataclass
class BlockGrid:
    columns: int
    rows: int
    color_mode: ColorMode
    cells: list[BlockCell] = field(default_factory=list)

    def row(self, index: int) -> list[BlockCell]:
        start = index * self.columns
        return self.cells[start : start + self.columns]


@dataclass(frozen=True)
class CompositionPlan:
    layout: Layout
    padding: int
    left_width: int
    header: tuple[str, ...] = ()


@dataclass
class Composition:
    header: list[str]
    preamble: str
    rows: list[str]
    trailing_blank_lines: int = 0

    def text(self) -> str:
        out = "".join(line + "\n" for line in self.header)
        out += self.preamble
        if self.rows:
            out += "\n".join(self.rows) + "\n"
        return out + "\n" * self.trailing_blank_lines
