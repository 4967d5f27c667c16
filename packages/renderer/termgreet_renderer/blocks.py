"""Glyph-grid approximation of a pixel buffer for terminals without graphics support.

Each output cell samples a rectangular region of the source, applies contrast
and brightness adjustment, picks a glyph from the ramp by luminance and
resolves a foreground color for the configured color mode. With dithering
enabled the luminance quantization error of every cell is diffused to the
unprocessed neighbours (Floyd-Steinberg weights), so processing order is
strictly row-major.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import InvalidRenderConfig
from .models import BlockCell, BlockGrid, BlockRenderConfig, ColorMode, PixelBuffer, RenderGeometry, SamplingMethod
from .palette import RESET, color_sgr, resolve_color

LUMA = np.array([0.2126, 0.7152, 0.0722])

GLYPH_RAMPS: dict[str, tuple[str, ...]] = {
    "default": ("█", "▓", "▒", "░", " "),
    "ascii": ("#", "*", ":", ".", " "),
    "braille": ("⣿", "⣶", "⣤", "⣀", " "),
}

# (row offset, column offset, weight)
_DIFFUSION = ((0, 1, 7 / 16), (1, -1, 3 / 16), (1, 0, 5 / 16), (1, 1, 1 / 16))


@dataclass(frozen=True)
class GlyphRamp:
    """Glyphs densest first, paired with descending luminance thresholds.

    Slot ``i`` covers luminance in ``[thresholds[i], thresholds[i-1])``; the
    extra last slot covers everything below the lowest threshold.
    """

    glyphs: tuple[str, ...]
    thresholds: tuple[float, ...]

    def slot_for(self, luminance: float) -> int:
        for i, threshold in enumerate(self.thresholds):
            if luminance >= threshold:
                return i
        return len(self.thresholds)

    def glyph(self, slot: int) -> str:
        return self.glyphs[min(slot, len(self.glyphs) - 1)]

    def level(self, slot: int) -> float:
        if slot == 0:
            return 1.0
        if slot >= len(self.thresholds):
            return 0.0
        return (self.thresholds[slot] + self.thresholds[slot - 1]) / 2


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_block_config(config: BlockRenderConfig) -> GlyphRamp:
    if config.block_style == "custom":
        if not isinstance(config.custom_blocks, (list, tuple)) or not all(isinstance(g, str) for g in config.custom_blocks):
            raise InvalidRenderConfig(f"Custom blocks must be a list of strings: {config.custom_blocks!r}")
        glyphs = tuple(config.custom_blocks)
    else:
        glyphs = GLYPH_RAMPS.get(config.block_style, GLYPH_RAMPS["default"])
    if not glyphs:
        raise InvalidRenderConfig("Glyph ramp is empty")
    raw = config.brightness_thresholds
    if not isinstance(raw, (list, tuple)) or not all(_is_number(t) for t in raw):
        raise InvalidRenderConfig(f"Brightness thresholds must be a list of numbers: {raw!r}")
    if not raw:
        raise InvalidRenderConfig("Brightness threshold list is empty")
    thresholds = tuple(float(t) for t in raw)
    if any(t < 0.0 or t > 1.0 for t in thresholds):
        raise InvalidRenderConfig(f"Brightness thresholds must be within [0, 1]: {list(thresholds)}")
    return GlyphRamp(glyphs=glyphs, thresholds=tuple(sorted(thresholds, reverse=True)))


def _normalized_rgb(pixels: PixelBuffer) -> np.ndarray:
    arr = pixels.as_array().astype(np.float64) / 255.0
    if pixels.channels in (1, 2):
        rgb = np.repeat(arr[:, :, :1], 3, axis=2)
    else:
        rgb = arr[:, :, :3]
    if pixels.channels in (2, 4):
        rgb = rgb * arr[:, :, -1:]
    return rgb


def _sample_average(region: np.ndarray) -> np.ndarray:
    return region.mean(axis=0)


def _sample_dominant(region: np.ndarray) -> np.ndarray:
    buckets = np.rint(region * 255).astype(np.int32) >> 3
    keys = (buckets[:, 0] << 10) | (buckets[:, 1] << 5) | buckets[:, 2]
    _values, inverse, counts = np.unique(keys, return_inverse=True, return_counts=True)
    best = int(np.argmax(counts))
    return region[inverse.reshape(-1) == best].mean(axis=0)


def _sample_weighted(region: np.ndarray) -> np.ndarray:
    weights = region @ LUMA
    total = float(weights.sum())
    if total <= 1e-12:
        return region.mean(axis=0)
    return (region * weights[:, None]).sum(axis=0) / total


_SAMPLERS = {
    SamplingMethod.AVERAGE: _sample_average,
    SamplingMethod.DOMINANT: _sample_dominant,
    SamplingMethod.WEIGHTED: _sample_weighted,
}


def adjust_color(rgb: np.ndarray, contrast: float, brightness_boost: float) -> np.ndarray:
    adjusted = np.clip((rgb - 0.5) * contrast + 0.5, 0.0, 1.0)
    return np.clip(adjusted + brightness_boost, 0.0, 1.0)


def luminance(rgb: np.ndarray) -> float:
    return float(rgb @ LUMA)


def _diffuse(errors: np.ndarray, row: int, col: int, error: float) -> None:
    rows, cols = errors.shape
    targets = [(row + dr, col + dc, w) for dr, dc, w in _DIFFUSION if row + dr < rows and 0 <= col + dc < cols]
    total = sum(w for _r, _c, w in targets)
    for r, c, w in targets:
        errors[r, c] += error * w / total


def render_blocks(pixels: PixelBuffer, geometry: RenderGeometry, config: BlockRenderConfig) -> BlockGrid:
    ramp = validate_block_config(config)
    sampler = _SAMPLERS[SamplingMethod(config.sampling_method)]
    mode = ColorMode(config.color_mode)
    rgb = _normalized_rgb(pixels)

    cols, rows = geometry.columns, geometry.rows
    width, height = pixels.width, pixels.height
    errors = np.zeros((rows, cols), dtype=np.float64)
    grid = BlockGrid(columns=cols, rows=rows, color_mode=mode)

    for r in range(rows):
        y0 = r * height // rows
        y1 = max(y0 + 1, (r + 1) * height // rows)
        for c in range(cols):
            x0 = c * width // cols
            x1 = max(x0 + 1, (c + 1) * width // cols)
            region = rgb[y0:y1, x0:x1].reshape(-1, 3)

            color = adjust_color(sampler(region), config.contrast, config.brightness_boost)
            brightness = luminance(color)
            value = brightness + errors[r, c] if config.enable_dithering else brightness

            slot = ramp.slot_for(value)
            rendered = ramp.level(slot)
            if config.enable_dithering:
                _diffuse(errors, r, c, value - rendered)

            rgb8 = tuple(int(v) for v in np.rint(color * 255))
            grid.cells.append(
                BlockCell(
                    glyph=ramp.glyph(slot),
                    color=resolve_color(rgb8, mode),  # type: ignore[arg-type]
                    brightness=brightness,
                    rendered=rendered,
                )
            )
    return grid


def grid_to_lines(grid: BlockGrid) -> list[str]:
    lines: list[str] = []
    for r in range(grid.rows):
        parts: list[str] = []
        active = ""
        for cell in grid.row(r):
            if cell.glyph.strip():
                sgr = color_sgr(cell.color, grid.color_mode)
                if sgr and sgr != active:
                    parts.append(sgr)
                    active = sgr
            parts.append(cell.glyph)
        if active:
            parts.append(RESET)
        lines.append("".join(parts))
    return lines
