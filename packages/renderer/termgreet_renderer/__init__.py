"""Renderer package: geometry planning, glyph-grid rendering, and composition."""

from .blocks import GLYPH_RAMPS, GlyphRamp, grid_to_lines, render_blocks, validate_block_config
from .compositor import compose_blocks, compose_info_only, compose_protocol, plan_composition, visible_width
from .errors import InvalidGeometry, InvalidRenderConfig
from .geometry import plan_geometry
from .models import (
    BlockCell,
    BlockGrid,
    BlockRenderConfig,
    ColorMode,
    Composition,
    CompositionPlan,
    GeometryRequest,
    Layout,
    PixelBuffer,
    RenderGeometry,
    SamplingMethod,
)
from .palette import colorize
from .pipeline import RenderMode, RenderOutcome, RenderResult, render
from .pixels import PATTERN_NAMES, build_test_pattern, image_to_pixels, load_pixels, scale_pixels

__all__ = [
    "BlockCell",
    "BlockGrid",
    "BlockRenderConfig",
    "ColorMode",
    "Composition",
    "CompositionPlan",
    "GLYPH_RAMPS",
    "GeometryRequest",
    "GlyphRamp",
    "InvalidGeometry",
    "InvalidRenderConfig",
    "Layout",
    "PATTERN_NAMES",
    "PixelBuffer",
    "RenderGeometry",
    "RenderMode",
    "RenderOutcome",
    "RenderResult",
    "SamplingMethod",
    "build_test_pattern",
    "colorize",
    "compose_blocks",
    "compose_info_only",
    "compose_protocol",
    "grid_to_lines",
    "image_to_pixels",
    "load_pixels",
    "plan_composition",
    "plan_geometry",
    "render",
    "render_blocks",
    "scale_pixels",
    "validate_block_config",
    "visible_width",
]
