"""One render pass: geometry, renderer selection, fallback, composition."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

from termgreet_display.errors import EncodingError, TermgreetError
from termgreet_display.kitty import encode_image
from termgreet_display.models import TerminalCapability

from .blocks import grid_to_lines, render_blocks, validate_block_config
from .compositor import compose_blocks, compose_info_only, compose_protocol, plan_composition
from .geometry import plan_geometry
from .models import BlockRenderConfig, Composition, GeometryRequest, Layout, PixelBuffer, RenderGeometry
from .pixels import scale_pixels

logger = logging.getLogger("termgreet.renderer")


class RenderMode(str, Enum):
    KITTY = "kitty"
    BLOCKS = "blocks"
    INFO_ONLY = "info-only"


@dataclass(frozen=True)
class RenderOutcome:
    mode: RenderMode
    geometry: RenderGeometry | None = None
    fallback_reason: str | None = None
    error: TermgreetError | None = None


@dataclass(frozen=True)
class RenderResult:
    composition: Composition
    outcome: RenderOutcome

    @property
    def text(self) -> str:
        return self.composition.text()


def render(
    pixels: PixelBuffer | None,
    text_lines: list[str],
    geometry_request: GeometryRequest,
    block_config: BlockRenderConfig,
    capability: TerminalCapability,
    layout: Layout | str = Layout.VERTICAL,
    padding: int = 2,
    header: tuple[str, ...] = (),
    passthrough: bool = False,
    image_id: int | None = None,
    missing_reason: str | None = None,
) -> RenderResult:
    """Render one frame.

    ``InvalidGeometry`` and ``InvalidRenderConfig`` propagate. A protocol
    encoding failure falls back to block rendering. Without pixels the frame
    is composed from text alone.
    """
    if pixels is None:
        plan = plan_composition(layout, padding, None, header)
        outcome = RenderOutcome(mode=RenderMode.INFO_ONLY, fallback_reason=missing_reason)
        return RenderResult(composition=compose_info_only(text_lines, plan), outcome=outcome)

    geometry = plan_geometry(pixels.width, pixels.height, geometry_request)
    validate_block_config(block_config)
    plan = plan_composition(layout, padding, geometry, header)

    fallback_reason = None
    error: TermgreetError | None = None
    if capability == TerminalCapability.KITTY_GRAPHICS:
        try:
            composition = _render_protocol(pixels, geometry, text_lines, plan, passthrough, image_id)
            return RenderResult(composition=composition, outcome=RenderOutcome(mode=RenderMode.KITTY, geometry=geometry))
        except EncodingError as exc:
            logger.warning(f"graphics protocol encoding failed, falling back to blocks: {exc}", extra={"event": "kitty_fallback"})
            fallback_reason = "fell back to block rendering"
            error = exc

    grid = render_blocks(pixels, geometry, block_config)
    composition = compose_blocks(grid_to_lines(grid), text_lines, plan)
    outcome = RenderOutcome(mode=RenderMode.BLOCKS, geometry=geometry, fallback_reason=fallback_reason, error=error)
    return RenderResult(composition=composition, outcome=outcome)


def _render_protocol(pixels, geometry, text_lines, plan, passthrough, image_id) -> Composition:
    scaled = scale_pixels(pixels, geometry.pixel_width, geometry.pixel_height)
    payload = encode_image(
        scaled.data,
        scaled.width,
        scaled.height,
        scaled.channels,
        columns=geometry.columns,
        rows=geometry.rows,
        image_id=image_id if image_id is not None else random.randint(1, 0xFFFFFF),
    )
    logger.debug(
        f"encoded {len(payload.chunks)} protocol chunks for {geometry.columns}x{geometry.rows} cells",
        extra={"event": "kitty_encoded"},
    )
    return compose_protocol(payload.to_escape(passthrough), geometry, text_lines, plan)
