"""Cell and pixel box planning for a render pass."""

from __future__ import annotations

import math

from .errors import InvalidGeometry
from .models import GeometryRequest, RenderGeometry


def _round_cells(value: float) -> int:
    return max(1, math.floor(value + 0.5))


def _check_positive(name: str, value: int | None) -> None:
    if value is None:
        return
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidGeometry(f"{name} must be a whole number of cells or pixels, got {value!r}")
    if value <= 0:
        raise InvalidGeometry(f"{name} must be positive, got {value}")


def plan_geometry(source_width: int, source_height: int, request: GeometryRequest) -> RenderGeometry:
    """Resolve the target cell box and its pixel box.

    Both ``width`` and ``height`` given is an explicit override: the image is
    stretched to that cell box. With one axis given the other follows the
    source aspect ratio. With neither, the source is mapped one pixel box
    per cell size.
    """
    _check_positive("cell_width", request.cell_width)
    _check_positive("cell_height", request.cell_height)
    _check_positive("width", request.width)
    _check_positive("height", request.height)
    if source_width <= 0 or source_height <= 0:
        raise InvalidGeometry(f"Source image has no pixels: {source_width}x{source_height}")

    cw, ch = request.cell_width, request.cell_height
    aspect = source_height / source_width

    if request.width is not None and request.height is not None:
        columns, rows = request.width, request.height
    elif request.width is not None:
        columns = request.width
        rows = _round_cells(columns * cw * aspect / ch)
    elif request.height is not None:
        rows = request.height
        columns = _round_cells(rows * ch / aspect / cw)
    else:
        columns = _round_cells(source_width / cw)
        rows = _round_cells(source_height / ch)

    pixel_width, pixel_height = columns * cw, rows * ch

    if request.auto_fit:
        scale = min(pixel_width / source_width, pixel_height / source_height)
        pixel_width = max(1, math.floor(source_width * scale + 0.5))
        pixel_height = max(1, math.floor(source_height * scale + 0.5))
        columns = max(1, math.ceil(pixel_width / cw))
        rows = max(1, math.ceil(pixel_height / ch))

    return RenderGeometry(columns=columns, rows=rows, pixel_width=pixel_width, pixel_height=pixel_height)
