"""Kitty graphics protocol encoder for raw RGB/RGBA pixel data.

Protocol reference: https://sw.kovidgoyal.net/kitty/graphics-protocol/

The image is transmitted and displayed in one go (``a=T``). The base64 text is
split into frames of at most ``MAX_CHUNK_SIZE`` bytes; every frame but the
last carries ``m=1``. Only the first frame carries the image keys, the
protocol ignores (and some terminals reject) keys other than ``m``/``q`` on
continuation frames.
"""

from __future__ import annotations

import base64

from .errors import EncodingError
from .models import PixelFormat, ProtocolChunk, ProtocolPayload

MAX_CHUNK_SIZE = 4096

SAVE_CURSOR = "\x1b7"
RESTORE_CURSOR = "\x1b8"

_FORMATS: dict[int, PixelFormat] = {
    3: PixelFormat.RGB,
    4: PixelFormat.RGBA,
}


def cursor_forward(cells: int) -> str:
    return f"\x1b[{cells}C"


def cursor_up(cells: int) -> str:
    return f"\x1b[{cells}A"


def serialize_pixels(data: bytes, width: int, height: int, channels: int) -> tuple[bytes, PixelFormat]:
    fmt = _FORMATS.get(channels)
    if fmt is None:
        raise EncodingError(f"Unsupported channel count for graphics protocol: {channels}")
    expected = width * height * channels
    if width <= 0 or height <= 0 or len(data) != expected:
        raise EncodingError(f"Pixel data must be {expected} bytes for {width}x{height}x{channels}, got {len(data)}")
    return bytes(data), fmt


def split_chunks(encoded: str, chunk_size: int = MAX_CHUNK_SIZE) -> list[str]:
    if chunk_size <= 0 or chunk_size % 4 != 0:
        raise ValueError("Chunk size must be a positive multiple of 4")
    return [encoded[i : i + chunk_size] for i in range(0, len(encoded), chunk_size)]


def encode_image(
    data: bytes,
    width: int,
    height: int,
    channels: int,
    columns: int,
    rows: int,
    image_id: int,
    chunk_size: int = MAX_CHUNK_SIZE,
) -> ProtocolPayload:
    raw, fmt = serialize_pixels(data, width, height, channels)
    encoded = base64.standard_b64encode(raw).decode("ascii")
    bodies = split_chunks(encoded, chunk_size)

    chunks: list[ProtocolChunk] = []
    last = len(bodies) - 1
    for i, body in enumerate(bodies):
        more = i < last
        m = 1 if more else 0
        if i == 0:
            control = f"a=T,f={int(fmt)},s={width},v={height},c={columns},r={rows},i={image_id},q=2,m={m}"
        else:
            control = f"m={m}"
        chunks.append(ProtocolChunk(control=control, body=body, more=more))

    return ProtocolPayload(
        image_id=image_id,
        pixel_format=fmt,
        pixel_width=width,
        pixel_height=height,
        columns=columns,
        rows=rows,
        chunks=tuple(chunks),
        prefix=SAVE_CURSOR,
        suffix=RESTORE_CURSOR + cursor_forward(columns),
    )
