"""Pixel buffer conversion, scaling, and synthetic test patterns."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from .models import PixelBuffer

_MODES: dict[int, str] = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}
_CHANNELS: dict[str, int] = {mode: channels for channels, mode in _MODES.items()}

PATTERN_NAMES = ("black", "white", "red", "green", "blue", "quadrants", "h-gradient", "v-gradient", "checkerboard")


def image_to_pixels(image: Image.Image) -> PixelBuffer:
    if image.mode not in _CHANNELS:
        image = image.convert("RGBA")
    return PixelBuffer(
        width=image.width,
        height=image.height,
        data=image.tobytes(),
        channels=_CHANNELS[image.mode],
    )


def pixels_to_image(pixels: PixelBuffer) -> Image.Image:
    mode = _MODES.get(pixels.channels)
    if mode is None:
        raise ValueError(f"Unsupported channel count: {pixels.channels}")
    return Image.frombytes(mode, (pixels.width, pixels.height), pixels.data)


def load_pixels(path: Path) -> PixelBuffer:
    """Decode an image file into an RGBA buffer. Raises OSError on unreadable input."""
    with Image.open(path) as image:
        return image_to_pixels(image.convert("RGBA"))


def scale_pixels(pixels: PixelBuffer, width: int, height: int) -> PixelBuffer:
    if (pixels.width, pixels.height) == (width, height):
        return pixels
    resized = pixels_to_image(pixels).resize((width, height), Image.Resampling.LANCZOS)
    return image_to_pixels(resized)


def build_test_pattern(name: str, width: int, height: int) -> PixelBuffer:
    img = Image.new("RGBA", (width, height), (0, 0, 0, 255))
    px = img.load()

    for y in range(height):
        for x in range(width):
            if name == "black":
                c = (0, 0, 0)
            elif name == "white":
                c = (255, 255, 255)
            elif name == "red":
                c = (255, 0, 0)
            elif name == "green":
                c = (0, 255, 0)
            elif name == "blue":
                c = (0, 0, 255)
            elif name == "quadrants":
                if x < width // 2 and y < height // 2:
                    c = (255, 0, 0)
                elif x >= width // 2 and y < height // 2:
                    c = (0, 255, 0)
                elif x < width // 2 and y >= height // 2:
                    c = (0, 0, 255)
                else:
                    c = (255, 255, 255)
            elif name == "h-gradient":
                v = int(255 * (x / max(width - 1, 1)))
                c = (v, v, v)
            elif name == "v-gradient":
                v = int(255 * (y / max(height - 1, 1)))
                c = (v, v, v)
            elif name == "checkerboard":
                c = (255, 255, 255) if ((x // 24 + y // 24) % 2 == 0) else (0, 0, 0)
            else:
                raise ValueError(f"Unknown pattern: {name}")
            px[x, y] = (*c, 255)
    return image_to_pixels(img)
