"""Typed models for terminal capability and graphics protocol payloads."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class TerminalCapability(str, Enum):
    KITTY_GRAPHICS = "KittyGraphics"
    BLOCK_ONLY = "BlockOnly"


class PixelFormat(IntEnum):
    RGB = 24
    RGBA = 32


@dataclass(frozen=True)
class TerminalSignal:
    variable: str
    terminal: str
    equals: str | None = None
    contains: str | None = None

    def matches(self, environ) -> bool:
        value = environ.get(self.variable)
        if value is None:
            return False
        if self.equals is not None:
            return value == self.equals
        if self.contains is not None:
            return self.contains in value.lower()
        return bool(value.strip())


@dataclass(frozen=True)
class ProtocolChunk:
    control: str
    body: str
    more: bool

    @property
    def frame(self) -> str:
        return f"\x1b_G{self.control};{self.body}\x1b\\"


@dataclass(frozen=True)
class ProtocolPayload:
    image_id: int
    pixel_format: PixelFormat
    pixel_width: int
    pixel_height: int
    columns: int
    rows: int
    chunks: tuple[ProtocolChunk, ...]
    prefix: str
    suffix: str

    @property
    def encoded(self) -> str:
        return "".join(chunk.body for chunk in self.chunks)

    def frames(self, passthrough: bool = False) -> list[str]:
        if passthrough:
            return [tmux_passthrough(chunk.frame) for chunk in self.chunks]
        return [chunk.frame for chunk in self.chunks]

    def to_escape(self, passthrough: bool = False) -> str:
        return self.prefix + "".join(self.frames(passthrough)) + self.suffix


def tmux_passthrough(sequence: str) -> str:
    """Wrap an escape sequence so tmux forwards it to the outer terminal."""
    return "\x1bPtmux;" + sequence.replace("\x1b", "\x1b\x1b") + "\x1b\\"
