"""Terminal capability detection, kitty graphics encoding, and output transport."""

from .capability import KITTY_GRAPHICS_TERMINALS, detect_capability, identify_terminal, in_multiplexer
from .errors import EncodingError, OutputError, TermgreetError
from .kitty import MAX_CHUNK_SIZE, encode_image
from .models import PixelFormat, ProtocolChunk, ProtocolPayload, TerminalCapability, TerminalSignal
from .transport import TerminalWriter, WriteStats

__all__ = [
    "EncodingError",
    "KITTY_GRAPHICS_TERMINALS",
    "MAX_CHUNK_SIZE",
    "OutputError",
    "PixelFormat",
    "ProtocolChunk",
    "ProtocolPayload",
    "TermgreetError",
    "TerminalCapability",
    "TerminalSignal",
    "TerminalWriter",
    "WriteStats",
    "detect_capability",
    "encode_image",
    "identify_terminal",
    "in_multiplexer",
]
