"""Error types shared by the display protocol and renderer packages."""

from __future__ import annotations


class TermgreetError(Exception):
    """Base class for render pass failures."""


class EncodingError(TermgreetError):
    """Pixel data cannot be serialized into the graphics protocol wire format."""


class OutputError(TermgreetError):
    """Writing the composed frame to the output stream failed."""
