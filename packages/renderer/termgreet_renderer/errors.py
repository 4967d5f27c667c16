"""Renderer configuration errors."""

from __future__ import annotations

from termgreet_display.errors import TermgreetError


class InvalidGeometry(TermgreetError):
    """Requested cell or pixel dimensions are zero or negative."""


class InvalidRenderConfig(TermgreetError):
    """Block rendering configuration cannot produce any glyph."""
