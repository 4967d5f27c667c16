"""Greeting runtime: gather facts, load the image, render one frame, write it out."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Mapping

from termgreet_core import AppConfig, build_header, build_info_lines, enabled_modules, format_motd, load_motd
from termgreet_core.config import config_root, motd_path
from termgreet_core.logging_setup import get_logger
from termgreet_display import TerminalWriter, detect_capability, identify_terminal, in_multiplexer
from termgreet_renderer import (
    BlockRenderConfig,
    ColorMode,
    GeometryRequest,
    PixelBuffer,
    RenderOutcome,
    RenderResult,
    SamplingMethod,
    build_test_pattern,
    load_pixels,
    render,
)
from termgreet_telemetry import FactsProvider, facts_to_values

TEST_PATTERN_SIZE = 240


def default_logo_path() -> Path:
    return config_root() / "pngs" / "termgreet_logo.png"


def resolve_image_path(cfg: AppConfig) -> Path | None:
    if cfg.display.image_path:
        path = Path(cfg.display.image_path).expanduser()
        if path.exists():
            return path
        get_logger().warning(f"configured image not found: {path}", extra={"event": "image_missing"})
    logo = default_logo_path()
    return logo if logo.exists() else None


def load_image(cfg: AppConfig, test_pattern: str | None = None) -> tuple[PixelBuffer | None, str | None]:
    """Return the pixels to draw, or None and the reason the image is skipped."""
    if test_pattern:
        return build_test_pattern(test_pattern, TEST_PATTERN_SIZE, TEST_PATTERN_SIZE), None
    path = resolve_image_path(cfg)
    if path is None:
        return None, "no image configured"
    try:
        return load_pixels(path), None
    except OSError as exc:
        get_logger().warning(f"image decode failed for {path}: {exc}", extra={"event": "image_decode_failed"})
        return None, "fell back to info-only, no image"


def geometry_request(cfg: AppConfig) -> GeometryRequest:
    size = cfg.display.image_size
    return GeometryRequest(
        width=size.width,
        height=size.height,
        cell_width=size.cell_width,
        cell_height=size.cell_height,
        auto_fit=size.auto_fit,
    )


def _as_tuple(value):
    # Anything else is passed through so validation reports it.
    return tuple(value) if isinstance(value, list) else value


def block_render_config(cfg: AppConfig) -> BlockRenderConfig:
    block = cfg.display.block_rendering
    return BlockRenderConfig(
        block_style=block.block_style,
        custom_blocks=_as_tuple(block.custom_blocks),
        brightness_thresholds=_as_tuple(block.brightness_thresholds),
        color_mode=ColorMode(block.color_mode),
        contrast=block.contrast,
        brightness_boost=block.brightness_boost,
        sampling_method=SamplingMethod(block.sampling_method),
        enable_dithering=block.enable_dithering,
    )


def render_greeting(
    cfg: AppConfig,
    facts: Mapping[str, str],
    pixels: PixelBuffer | None,
    environ: Mapping[str, str] | None = None,
    missing_reason: str | None = None,
    is_tty: bool = True,
) -> RenderResult:
    """Compose the greeting frame.

    Graphics protocol escapes are only emitted when the output is a terminal;
    redirected output gets the glyph grid instead.
    """
    env = os.environ if environ is None else environ
    capability = detect_capability(env, cfg.display.prefer_kitty_graphics and is_tty)
    get_logger().debug(
        f"capability={capability.value} terminal={identify_terminal(env)} tty={is_tty}",
        extra={"event": "capability"},
    )
    return render(
        pixels,
        build_info_lines(facts, cfg),
        geometry_request=geometry_request(cfg),
        block_config=block_render_config(cfg),
        capability=capability,
        layout=cfg.display.layout,
        padding=cfg.display.padding,
        header=build_header(cfg),
        passthrough=in_multiplexer(env),
        missing_reason=missing_reason,
    )


def show_motd(cfg: AppConfig, writer: TerminalWriter) -> bool:
    path = motd_path(cfg)
    try:
        motd = load_motd(path)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        get_logger().warning(f"ignoring unreadable MOTD file {path}: {exc}", extra={"event": "motd_unreadable"})
        return False
    text = format_motd(motd)
    if text is None:
        return False
    writer.write(text + "\n")
    return True


def run(
    cfg: AppConfig,
    show_image: bool = True,
    test_pattern: str | None = None,
    environ: Mapping[str, str] | None = None,
    writer: TerminalWriter | None = None,
    provider: FactsProvider | None = None,
) -> RenderOutcome:
    writer = writer or TerminalWriter()
    facts = facts_to_values((provider or FactsProvider(environ)).gather(enabled_modules(cfg)))

    pixels, reason = None, "image display disabled"
    if show_image and (cfg.display.show_image or test_pattern):
        pixels, reason = load_image(cfg, test_pattern)

    result = render_greeting(cfg, facts, pixels, environ, missing_reason=reason, is_tty=writer.is_tty)
    writer.write(result.text)
    get_logger().info(
        f"rendered greeting mode={result.outcome.mode.value} reason={result.outcome.fallback_reason}",
        extra={"event": "render_done"},
    )

    if cfg.show_motd:
        show_motd(cfg, writer)
    return result.outcome
