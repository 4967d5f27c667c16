"""User settings schema and TOML load helpers."""

from __future__ import annotations

import dataclasses
import logging
import os
import platform
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger("termgreet.config")

LAYOUTS = ("vertical", "horizontal")
BLOCK_STYLES = ("default", "ascii", "braille", "custom")
COLOR_MODES = ("truecolor", "256color", "16color", "monochrome")
SAMPLING_METHODS = ("average", "dominant", "weighted")


@dataclass
class SeparatorConfig:
    symbol: str = "->"
    space_before: int = 1
    space_after: int = 1
    align_separator: bool = True


@dataclass
class ColorsConfig:
    title: str = "bright_cyan"
    module: str = "bright_cyan"
    info: str = "bright_white"
    separator: str = "bright_blue"


@dataclass
class GeneralConfig:
    show_title: bool = True
    title: str | None = "System Information"
    separator: SeparatorConfig = field(default_factory=SeparatorConfig)
    colors: ColorsConfig = field(default_factory=ColorsConfig)


@dataclass
class ImageSizeConfig:
    width: int | None = 40
    height: int | None = 20
    cell_width: int = 10
    cell_height: int = 20
    auto_fit: bool = False


@dataclass
class BlockRenderingConfig:
    block_style: str = "default"
    custom_blocks: list[str] = field(default_factory=lambda: ["█", "▓", "▒", "░", " "])
    brightness_thresholds: list[float] = field(default_factory=lambda: [0.8, 0.6, 0.3, 0.1])
    color_mode: str = "truecolor"
    contrast: float = 1.0
    brightness_boost: float = 0.0
    sampling_method: str = "average"
    enable_dithering: bool = False


@dataclass
class DisplayConfig:
    show_image: bool = True
    image_path: str | None = None
    prefer_kitty_graphics: bool = True
    padding: int = 2
    layout: str = "vertical"
    image_size: ImageSizeConfig = field(default_factory=ImageSizeConfig)
    block_rendering: BlockRenderingConfig = field(default_factory=BlockRenderingConfig)


@dataclass
class ModulesConfig:
    user_at_host: bool = True
    user: bool = False
    hostname: bool = False
    os: bool = True
    kernel: bool = True
    uptime: bool = True
    os_age: bool = True
    packages: bool = False
    shell: bool = True
    terminal: bool = True
    resolution: bool = True
    de: bool = True
    wm: bool = True
    theme: bool = False
    icons: bool = False
    locale: bool = False
    cpu: bool = True
    cpu_temp: bool = False
    gpu: bool = True
    memory: bool = True
    disk: bool = True
    battery: bool = True
    display_names: dict[str, str] = field(default_factory=dict)

    def enabled(self, key: str) -> bool:
        return bool(getattr(self, key, False))


@dataclass
class AppConfig:
    general: GeneralConfig = field(default_factory=GeneralConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    modules: ModulesConfig = field(default_factory=ModulesConfig)
    show_motd: bool = False
    motd_file: str | None = None


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "termgreet"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "termgreet"
    base = os.environ.get("XDG_CONFIG_HOME")
    return (Path(base) if base else Path.home() / ".config") / "termgreet"


def config_path() -> Path:
    return config_root() / "config.toml"


def motd_path(cfg: AppConfig) -> Path:
    if cfg.motd_file:
        return Path(cfg.motd_file).expanduser()
    return config_root() / "motd.toml"


def _merge(dataclass_type, raw: dict[str, Any], section: str = ""):
    defaults = dataclass_type()  # type: ignore[misc]
    for f in dataclasses.fields(defaults):
        if f.name not in raw:
            continue
        value = raw[f.name]
        current = getattr(defaults, f.name)
        if dataclasses.is_dataclass(current):
            name = f"{section}{f.name}"
            if not isinstance(value, dict):
                logger.warning(f"config [{name}] must be a table, using defaults", extra={"event": "config_type"})
                continue
            value = _merge(type(current), value, f"{name}.")
        setattr(defaults, f.name, value)
    return defaults


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _keep_typed(obj: Any, name: str, check, label: str) -> None:
    """Reset a field to its default when the configured value has the wrong type."""
    if check(getattr(obj, name)):
        return
    default = getattr(type(obj)(), name)
    logger.warning(
        f"config value {label}.{name}={getattr(obj, name)!r} has the wrong type, using {default!r}",
        extra={"event": "config_type"},
    )
    setattr(obj, name, default)


def _normalize_general(cfg: AppConfig) -> None:
    general = cfg.general
    _keep_typed(general, "title", lambda v: v is None or isinstance(v, str), "general")
    _keep_typed(general.separator, "symbol", lambda v: isinstance(v, str), "general.separator")
    _keep_typed(general.separator, "space_before", _is_int, "general.separator")
    _keep_typed(general.separator, "space_after", _is_int, "general.separator")
    for name in ("title", "module", "info", "separator"):
        _keep_typed(general.colors, name, lambda v: isinstance(v, str), "general.colors")
    _keep_typed(cfg, "motd_file", lambda v: v is None or isinstance(v, str), "config")


def _normalize_display(cfg: AppConfig) -> None:
    display = cfg.display
    if display.layout not in LAYOUTS:
        display.layout = "vertical"
    _keep_typed(display, "padding", _is_int, "display")
    display.padding = max(0, display.padding)
    _keep_typed(display, "image_path", lambda v: v is None or isinstance(v, str), "display")

    block = display.block_rendering
    if block.block_style not in BLOCK_STYLES:
        block.block_style = "default"
    if block.color_mode not in COLOR_MODES:
        block.color_mode = "truecolor"
    if block.sampling_method not in SAMPLING_METHODS:
        block.sampling_method = "average"
    _keep_typed(block, "contrast", _is_number, "display.block_rendering")
    _keep_typed(block, "brightness_boost", _is_number, "display.block_rendering")
    block.contrast = float(max(0.5, min(2.0, block.contrast)))
    block.brightness_boost = float(max(-0.5, min(0.5, block.brightness_boost)))


def _normalize_modules(cfg: AppConfig) -> None:
    _keep_typed(cfg.modules, "display_names", lambda v: isinstance(v, dict), "modules")
    cfg.modules.display_names = {str(k): str(v) for k, v in cfg.modules.display_names.items()}


def _single_axis(cfg: AppConfig, raw: dict[str, Any]) -> None:
    # A size section naming only one axis keeps the image aspect ratio.
    display = raw.get("display")
    section = display.get("image_size") if isinstance(display, dict) else None
    if not isinstance(section, dict):
        return
    size = cfg.display.image_size
    if "width" in section and "height" not in section:
        size.height = None
    elif "height" in section and "width" not in section:
        size.width = None


def parse_config(raw: dict[str, Any]) -> AppConfig:
    cfg = _merge(AppConfig, raw)
    _single_axis(cfg, raw)
    _normalize_general(cfg)
    _normalize_display(cfg)
    _normalize_modules(cfg)
    return cfg


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning(f"ignoring unreadable config {path}: {exc}", extra={"event": "config_unreadable"})
        return AppConfig()

    return parse_config(raw)


DEFAULT_CONFIG_TOML = """\
# termgreet configuration

show_motd = false
# motd_file = "~/.config/termgreet/motd.toml"

[general]
show_title = true
title = "System Information"

[general.separator]
symbol = "->"
space_before = 1
space_after = 1
align_separator = true

[general.colors]
# black, red, green, yellow, blue, magenta, cyan, white and their bright_ variants
title = "bright_cyan"
module = "bright_cyan"
info = "bright_white"
separator = "bright_blue"

[display]
show_image = true
# image_path = "~/Pictures/logo.png"
prefer_kitty_graphics = true   # false forces block rendering
padding = 2
layout = "vertical"            # "vertical" or "horizontal"

[display.image_size]
# Give both width and height to stretch to exactly that many cells, or only one
# to keep the image aspect ratio.
width = 40
height = 20
cell_width = 10    # pixels per terminal cell, horizontally
cell_height = 20   # pixels per terminal cell, vertically
auto_fit = false   # shrink the pixel box to the image aspect ratio

[display.block_rendering]
block_style = "default"                        # "default", "ascii", "braille", "custom"
custom_blocks = ["█", "▓", "▒", "░", " "]
brightness_thresholds = [0.8, 0.6, 0.3, 0.1]
color_mode = "truecolor"                       # "truecolor", "256color", "16color", "monochrome"
contrast = 1.0                                 # 0.5 - 2.0
brightness_boost = 0.0                         # -0.5 - 0.5
sampling_method = "average"                    # "average", "dominant", "weighted"
enable_dithering = false

[modules]
user_at_host = true
user = false
hostname = false
os = true
kernel = true
uptime = true
os_age = true
packages = false
shell = true
terminal = true
resolution = true
de = true
wm = true
theme = false
icons = false
locale = false
cpu = true
cpu_temp = false
gpu = true
memory = true
disk = true
battery = true

[modules.display_names]
# os = "Operating System"
"""


def write_default_config(path: Path | None = None) -> Path:
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
    return path
