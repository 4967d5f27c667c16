"""Core app services for settings, logging, info lines, and the message of the day."""

from .config import AppConfig, config_path, load_config, parse_config, write_default_config
from .info_lines import MODULE_ORDER, build_header, build_info_lines, enabled_modules
from .motd import MotdConfig, format_motd, load_motd, pick_message

__all__ = [
    "AppConfig",
    "MODULE_ORDER",
    "MotdConfig",
    "build_header",
    "build_info_lines",
    "config_path",
    "enabled_modules",
    "format_motd",
    "load_config",
    "load_motd",
    "parse_config",
    "pick_message",
    "write_default_config",
]
