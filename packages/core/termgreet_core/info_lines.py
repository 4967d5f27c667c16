"""Formatting of gathered system facts into colored name/value lines."""

from __future__ import annotations

from typing import Mapping

from wcwidth import wcswidth

from termgreet_renderer.palette import colorize

from .config import AppConfig

MODULE_ORDER: tuple[tuple[str, str], ...] = (
    ("user_at_host", "Login"),
    ("user", "User"),
    ("hostname", "Hostname"),
    ("os", "OS"),
    ("kernel", "Kernel"),
    ("uptime", "Uptime"),
    ("os_age", "OS Age"),
    ("packages", "Packages"),
    ("shell", "Shell"),
    ("terminal", "Terminal"),
    ("resolution", "Resolution"),
    ("de", "DE"),
    ("wm", "WM"),
    ("theme", "Theme"),
    ("icons", "Icons"),
    ("locale", "Locale"),
    ("cpu", "CPU"),
    ("cpu_temp", "CPU Temp"),
    ("gpu", "GPU"),
    ("memory", "Memory"),
    ("battery", "Battery"),
    ("disk", "Disk"),
)


def _width(text: str) -> int:
    width = wcswidth(text)
    return width if width >= 0 else len(text)


def display_name(cfg: AppConfig, key: str, default: str) -> str:
    return cfg.modules.display_names.get(key) or default


def enabled_modules(cfg: AppConfig) -> list[str]:
    return [key for key, _ in MODULE_ORDER if cfg.modules.enabled(key)]


def build_info_lines(facts: Mapping[str, str], cfg: AppConfig) -> list[str]:
    colors = cfg.general.colors
    sep_cfg = cfg.general.separator
    separator = " " * max(0, sep_cfg.space_before) + sep_cfg.symbol + " " * max(0, sep_cfg.space_after)

    entries: list[tuple[str, list[str]]] = []
    for key, default in MODULE_ORDER:
        if not cfg.modules.enabled(key):
            continue
        value = (facts.get(key) or "").strip()
        if not value or value == "Unknown":
            continue
        entries.append((display_name(cfg, key, default), value.splitlines()))

    name_width = max((_width(name) for name, _ in entries), default=0) if sep_cfg.align_separator else 0

    lines: list[str] = []
    for name, values in entries:
        padded = name + " " * max(0, name_width - _width(name))
        lines.append(
            colorize(padded, colors.module) + colorize(separator, colors.separator) + colorize(values[0], colors.info)
        )
        indent = " " * (_width(padded) + _width(separator))
        for extra in values[1:]:
            lines.append(indent + colorize(extra, colors.info))
    return lines


def build_header(cfg: AppConfig) -> tuple[str, ...]:
    if not cfg.general.show_title or not cfg.general.title:
        return ()
    return (colorize(cfg.general.title, cfg.general.colors.title), "")
