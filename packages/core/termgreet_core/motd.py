"""Message-of-the-day settings and selection."""

from __future__ import annotations

import random
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from termgreet_renderer.palette import colorize


@dataclass
class MotdConfig:
    enabled: bool = True
    messages: list[str] = field(
        default_factory=lambda: ["Welcome to your system!", "Have a great day!", "Ready to code!"]
    )
    random: bool = True
    color: str = "bright_green"


def load_motd(path: Path) -> MotdConfig:
    """Missing file yields defaults; parse errors propagate to the caller."""
    if not path.exists():
        return MotdConfig()
    raw = tomllib.loads(path.read_text(encoding="utf-8"))
    cfg = MotdConfig()
    for key in ("enabled", "random"):
        if key in raw:
            setattr(cfg, key, bool(raw[key]))
    if isinstance(raw.get("color"), str):
        cfg.color = raw["color"]
    if isinstance(raw.get("messages"), list):
        cfg.messages = [str(m) for m in raw["messages"]]
    return cfg


def pick_message(cfg: MotdConfig, rng: random.Random | None = None) -> str | None:
    if not cfg.enabled or not cfg.messages:
        return None
    if cfg.random:
        return (rng or random).choice(cfg.messages)
    return cfg.messages[0]


def format_motd(cfg: MotdConfig, rng: random.Random | None = None) -> str | None:
    message = pick_message(cfg, rng)
    if message is None:
        return None
    return colorize(message, cfg.color)
