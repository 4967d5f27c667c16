"""Typed system fact models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MemoryFacts:
    used_gb: float
    total_gb: float
    percent: float


@dataclass(frozen=True)
class DiskFacts:
    used_gb: float
    total_gb: float
    percent: float


@dataclass(frozen=True)
class BatteryFacts:
    percent: float
    plugged: bool | None


@dataclass(frozen=True)
class PackageFacts:
    count: int
    manager: str


@dataclass(frozen=True)
class SystemFacts:
    user: str
    hostname: str
    os: str
    kernel: str
    uptime_s: float
    shell: str
    terminal: str
    locale: str
    cpu: str
    cpu_temp_c: float | None
    memory: MemoryFacts
    disk: DiskFacts | None
    battery: BatteryFacts | None
    # Desktop and hardware facts; None when not gathered or not detectable.
    os_age_days: int | None = None
    packages: PackageFacts | None = None
    resolution: str | None = None
    de: str | None = None
    wm: str | None = None
    theme: str | None = None
    icons: str | None = None
    gpu: str | None = None
