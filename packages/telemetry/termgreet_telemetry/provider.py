"""Cross-platform system facts provider built on psutil and the environment."""

from __future__ import annotations

import getpass
import os
import platform
import socket
import time
from typing import Iterable, Mapping

import psutil

from .desktop import (
    Runner,
    desktop_environment,
    gpu_name,
    gtk_theme,
    icon_theme,
    os_age_days,
    package_count,
    resolution,
    run_command,
    window_manager,
)
from .models import BatteryFacts, DiskFacts, MemoryFacts, SystemFacts

UNKNOWN = "Unknown"


def format_uptime(seconds: float) -> str:
    total = max(0, int(seconds))
    days = total // 86400
    hours = (total % 86400) // 3600
    minutes = (total % 3600) // 60
    if days > 0:
        return f"{days} days, {hours} hours, {minutes} mins"
    if hours > 0:
        return f"{hours} hours, {minutes} mins"
    return f"{minutes} mins"


def _cpu_temp_c() -> float | None:
    try:
        temps = psutil.sensors_temperatures()
    except (AttributeError, OSError):
        return None
    if not temps:
        return None

    for name in ("coretemp", "cpu_thermal", "k10temp", "acpitz"):
        entries = temps.get(name)
        if entries:
            val = entries[0].current
            return float(val) if val is not None else None

    for _name, entries in temps.items():
        if entries and entries[0].current is not None:
            return float(entries[0].current)
    return None


def _cpu_name() -> str:
    name = platform.processor() or platform.machine() or UNKNOWN
    cores = psutil.cpu_count(logical=True)
    return f"{name} ({cores} cores)" if cores else name


def _user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return UNKNOWN


def _shell(env: Mapping[str, str]) -> str:
    shell = env.get("SHELL", "")
    return os.path.basename(shell) if shell else UNKNOWN


def _terminal(env: Mapping[str, str]) -> str:
    for var in ("TERM_PROGRAM", "TERMINAL_EMULATOR", "TERM"):
        value = env.get(var, "")
        if value and value != "xterm-256color":
            return value
    return UNKNOWN


def _battery() -> BatteryFacts | None:
    try:
        battery = psutil.sensors_battery()
    except (AttributeError, OSError):
        return None
    if battery is None:
        return None
    return BatteryFacts(percent=float(battery.percent), plugged=battery.power_plugged)


def _disk() -> DiskFacts | None:
    try:
        du = psutil.disk_usage(os.path.abspath(os.sep))
    except OSError:
        return None
    return DiskFacts(used_gb=du.used / (1024**3), total_gb=du.total / (1024**3), percent=float(du.percent))


class FactsProvider:
    """Single-shot provider with normalized units and stable defaults.

    Facts that shell out to helper tools (packages, resolution, window manager,
    themes, GPU) are only gathered when their module is in ``enabled``; pass
    None to gather everything.
    """

    def __init__(self, environ: Mapping[str, str] | None = None, runner: Runner = run_command) -> None:
        self._env = os.environ if environ is None else environ
        self._run = runner

    def _optional(self, enabled: Iterable[str] | None) -> dict[str, object]:
        wanted = None if enabled is None else set(enabled)

        def want(key: str) -> bool:
            return wanted is None or key in wanted

        env, run = self._env, self._run
        return {
            "os_age_days": os_age_days() if want("os_age") else None,
            "packages": package_count(run) if want("packages") else None,
            "resolution": resolution(run) if want("resolution") else None,
            "de": desktop_environment(env) if want("de") else None,
            "wm": window_manager(env, run) if want("wm") else None,
            "theme": gtk_theme(env, run) if want("theme") else None,
            "icons": icon_theme(env, run) if want("icons") else None,
            "gpu": gpu_name(run) if want("gpu") else None,
        }

    def gather(self, enabled: Iterable[str] | None = None) -> SystemFacts:
        vm = psutil.virtual_memory()
        return SystemFacts(
            user=_user(),
            hostname=socket.gethostname() or UNKNOWN,
            os=platform.platform(terse=True) or UNKNOWN,
            kernel=platform.release() or UNKNOWN,
            uptime_s=time.time() - psutil.boot_time(),
            shell=_shell(self._env),
            terminal=_terminal(self._env),
            locale=self._env.get("LC_ALL") or self._env.get("LANG") or UNKNOWN,
            cpu=_cpu_name(),
            cpu_temp_c=_cpu_temp_c(),
            memory=MemoryFacts(
                used_gb=(vm.total - vm.available) / (1024**3),
                total_gb=vm.total / (1024**3),
                percent=float(vm.percent),
            ),
            disk=_disk(),
            battery=_battery(),
            **self._optional(enabled),  # type: ignore[arg-type]
        )


def facts_to_values(facts: SystemFacts) -> dict[str, str]:
    """Flatten facts into the display strings keyed by module name."""
    values = {
        "user_at_host": f"{facts.user}@{facts.hostname}",
        "user": facts.user,
        "hostname": facts.hostname,
        "os": facts.os,
        "kernel": facts.kernel,
        "uptime": format_uptime(facts.uptime_s),
        "shell": facts.shell,
        "terminal": facts.terminal,
        "locale": facts.locale,
        "cpu": facts.cpu,
        "memory": f"{facts.memory.used_gb:.1f}GB / {facts.memory.total_gb:.1f}GB ({facts.memory.percent:.0f}%)",
    }
    if facts.cpu_temp_c is not None:
        values["cpu_temp"] = f"{facts.cpu_temp_c:.1f}°C"
    if facts.disk is not None:
        values["disk"] = f"{facts.disk.used_gb:.1f}GB / {facts.disk.total_gb:.1f}GB ({facts.disk.percent:.0f}%)"
    if facts.battery is not None:
        state = "" if facts.battery.plugged is None else (" [AC]" if facts.battery.plugged else " [Discharging]")
        values["battery"] = f"{facts.battery.percent:.0f}%{state}"
    if facts.os_age_days is not None:
        values["os_age"] = f"{facts.os_age_days} days"
    if facts.packages is not None:
        values["packages"] = f"{facts.packages.count} ({facts.packages.manager})"
    for key in ("resolution", "de", "wm", "theme", "icons", "gpu"):
        value = getattr(facts, key)
        if value:
            values[key] = value
    return values
