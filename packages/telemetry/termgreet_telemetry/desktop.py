"""Desktop session, display and hardware facts gathered from the environment and helper tools."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path
from typing import Callable, Iterable, Mapping

import psutil

from .models import PackageFacts

logger = logging.getLogger("termgreet.telemetry")

Runner = Callable[[list[str]], "str | None"]

COMMAND_TIMEOUT_S = 2.0

DE_VARIABLES = ("XDG_CURRENT_DESKTOP", "DESKTOP_SESSION", "GNOME_DESKTOP_SESSION_ID", "KDE_FULL_SESSION")

WAYLAND_COMPOSITORS: tuple[tuple[str, str], ...] = (
    ("kwin_wayland", "KWin"),
    ("gnome-shell", "GNOME Shell"),
    ("weston", "Weston"),
    ("sway", "Sway"),
    ("river", "River"),
    ("Hyprland", "Hyprland"),
    ("wayfire", "Wayfire"),
)

X11_WINDOW_MANAGERS: tuple[tuple[str, str], ...] = (
    ("kwin_x11", "KWin"),
    ("kwin", "KWin"),
    ("gnome-shell", "GNOME Shell"),
    ("xfwm4", "Xfwm4"),
    ("openbox", "Openbox"),
    ("i3", "i3"),
    ("bspwm", "bspwm"),
    ("dwm", "dwm"),
    ("awesome", "awesome"),
    ("xmonad", "xmonad"),
    ("fluxbox", "Fluxbox"),
    ("icewm", "IceWM"),
    ("herbstluftwm", "herbstluftwm"),
)

SESSION_WINDOW_MANAGERS: dict[str, str] = {
    "plasma": "KWin",
    "plasmawayland": "KWin",
    "plasmax11": "KWin",
    "gnome": "GNOME Shell",
    "gnome-wayland": "GNOME Shell",
    "gnome-xorg": "GNOME Shell",
    "xfce": "Xfwm4",
    "lxde": "Openbox",
    "i3": "i3",
}

PACKAGE_MANAGERS: tuple[tuple[str, list[str]], ...] = (
    ("dpkg-query", ["-f", ".\n", "-W"]),
    ("rpm", ["-qa"]),
    ("pacman", ["-Qq"]),
    ("xbps-query", ["-l"]),
    ("apk", ["info"]),
    ("brew", ["list", "--formula", "-1"]),
)

INSTALL_MARKERS = ("/var/log/installer", "/lost+found", "/etc/machine-id")


def run_command(args: list[str]) -> str | None:
    """Run a helper tool and return its stdout, or None when it is missing or fails."""
    if shutil.which(args[0]) is None:
        return None
    try:
        proc = subprocess.run(args, capture_output=True, text=True, timeout=COMMAND_TIMEOUT_S, check=False)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug(f"helper {args[0]} failed: {exc}", extra={"event": "helper_failed"})
        return None
    if proc.returncode != 0:
        return None
    return proc.stdout


def _first_env(env: Mapping[str, str], names: Iterable[str]) -> str | None:
    for name in names:
        value = env.get(name, "")
        if value:
            return value
    return None


def desktop_environment(env: Mapping[str, str]) -> str | None:
    return _first_env(env, DE_VARIABLES)


def _process_names() -> set[str]:
    names: set[str] = set()
    for proc in psutil.process_iter(["name"]):
        name = proc.info.get("name")
        if name:
            names.add(name)
    return names


def window_manager(
    env: Mapping[str, str],
    runner: Runner = run_command,
    process_names: Callable[[], set[str]] = _process_names,
) -> str | None:
    session = env.get("XDG_SESSION_TYPE", "")
    if session == "wayland" or env.get("WAYLAND_DISPLAY"):
        running = process_names()
        for proc, name in WAYLAND_COMPOSITORS:
            if proc in running:
                return name
        if env.get("WAYLAND_DISPLAY"):
            return "Wayland Compositor"

    if session == "x11" or env.get("DISPLAY"):
        output = runner(["xprop", "-root", "-notype", "_NET_WM_NAME"])
        if output and "=" in output:
            name = output.split("=", 1)[1].strip().strip('"').strip()
            if name and name != "(null)":
                return name
        running = process_names()
        for proc, name in X11_WINDOW_MANAGERS:
            if proc in running:
                return name

    if env.get("WINDOW_MANAGER"):
        return env["WINDOW_MANAGER"]
    return SESSION_WINDOW_MANAGERS.get(env.get("DESKTOP_SESSION", "").lower())


def resolution(runner: Runner = run_command) -> str | None:
    output = runner(["xrandr", "--current"])
    for line in (output or "").splitlines():
        if " connected" not in line:
            continue
        for token in line.split():
            if "x" in token and token[0].isdigit():
                return token.split("+", 1)[0]

    output = runner(["wlr-randr"])
    for line in (output or "").splitlines():
        if "current" in line:
            for token in line.split():
                if "x" in token and token[0].isdigit():
                    return token
    return None


def _gsettings(key: str, runner: Runner) -> str | None:
    output = runner(["gsettings", "get", "org.gnome.desktop.interface", key])
    value = (output or "").strip().strip("'\"")
    return value or None


def _kdeglobals(prefix: str, home: Path) -> str | None:
    path = home / ".config" / "kdeglobals"
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    for line in text.splitlines():
        if line.startswith(prefix):
            return line.split("=", 1)[1].strip() or None
    return None


def gtk_theme(env: Mapping[str, str], runner: Runner = run_command) -> str | None:
    return _gsettings("gtk-theme", runner) or _kdeglobals("ColorScheme=", Path(env.get("HOME") or Path.home()))


def icon_theme(env: Mapping[str, str], runner: Runner = run_command) -> str | None:
    return _gsettings("icon-theme", runner) or _kdeglobals("Theme=", Path(env.get("HOME") or Path.home()))


def package_count(runner: Runner = run_command) -> PackageFacts | None:
    for manager, args in PACKAGE_MANAGERS:
        output = runner([manager, *args])
        if output is None:
            continue
        count = sum(1 for line in output.splitlines() if line.strip())
        return PackageFacts(count=count, manager=manager.split("-", 1)[0])
    return None


def os_age_days(markers: Iterable[str] = INSTALL_MARKERS, now: float | None = None) -> int | None:
    """Days since the oldest install marker was written."""
    stamps = []
    for marker in markers:
        try:
            stamps.append(os.stat(marker).st_mtime)
        except OSError:
            continue
    if not stamps:
        return None
    current = time.time() if now is None else now
    return max(0, int((current - min(stamps)) // 86400))


class _GpuAdapter:
    def name(self) -> str | None:
        return None


class _NvmlGpuAdapter(_GpuAdapter):
    def __init__(self) -> None:
        import pynvml  # type: ignore

        self._nvml = pynvml
        pynvml.nvmlInit()

    def name(self) -> str | None:
        nvml = self._nvml
        if nvml.nvmlDeviceGetCount() < 1:
            return None
        value = nvml.nvmlDeviceGetName(nvml.nvmlDeviceGetHandleByIndex(0))
        return value.decode("utf-8", errors="replace") if isinstance(value, bytes) else str(value)


def _build_gpu_adapter() -> _GpuAdapter:
    try:
        return _NvmlGpuAdapter()
    except Exception:
        # No NVIDIA driver or no pynvml installed.
        return _GpuAdapter()


def gpu_name(runner: Runner = run_command, adapter: _GpuAdapter | None = None) -> str | None:
    name = (adapter or _build_gpu_adapter()).name()
    if name:
        return name
    output = runner(["lspci"])
    for line in (output or "").splitlines():
        if "VGA compatible controller" in line or "3D controller" in line:
            parts = line.split(": ", 1)
            if len(parts) == 2:
                return parts[1].strip()
    return None
