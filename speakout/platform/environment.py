"""Display server, desktop environment and tray watcher detection."""

from __future__ import annotations

import logging
import os
import subprocess
from enum import Enum
from typing import Mapping

from speakout.platform.subprocess_impl import DEFAULT_SYSTEM
from speakout.platform.system_adapter import ISystemAdapter

logger = logging.getLogger(__name__)

# Session bus names that advertise a StatusNotifier (tray icon) host
TRAY_WATCHER_NAMES = (
    "org.kde.StatusNotifierWatcher",
    "org.freedesktop.StatusNotifierWatcher",
)


class EnvironmentType(Enum):
    X11 = "X11"
    WAYLAND = "Wayland"
    UNKNOWN = "Unknown"


def _env(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def detect_environment(environ: Mapping[str, str] | None = None) -> EnvironmentType:
    """
    Determine the display server protocol.

    Wayland wins when both identifiers are set (XWayland exports DISPLAY
    inside Wayland sessions).

    Returns:
        EnvironmentType: WAYLAND, X11 or UNKNOWN
    """
    env = _env(environ)
    if env.get("WAYLAND_DISPLAY"):
        return EnvironmentType.WAYLAND
    if env.get("DISPLAY"):
        return EnvironmentType.X11
    return EnvironmentType.UNKNOWN


def detect_desktop_environment(environ: Mapping[str, str] | None = None) -> str:
    """
    Determine the desktop environment name.

    Returns:
        str: XDG_CURRENT_DESKTOP, else DESKTOP_SESSION, else 'Unknown'
    """
    env = _env(environ)
    return env.get("XDG_CURRENT_DESKTOP") or env.get("DESKTOP_SESSION") or "Unknown"


def is_gnome_desktop(desktop: str) -> bool:
    """True if *desktop* names GNOME or a GNOME variant such as 'ubuntu:GNOME'."""
    # XDG_CURRENT_DESKTOP is a colon-separated list
    return any(part.strip().lower() == "gnome" for part in desktop.split(":"))


def is_gnome_with_wayland(environ: Mapping[str, str] | None = None) -> bool:
    """True when running a GNOME session on Wayland."""
    return (
        is_gnome_desktop(detect_desktop_environment(environ))
        and detect_environment(environ) is EnvironmentType.WAYLAND
    )


def utility_exists(name: str, system: ISystemAdapter | None = None) -> bool:
    """Check whether an executable resolves on PATH."""
    if system is None:
        system = DEFAULT_SYSTEM
    return system.which(name) is not None


def has_tray_watcher(system: ISystemAdapter | None = None, timeout: float = 3.0) -> bool:
    """
    Ask the session bus whether a StatusNotifier watcher is running.

    Advisory only: an unreachable bus, a missing ``gdbus`` binary or an
    unexpected reply all count as "no watcher".
    """
    if system is None:
        system = DEFAULT_SYSTEM

    for name in TRAY_WATCHER_NAMES:
        try:
            r = system.run_command(
                ["gdbus", "call", "--session",
                 "--dest", "org.freedesktop.DBus",
                 "--object-path", "/org/freedesktop/DBus",
                 "--method", "org.freedesktop.DBus.NameHasOwner",
                 name],
                timeout=timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("Tray watcher probe failed: %s", e)
            return False
        if r.returncode != 0:
            logger.debug("Tray watcher probe for %s exited %d: %s", name, r.returncode, r.output)
            continue
        # Reply looks like "(true,)"
        if r.stdout.strip().lower().startswith("(true"):
            return True
    return False


def get_environment_info(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Return a diagnostics snapshot of the session.

    Returns:
        dict: {'display_server': str, 'desktop': str, 'gnome_wayland': str}
    """
    return {
        'display_server': detect_environment(environ).value,
        'desktop': detect_desktop_environment(environ),
        'gnome_wayland': str(is_gnome_with_wayland(environ)).lower(),
    }
