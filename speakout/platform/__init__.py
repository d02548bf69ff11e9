"""Platform layer: session detection and the subprocess seam."""

from speakout.platform.environment import (
    EnvironmentType,
    detect_desktop_environment,
    detect_environment,
    get_environment_info,
    has_tray_watcher,
    is_gnome_desktop,
    is_gnome_with_wayland,
    utility_exists,
)
from speakout.platform.subprocess_impl import DEFAULT_SYSTEM, SubprocessSystemAdapter
from speakout.platform.system_adapter import CommandResult, ISystemAdapter

__all__ = [
    'CommandResult',
    'DEFAULT_SYSTEM',
    'EnvironmentType',
    'ISystemAdapter',
    'SubprocessSystemAdapter',
    'detect_desktop_environment',
    'detect_environment',
    'get_environment_info',
    'has_tray_watcher',
    'is_gnome_desktop',
    'is_gnome_with_wayland',
    'utility_exists',
]
