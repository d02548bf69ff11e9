"""Tool selection and outputter construction.

Clipboard tools map one-to-one onto the display server. Typing tools are
picked from an ordered priority table per session kind: the first
candidate found on PATH wins, otherwise the row's default is returned so
callers always get a name to try.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, NamedTuple

from speakout.config import (
    AUTO,
    OUTPUT_MODE_ACTIVE_WINDOW,
    OUTPUT_MODE_COMBINED,
    OutputConfig,
)
from speakout.errors import ToolNotAllowedError
from speakout.output.base import IOutputter
from speakout.output.clipboard_outputter import ClipboardOutputter
from speakout.output.combined_outputter import CombinedOutputter
from speakout.output.type_outputter import TypeOutputter
from speakout.platform.environment import (
    EnvironmentType,
    detect_desktop_environment,
    detect_environment,
    is_gnome_desktop,
    utility_exists,
)
from speakout.platform.subprocess_impl import DEFAULT_SYSTEM
from speakout.platform.system_adapter import ISystemAdapter
from speakout.security import SecurityPolicy, is_command_allowed

logger = logging.getLogger(__name__)


class ToolChain(NamedTuple):
    candidates: tuple[str, ...]
    default: str


CLIPBOARD_TOOL_DEFAULTS: dict[EnvironmentType, str] = {
    EnvironmentType.WAYLAND: 'wl-copy',
    EnvironmentType.X11: 'xsel',
    EnvironmentType.UNKNOWN: 'xsel',
}

# Keys: 'x11', 'wayland-gnome', 'wayland', 'unknown'
TYPE_TOOL_PRIORITY: dict[str, ToolChain] = {
    # xdotool is the only tool that works everywhere on X11
    'x11': ToolChain((), 'xdotool'),
    # GNOME lacks the virtual-keyboard protocol wtype needs; xdotool only via XWayland
    'wayland-gnome': ToolChain(('ydotool', 'wtype'), 'xdotool'),
    'wayland': ToolChain(('wtype', 'ydotool'), 'xdotool'),
    'unknown': ToolChain(('xdotool', 'wtype', 'ydotool'), 'xdotool'),
}


def _chain_key(env: EnvironmentType, gnome: bool) -> str:
    if env is EnvironmentType.X11:
        return 'x11'
    if env is EnvironmentType.WAYLAND:
        return 'wayland-gnome' if gnome else 'wayland'
    return 'unknown'


def select_clipboard_tool(env: EnvironmentType, config: OutputConfig) -> str:
    """Return the configured clipboard tool, or the default for *env*."""
    if config.clipboard_tool != AUTO:
        return config.clipboard_tool
    return CLIPBOARD_TOOL_DEFAULTS.get(env, CLIPBOARD_TOOL_DEFAULTS[EnvironmentType.UNKNOWN])


def select_type_tool(
    env: EnvironmentType,
    config: OutputConfig,
    is_available: Callable[[str], bool] | None = None,
    gnome_wayland: bool | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the configured typing tool, or the best available for *env*.

    Args:
        env: Detected display server
        config: Output settings; a non-'auto' ``type_tool`` wins outright
        is_available: Availability probe (default: PATH lookup)
        gnome_wayland: Whether the session is GNOME on Wayland (default:
            detected from *environ*)
        environ: Environment used to detect a GNOME session
    """
    if config.type_tool != AUTO:
        return config.type_tool

    if is_available is None:
        is_available = utility_exists

    if gnome_wayland is None:
        gnome_wayland = is_gnome_desktop(detect_desktop_environment(environ))
    key = _chain_key(env, gnome_wayland)
    chain = TYPE_TOOL_PRIORITY[key]
    for candidate in chain.candidates:
        if is_available(candidate):
            logger.debug("Type tool for %s: %s", key, candidate)
            return candidate
    if chain.candidates:
        logger.debug("No type tool from %s found for %s, defaulting to %s",
                     ", ".join(chain.candidates), key, chain.default)
    return chain.default


class OutputFactory:
    """Builds the outputter for the session from config and allowlist."""

    def __init__(
        self,
        config: OutputConfig,
        policy: SecurityPolicy,
        *,
        system: ISystemAdapter | None = None,
        logger: logging.Logger | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._config = config
        self._policy = policy
        self._system = system or DEFAULT_SYSTEM
        self._logger = logger or logging.getLogger(__name__)
        self._environ = environ

    def _is_available(self, name: str) -> bool:
        return utility_exists(name, self._system)

    def select_tools(self, env: EnvironmentType) -> tuple[str, str]:
        """Return ``(clipboard_tool, type_tool)`` for *env*."""
        return (
            select_clipboard_tool(env, self._config),
            select_type_tool(env, self._config, self._is_available, environ=self._environ),
        )

    def _check_allowed(self, kind: str, tool: str) -> None:
        if not is_command_allowed(self._policy, tool):
            raise ToolNotAllowedError(kind, tool)

    def get_outputter(self, env: EnvironmentType | None = None) -> IOutputter:
        """Create the outputter for ``config.default_mode``.

        Raises:
            ToolNotAllowedError: a tool the mode needs is not allowlisted
            ToolNotFoundError: a tool the mode needs is not on PATH
        """
        if env is None:
            env = detect_environment(self._environ)
        clipboard_tool, type_tool = self.select_tools(env)
        mode = self._config.default_mode
        self._logger.debug("Environment %s, mode %s, clipboard tool %s, type tool %s",
                           env.value, mode, clipboard_tool, type_tool)

        common = dict(system=self._system, logger=self._logger, timeout=self._config.command_timeout)

        if mode == OUTPUT_MODE_ACTIVE_WINDOW:
            self._check_allowed("type", type_tool)
            return TypeOutputter(type_tool, self._policy, environ=self._environ, **common)

        if mode == OUTPUT_MODE_COMBINED:
            self._check_allowed("clipboard", clipboard_tool)
            self._check_allowed("type", type_tool)
            return CombinedOutputter(
                clipboard_tool, type_tool, self._policy, environ=self._environ, **common,
            )

        self._check_allowed("clipboard", clipboard_tool)
        return ClipboardOutputter(clipboard_tool, self._policy, **common)


def get_outputter_from_config(
    config: OutputConfig,
    policy: SecurityPolicy,
    env: EnvironmentType | None = None,
    **kwargs,
) -> IOutputter:
    """Shortcut for ``OutputFactory(config, policy, **kwargs).get_outputter(env)``."""
    return OutputFactory(config, policy, **kwargs).get_outputter(env)
