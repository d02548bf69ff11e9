"""TypeOutputter: simulates keystrokes with xdotool, wtype or ydotool."""

from __future__ import annotations

import logging
import os
from typing import Callable, Mapping

from speakout.errors import (
    EncodingUnsupportedError,
    ExecutionFailedError,
    ToolNotAllowedError,
    ToolNotFoundError,
    UnsupportedOperationError,
    UnsupportedToolError,
)
from speakout.output.base import IOutputter, run_tool
from speakout.platform.environment import EnvironmentType, detect_environment
from speakout.platform.subprocess_impl import DEFAULT_SYSTEM
from speakout.platform.system_adapter import ISystemAdapter
from speakout.security import SecurityPolicy, is_command_allowed


def _text_operand(text: str) -> list[str]:
    """Text as the final argv element, behind ``--`` when it looks like an option."""
    if text.startswith('-'):
        return ['--', text]
    return [text]


# Argument template per tool; the text is a single argv element
TYPE_ARGS: dict[str, Callable[[str], list[str]]] = {
    'xdotool': lambda text: ['type', '--clearmodifiers', *_text_operand(text)],
    'wtype': _text_operand,
    'ydotool': lambda text: ['type', *_text_operand(text)],
}

# Retried once when the primary tool fails at runtime
RUNTIME_FALLBACK: dict[str, str] = {
    'wtype': 'ydotool',
}


def is_non_ascii(text: str) -> bool:
    return any(ord(ch) > 127 for ch in text)


class TypeOutputter(IOutputter):
    """Keystroke-only outputter bound to one tool for its whole lifetime.

    Args:
        type_tool: Executable used to type text
        policy: Allowlist checked on every call
        system: Process seam (defaults to real subprocess calls)
        logger: Logger handle (defaults to the module logger)
        timeout: Per-invocation deadline in seconds, None for none
        environ: Environment mapping for display server detection at call
            time (defaults to ``os.environ``)
    """

    def __init__(
        self,
        type_tool: str,
        policy: SecurityPolicy,
        *,
        system: ISystemAdapter | None = None,
        logger: logging.Logger | None = None,
        timeout: float | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._system = system or DEFAULT_SYSTEM
        self._logger = logger or logging.getLogger(__name__)
        if self._system.which(type_tool) is None:
            raise ToolNotFoundError("type", type_tool)
        self._type_tool = type_tool
        self._policy = policy
        self._timeout = timeout
        self._environ = environ

    @property
    def type_tool(self) -> str:
        return self._type_tool

    def _type_with(self, tool: str, text: str) -> None:
        template = TYPE_ARGS.get(os.path.basename(tool))
        if template is None:
            raise UnsupportedToolError("typing", tool)
        run_tool(
            self._system,
            tool,
            template(text),
            action="type text",
            timeout=self._timeout,
            logger=self._logger,
        )

    def _mangles_text(self, tool: str, text: str) -> bool:
        # ydotool sends raw keycodes and mangles anything outside ASCII on Wayland
        return (
            os.path.basename(tool) == 'ydotool'
            and detect_environment(self._environ) is EnvironmentType.WAYLAND
            and is_non_ascii(text)
        )

    def _fallback_tool(self, failed: str, text: str) -> str | None:
        candidate = RUNTIME_FALLBACK.get(os.path.basename(failed))
        if candidate is None:
            return None
        if not is_command_allowed(self._policy, candidate):
            self._logger.debug("Fallback %s is not allowed", candidate)
            return None
        if self._system.which(candidate) is None:
            self._logger.debug("Fallback %s is not installed", candidate)
            return None
        if self._mangles_text(candidate, text):
            self._logger.debug("Fallback %s cannot type non-ASCII text here", candidate)
            return None
        return candidate

    def type_to_active_window(self, text: str) -> None:
        tool = self._type_tool
        if not is_command_allowed(self._policy, tool):
            raise ToolNotAllowedError("typing", tool)

        if self._mangles_text(tool, text):
            raise EncodingUnsupportedError(
                "ydotool on Wayland doesn't support non-ASCII characters, use clipboard fallback"
            )

        try:
            self._type_with(tool, text)
        except ExecutionFailedError as err:
            fallback = self._fallback_tool(tool, text)
            if fallback is None:
                raise
            self._logger.warning("%s failed, retrying with %s", tool, fallback)
            try:
                self._type_with(fallback, text)
            except ExecutionFailedError as fb_err:
                raise ExecutionFailedError(
                    f"{tool} failed: {err}; {fallback} fallback failed: {fb_err}",
                    tool=tool,
                    returncode=err.returncode,
                    output=err.output,
                    fallback_error=fb_err,
                ) from err
            self._logger.info("Typed %d chars with fallback %s", len(text), fallback)
            return

        self._logger.debug("Typed %d chars with %s", len(text), tool)

    def copy_to_clipboard(self, text: str) -> None:
        raise UnsupportedOperationError("copying to clipboard not supported by type outputter")

    def get_tool_names(self) -> tuple[str, str]:
        return "", self._type_tool
