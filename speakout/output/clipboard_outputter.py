"""ClipboardOutputter: copies text with xsel or wl-copy."""

from __future__ import annotations

import logging
import os

from speakout.errors import (
    ToolNotAllowedError,
    ToolNotFoundError,
    UnsupportedOperationError,
    UnsupportedToolError,
)
from speakout.output.base import IOutputter, run_tool
from speakout.platform.subprocess_impl import DEFAULT_SYSTEM
from speakout.platform.system_adapter import ISystemAdapter
from speakout.security import SecurityPolicy, is_command_allowed

# Text is always piped on stdin
CLIPBOARD_ARGS: dict[str, list[str]] = {
    'xsel': ['--clipboard', '--input'],
    'wl-copy': [],
}


class ClipboardOutputter(IOutputter):
    """Clipboard-only outputter bound to one tool for its whole lifetime."""

    def __init__(
        self,
        clipboard_tool: str,
        policy: SecurityPolicy,
        *,
        system: ISystemAdapter | None = None,
        logger: logging.Logger | None = None,
        timeout: float | None = None,
    ) -> None:
        self._system = system or DEFAULT_SYSTEM
        self._logger = logger or logging.getLogger(__name__)
        if self._system.which(clipboard_tool) is None:
            raise ToolNotFoundError("clipboard", clipboard_tool)
        self._clipboard_tool = clipboard_tool
        self._policy = policy
        self._timeout = timeout

    @property
    def clipboard_tool(self) -> str:
        return self._clipboard_tool

    def copy_to_clipboard(self, text: str) -> None:
        # The policy may have been reloaded since construction
        if not is_command_allowed(self._policy, self._clipboard_tool):
            raise ToolNotAllowedError("clipboard", self._clipboard_tool)

        args = CLIPBOARD_ARGS.get(os.path.basename(self._clipboard_tool))
        if args is None:
            raise UnsupportedToolError("clipboard", self._clipboard_tool)

        run_tool(
            self._system,
            self._clipboard_tool,
            list(args),
            action="copy to clipboard",
            input=text,
            timeout=self._timeout,
            logger=self._logger,
        )
        self._logger.debug("Copied %d chars to clipboard with %s", len(text), self._clipboard_tool)

    def type_to_active_window(self, text: str) -> None:
        raise UnsupportedOperationError("typing to active window not supported by clipboard outputter")

    def get_tool_names(self) -> tuple[str, str]:
        return self._clipboard_tool, ""
