"""CombinedOutputter: one clipboard and one type outputter behind a single handle."""

from __future__ import annotations

import logging
from typing import Mapping

from speakout.output.base import IOutputter
from speakout.output.clipboard_outputter import ClipboardOutputter
from speakout.output.type_outputter import TypeOutputter
from speakout.platform.system_adapter import ISystemAdapter
from speakout.security import SecurityPolicy


class CombinedOutputter(IOutputter):
    """Delegates each operation to the matching single-purpose outputter.

    Construction raises whatever the sub-outputter constructors raise
    (``ToolNotFoundError`` when either tool is missing).
    """

    def __init__(
        self,
        clipboard_tool: str,
        type_tool: str,
        policy: SecurityPolicy,
        *,
        system: ISystemAdapter | None = None,
        logger: logging.Logger | None = None,
        timeout: float | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._clipboard = ClipboardOutputter(
            clipboard_tool, policy, system=system, logger=logger, timeout=timeout,
        )
        self._typer = TypeOutputter(
            type_tool, policy, system=system, logger=logger, timeout=timeout, environ=environ,
        )

    def copy_to_clipboard(self, text: str) -> None:
        self._clipboard.copy_to_clipboard(text)

    def type_to_active_window(self, text: str) -> None:
        self._typer.type_to_active_window(text)

    def get_tool_names(self) -> tuple[str, str]:
        clipboard_tool, _ = self._clipboard.get_tool_names()
        _, type_tool = self._typer.get_tool_names()
        return clipboard_tool, type_tool
