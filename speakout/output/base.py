"""IOutputter interface and the shared tool invocation helper."""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod

from speakout.errors import ExecutionFailedError, OutputTimeoutError
from speakout.log import TRACE
from speakout.platform.system_adapter import ISystemAdapter
from speakout.security import sanitize_arguments, sanitize_payload


class IOutputter(ABC):
    """Delivers text to the clipboard and/or the focused window.

    Implementations raise :class:`speakout.errors.OutputError` subclasses on
    failure and must raise ``UnsupportedOperationError`` (never silently do
    nothing) for the operation they do not offer.
    """

    @abstractmethod
    def copy_to_clipboard(self, text: str) -> None: ...

    @abstractmethod
    def type_to_active_window(self, text: str) -> None: ...

    @abstractmethod
    def get_tool_names(self) -> tuple[str, str]:
        """Return ``(clipboard_tool, type_tool)``; unused slot is ``''``."""


def _decode(data: str | bytes | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def run_tool(
    system: ISystemAdapter,
    tool: str,
    args: list[str],
    *,
    action: str,
    input: str | None = None,
    timeout: float | None = None,
    logger: logging.Logger,
) -> None:
    """Sanitize *args*, spawn *tool* and raise on any failure.

    Raises:
        OutputTimeoutError: the tool outlived *timeout* and was killed
        ExecutionFailedError: spawn error, unencodable text or non-zero exit
    """
    safe_args = sanitize_arguments(args)
    if input is not None:
        input = sanitize_payload(input)
    argv = [tool, *safe_args]
    logger.log(TRACE, "Running %r (stdin: %d chars)", argv, len(input or ""))

    try:
        result = system.run_command(argv, input=input, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        out = (_decode(e.stdout) + _decode(e.stderr)).strip()
        logger.warning("%s timed out after %ss", tool, timeout)
        raise OutputTimeoutError(tool, timeout if timeout is not None else e.timeout, output=out) from e
    except OSError as e:
        logger.warning("Failed to spawn %s: %s", tool, e)
        raise ExecutionFailedError(
            f"failed to {action} with {tool}: {e}",
            tool=tool,
        ) from e
    except UnicodeError as e:
        logger.warning("Text could not be converted for %s: %s", tool, e)
        raise ExecutionFailedError(
            f"failed to {action} with {tool}: {e}",
            tool=tool,
        ) from e

    if result.returncode != 0:
        logger.warning("%s exited with status %d: %s", tool, result.returncode, result.output)
        raise ExecutionFailedError(
            f"failed to {action} with {tool}: exit status {result.returncode}, output: {result.output}",
            tool=tool,
            returncode=result.returncode,
            output=result.output,
        )
