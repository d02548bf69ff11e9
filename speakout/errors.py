"""
Exception hierarchy for speakout.

Every delivery failure is raised as a subclass of :class:`OutputError` so
callers can catch the whole family or a single kind.
"""

from __future__ import annotations


class OutputError(Exception):
    """Base exception for all text output errors."""
    pass


class ToolNotFoundError(OutputError):
    """External tool could not be resolved on PATH at construction time."""

    def __init__(self, kind: str, tool: str):
        super().__init__(f"{kind} tool not found: {tool}")
        self.tool = tool


class ToolNotAllowedError(OutputError):
    """External tool is not on the security allowlist."""

    def __init__(self, kind: str, tool: str):
        super().__init__(f"{kind} tool not allowed: {tool}")
        self.tool = tool


class UnsupportedToolError(OutputError):
    """No argument template is known for the tool."""

    def __init__(self, kind: str, tool: str):
        super().__init__(f"unsupported {kind} tool: {tool}")
        self.tool = tool


class UnsupportedOperationError(OutputError):
    """Operation is not offered by this outputter variant."""
    pass


class ExecutionFailedError(OutputError):
    """The tool was spawned but failed (spawn error or non-zero exit).

    Attributes:
        tool: Tool that failed
        returncode: Exit status, or None if the process never ran
        output: Captured stdout+stderr of the failed run
        fallback_error: Failure of the fallback tool, if one was tried
    """

    def __init__(
        self,
        message: str,
        tool: str,
        returncode: int | None = None,
        output: str = "",
        fallback_error: ExecutionFailedError | None = None,
    ):
        super().__init__(message)
        self.tool = tool
        self.returncode = returncode
        self.output = output
        self.fallback_error = fallback_error


class OutputTimeoutError(ExecutionFailedError):
    """The tool did not exit before the deadline and was killed."""

    def __init__(self, tool: str, timeout: float, output: str = ""):
        super().__init__(
            f"{tool} timed out after {timeout:g}s",
            tool=tool,
            output=output,
        )
        self.timeout = timeout


class EncodingUnsupportedError(OutputError):
    """Text cannot be typed by the selected tool in this environment."""
    pass
