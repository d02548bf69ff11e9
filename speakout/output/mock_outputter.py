"""In-memory IOutputter for tests of code that delivers text."""

from __future__ import annotations

from speakout.errors import ExecutionFailedError, OutputError, OutputTimeoutError
from speakout.output.base import IOutputter


class MockOutputter(IOutputter):
    """Records every delivery instead of spawning a tool.

    A call that is configured to fail raises the injected error and is not
    recorded.
    """

    def __init__(self) -> None:
        self.reset()

    # -- IOutputter -------------------------------------------------------

    def copy_to_clipboard(self, text: str) -> None:
        if self._clipboard_error is not None:
            raise self._clipboard_error
        self._clipboard_history.append(text)

    def type_to_active_window(self, text: str) -> None:
        if self._type_error is not None:
            raise self._type_error
        self._type_history.append(text)

    def get_tool_names(self) -> tuple[str, str]:
        return "mock-clipboard", "mock-type"

    # -- failure injection -------------------------------------------------

    def set_clipboard_error(self, error: Exception | None) -> None:
        self._clipboard_error = error

    def set_type_error(self, error: Exception | None) -> None:
        self._type_error = error

    def reset(self) -> None:
        """Clear history and injected errors."""
        self._clipboard_error: Exception | None = None
        self._type_error: Exception | None = None
        self._clipboard_history: list[str] = []
        self._type_history: list[str] = []

    # -- inspection --------------------------------------------------------

    @property
    def clipboard_content(self) -> str:
        return self.last_clipboard_call()

    @property
    def typed_content(self) -> str:
        return self.last_type_call()

    @property
    def clipboard_call_count(self) -> int:
        return len(self._clipboard_history)

    @property
    def type_call_count(self) -> int:
        return len(self._type_history)

    @property
    def clipboard_call_history(self) -> list[str]:
        return list(self._clipboard_history)

    @property
    def type_call_history(self) -> list[str]:
        return list(self._type_history)

    def was_clipboard_called(self) -> bool:
        return bool(self._clipboard_history)

    def was_type_called(self) -> bool:
        return bool(self._type_history)

    def last_clipboard_call(self) -> str:
        return self._clipboard_history[-1] if self._clipboard_history else ""

    def last_type_call(self) -> str:
        return self._type_history[-1] if self._type_history else ""

    def contains_clipboard_text(self, text: str) -> bool:
        return any(text in call for call in self._clipboard_history)

    def contains_type_text(self, text: str) -> bool:
        return any(text in call for call in self._type_history)


class MockOutputterWithErrors(MockOutputter):
    """MockOutputter with ready-made failure scenarios."""

    def simulate_clipboard_unavailable(self) -> None:
        self.set_clipboard_error(
            ExecutionFailedError("clipboard service unavailable", tool="mock-clipboard")
        )

    def simulate_permission_denied(self) -> None:
        self.set_type_error(
            ExecutionFailedError("permission denied: cannot access active window", tool="mock-type")
        )

    def simulate_timeout(self) -> None:
        self.set_clipboard_error(OutputTimeoutError("mock-clipboard", 5.0))
        self.set_type_error(OutputTimeoutError("mock-type", 5.0))

    def simulate_invalid_input(self) -> None:
        self.set_clipboard_error(OutputError("invalid input: text is empty"))
        self.set_type_error(OutputError("invalid input: text is empty"))
