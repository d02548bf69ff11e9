"""ISystemAdapter interface: abstraction for PATH lookup and subprocess calls."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class CommandResult:
    stdout: str
    stderr: str
    returncode: int

    @property
    def output(self) -> str:
        """Combined stdout and stderr, for diagnostics."""
        return (self.stdout + self.stderr).strip()


class ISystemAdapter(ABC):
    """Process seam used by the environment detector and every outputter.

    ``run_command`` never goes through a shell. It raises ``OSError`` when
    the executable cannot be spawned and ``subprocess.TimeoutExpired`` when
    the deadline passes (the child is killed first).
    """

    @abstractmethod
    def run_command(
        self,
        args: list[str],
        input: str | None = None,
        timeout: float | None = None,
    ) -> CommandResult: ...

    @abstractmethod
    def which(self, name: str) -> str | None: ...
