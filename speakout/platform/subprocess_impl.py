"""SubprocessSystemAdapter: real implementation of ISystemAdapter."""

from __future__ import annotations

import shutil
import subprocess

from speakout.platform.system_adapter import CommandResult, ISystemAdapter


class SubprocessSystemAdapter(ISystemAdapter):
    """Executes real subprocess calls."""

    def run_command(
        self,
        args: list[str],
        input: str | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        r = subprocess.run(
            args,
            input=input,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout,
            shell=False,
        )
        return CommandResult(stdout=r.stdout or "", stderr=r.stderr or "", returncode=r.returncode)

    def which(self, name: str) -> str | None:
        return shutil.which(name)


# Shared default instance; the adapter holds no state
DEFAULT_SYSTEM: ISystemAdapter = SubprocessSystemAdapter()
