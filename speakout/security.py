"""Command allowlist and argument sanitizing.

Every outputter checks :func:`is_command_allowed` and passes its argument
vector through :func:`sanitize_arguments` before spawning a tool.

Arguments are always handed to the tool as a list (``shell=False``), so
shell metacharacters such as ``; | $ ( )`` reach the tool as literal
characters and are never interpreted. Sanitizing therefore only removes
bytes a terminal or the tool's own parser could act on: NUL, C0 controls
other than tab/newline, DEL and C1 controls. Argument count and all
printable Unicode are preserved. Stdin payloads also keep carriage
returns so pasted CRLF text reaches the clipboard unchanged.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Iterable

# C0 minus \t and \n, DEL, C1
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
# Same, but \r survives on stdin
_PAYLOAD_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


@dataclass
class SecurityPolicy:
    """Allowlist of executable base names. Empty means nothing may run."""

    allowed_commands: set[str] = field(default_factory=set)

    @classmethod
    def from_dict(cls, conf: dict) -> SecurityPolicy:
        return cls(allowed_commands=set(conf.get('allowed_commands') or ()))

    def reload(self, commands: Iterable[str]) -> None:
        """Replace the allowlist in place; outputters see it on their next call."""
        self.allowed_commands = set(commands)


def is_command_allowed(policy: SecurityPolicy | None, command: str) -> bool:
    """True iff the base name of *command* is on the allowlist.

    Only the base name is compared, so ``/tmp/evil/xsel`` is checked as
    ``xsel`` and a path cannot smuggle in an unlisted program name.
    """
    if policy is None or not policy.allowed_commands or not command:
        return False
    return os.path.basename(command) in policy.allowed_commands


def sanitize_payload(text: str) -> str:
    """Strip control bytes from text piped to a tool on stdin."""
    return _PAYLOAD_CONTROL_RE.sub("", str(text))


def sanitize_arguments(args: Iterable[str]) -> list[str]:
    """Return a scrubbed copy of *args* with the same number of elements."""
    return [_CONTROL_RE.sub("", str(arg)) for arg in args]
