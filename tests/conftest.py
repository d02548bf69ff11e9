from __future__ import annotations

import subprocess

import pytest

from speakout.platform.system_adapter import CommandResult, ISystemAdapter
from speakout.security import SecurityPolicy

ALL_TOOLS = {'xsel', 'wl-copy', 'xdotool', 'wtype', 'ydotool'}

SESSION_VARS = ('WAYLAND_DISPLAY', 'DISPLAY', 'XDG_CURRENT_DESKTOP', 'DESKTOP_SESSION')


def pytest_addoption(parser):
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Enable tests that spawn real clipboard/typing tools (skipped by default)."
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "live: spawns real desktop tools; needs --run-live")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-live"):
        return
    skip_live = pytest.mark.skip(reason="needs --run-live")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


class FakeSystemAdapter(ISystemAdapter):
    """Records commands instead of running them.

    ``available`` is the set of tool names ``which`` resolves. Per-tool
    outcomes are configured with ``set_result`` / ``set_error``; anything
    not configured exits 0.
    """

    def __init__(self, available: set[str] | None = None) -> None:
        self.available = set(ALL_TOOLS if available is None else available)
        self.calls: list[tuple[list[str], str | None, float | None]] = []
        self._results: dict[str, CommandResult] = {}
        self._errors: dict[str, BaseException] = {}

    def set_result(self, tool: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self._results[tool] = CommandResult(stdout=stdout, stderr=stderr, returncode=returncode)

    def set_error(self, tool: str, error: BaseException) -> None:
        self._errors[tool] = error

    def run_command(self, args, input=None, timeout=None) -> CommandResult:
        self.calls.append((list(args), input, timeout))
        tool = args[0]
        if tool in self._errors:
            raise self._errors[tool]
        return self._results.get(tool, CommandResult(stdout="", stderr="", returncode=0))

    def which(self, name: str) -> str | None:
        return f"/usr/bin/{name}" if name in self.available else None

    @property
    def tools_run(self) -> list[str]:
        return [argv[0] for argv, _, _ in self.calls]


@pytest.fixture(autouse=True)
def clean_session_env(monkeypatch):
    """Tests never see the developer's real display/desktop variables."""
    for var in SESSION_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def fake_system() -> FakeSystemAdapter:
    return FakeSystemAdapter()


@pytest.fixture
def policy() -> SecurityPolicy:
    return SecurityPolicy(allowed_commands=set(ALL_TOOLS))


@pytest.fixture
def wayland_env() -> dict[str, str]:
    return {'WAYLAND_DISPLAY': 'wayland-0', 'XDG_CURRENT_DESKTOP': 'sway'}


@pytest.fixture
def gnome_wayland_env() -> dict[str, str]:
    return {'WAYLAND_DISPLAY': 'wayland-0', 'DISPLAY': ':0', 'XDG_CURRENT_DESKTOP': 'ubuntu:GNOME'}


@pytest.fixture
def x11_env() -> dict[str, str]:
    return {'DISPLAY': ':0', 'XDG_CURRENT_DESKTOP': 'X-Cinnamon'}


@pytest.fixture
def timeout_expired():
    return subprocess.TimeoutExpired(cmd=['tool'], timeout=0.5, output=b"partial", stderr=None)


@pytest.fixture
def make_system():
    """Factory for FakeSystemAdapter with a custom set of installed tools."""
    return FakeSystemAdapter
