"""Shared pytest fixtures for the gin-init test suite.

Provides reusable fixtures for:
- Output directories and configurations that never touch the real cwd
- A sample ``ScaffoldRequest``
- A recording ``CommandRunner`` fake with scriptable failures
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from gin_init.config import Config
from gin_init.runner import CommandResult
from gin_init.scaffolder.models import ScaffoldRequest, build_request


# ---------------------------------------------------------------------------
# Recording CommandRunner
# ---------------------------------------------------------------------------


@dataclass
class RecordedCall:
    command: list[str]
    cwd: Path
    timeout: float


@dataclass
class RecordingRunner:
    """``CommandRunner`` fake that records calls instead of running them.

    ``failures`` maps a command prefix (e.g. ``("git", "init")``) to the
    result returned for any command starting with it. Everything else
    succeeds with empty output.
    """

    failures: dict[tuple[str, ...], CommandResult] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)

    def run(self, command: list[str], cwd: Path, timeout: float) -> CommandResult:
        self.calls.append(RecordedCall(list(command), Path(cwd), timeout))
        for prefix, result in self.failures.items():
            if tuple(command[: len(prefix)]) == prefix:
                return result
        return CommandResult(command=list(command), returncode=0)

    def fail(self, *prefix: str, returncode: int = 1, stderr: str = "boom", timed_out: bool = False) -> None:
        self.failures[tuple(prefix)] = CommandResult(
            command=list(prefix),
            returncode=returncode,
            stderr=stderr,
            timed_out=timed_out,
        )

    @property
    def commands(self) -> list[list[str]]:
        return [call.command for call in self.calls]


@pytest.fixture
def recording_runner() -> RecordingRunner:
    """A fresh recording runner with no scripted failures."""
    return RecordingRunner()


# ---------------------------------------------------------------------------
# Paths, config & requests
# ---------------------------------------------------------------------------


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory for generated projects (auto-cleanup)."""
    out = tmp_path / "workspace"
    out.mkdir()
    return out


@pytest.fixture
def files_only_config(output_dir: Path) -> Config:
    """Config that writes into ``output_dir`` and skips the toolchain."""
    return Config(output_dir=output_dir, run_tools=False)


@pytest.fixture
def tools_config(output_dir: Path) -> Config:
    """Config that writes into ``output_dir`` and runs the toolchain."""
    return Config(output_dir=output_dir, run_tools=True)


@pytest.fixture
def billing_request() -> ScaffoldRequest:
    """The canonical example request."""
    return build_request("billing-svc", "example.com/org/billing-svc")


@pytest.fixture(autouse=True)
def _clean_gin_init_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's GIN_INIT_* variables out of every test."""
    for name in (
        "GIN_INIT_OUTPUT_DIR",
        "GIN_INIT_RUN_TOOLS",
        "GIN_INIT_GO_VERSION",
        "GIN_INIT_TOOL_TIMEOUT",
        "GIN_INIT_GENERATE_DOCS",
        "GIN_INIT_GIT_BRANCH",
    ):
        monkeypatch.delenv(name, raising=False)
