"""External command execution.

The scaffolder never calls :mod:`subprocess` directly. It talks to a
``CommandRunner``, so tests can substitute a recording fake and the
environment-dependent toolchain calls stay isolated in one place.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from gin_init.logger import get_logger
from gin_init.utils import format_command

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Outcome of a single external command."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def display(self) -> str:
        return format_command(self.command)


@runtime_checkable
class CommandRunner(Protocol):
    """Runs a named external command and reports what happened.

    Implementations must never raise for an ordinary command failure; a
    missing executable or a timeout is reported through the result.
    """

    def run(
        self,
        command: list[str],
        cwd: Path,
        timeout: float,
    ) -> CommandResult: ...


@dataclass
class SubprocessRunner:
    """``CommandRunner`` backed by :func:`subprocess.run`.

    Attributes:
        env: Extra environment variables merged on top of ``os.environ``
            for every command.
    """

    env: dict[str, str] = field(default_factory=dict)

    def run(self, command: list[str], cwd: Path, timeout: float) -> CommandResult:
        merged_env: dict[str, str] | None = None
        if self.env:
            merged_env = {**os.environ, **self.env}

        logger.debug("Running %s (cwd=%s, timeout=%ss)", format_command(command), cwd, timeout)

        try:
            proc = subprocess.run(
                command,
                cwd=str(cwd),
                env=merged_env,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
                check=False,
            )
        except FileNotFoundError:
            return CommandResult(
                command=list(command),
                returncode=127,
                stderr=f"Executable not found: {command[0]}",
            )
        except OSError as exc:
            return CommandResult(
                command=list(command),
                returncode=126,
                stderr=f"Could not start {command[0]}: {exc}",
            )
        except subprocess.TimeoutExpired as exc:
            # subprocess.run kills the child before re-raising.
            return CommandResult(
                command=list(command),
                returncode=-1,
                stdout=_decode(exc.stdout),
                stderr=f"Command timed out after {timeout}s: {format_command(command)}",
                timed_out=True,
            )

        return CommandResult(
            command=list(command),
            returncode=proc.returncode,
            stdout=(proc.stdout or "").strip(),
            stderr=(proc.stderr or "").strip(),
        )


def _decode(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace").strip()
    return data.strip()
