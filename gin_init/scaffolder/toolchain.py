"""Best-effort toolchain steps run after the skeleton is written.

Steps are grouped: commands inside a group depend on each other (``git
commit`` is pointless after ``git init`` failed), so the first failure skips
the rest of its group. Groups are independent, and a failure never aborts
the scaffold.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from gin_init.config import Config
from gin_init.errors import ExternalToolError
from gin_init.logger import get_logger
from gin_init.runner import CommandResult, CommandRunner
from gin_init.utils import console, format_command

from .models import ScaffoldRequest

logger = get_logger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial commit - Go Gin project initialized"


@dataclass(frozen=True)
class ToolchainStep:
    """A single external command."""

    group: str
    description: str
    argv: tuple[str, ...]


def build_steps(request: ScaffoldRequest, config: Config) -> list[ToolchainStep]:
    """Return the ordered toolchain steps for *request*."""
    tc = config.toolchain
    steps: list[ToolchainStep] = [
        ToolchainStep("go", "Initialise Go module", ("go", "mod", "init", request.module_path)),
    ]
    for dep in tc.dependencies:
        steps.append(ToolchainStep("go", f"Fetch {dep}", ("go", "get", dep)))

    for tool in tc.tools:
        steps.append(ToolchainStep("tools", f"Install {tool}", ("go", "install", tool)))

    if tc.generate_docs:
        steps.append(
            ToolchainStep(
                "docs",
                "Generate API docs",
                ("swag", "init", "-g", "cmd/server/main.go", "-o", "docs"),
            )
        )

    steps.extend([
        ToolchainStep("git", "Initialise git repository", ("git", "init")),
        ToolchainStep("git", "Stage files", ("git", "add", ".")),
        ToolchainStep(
            "git", "Create initial commit", ("git", "commit", "-m", INITIAL_COMMIT_MESSAGE)
        ),
        # Renaming after the first commit works on every git version.
        ToolchainStep("git", f"Rename branch to {tc.git_branch}", ("git", "branch", "-M", tc.git_branch)),
    ])
    return steps


def run_toolchain(
    steps: list[ToolchainStep],
    runner: CommandRunner,
    cwd: Path,
    timeout: float,
) -> tuple[list[CommandResult], list[ExternalToolError]]:
    """Run *steps* in order inside *cwd*.

    Returns:
        ``(results, errors)``: one result per command actually run, and one
        ``ExternalToolError`` per failed command. Skipped commands appear in
        neither list.
    """
    results: list[CommandResult] = []
    errors: list[ExternalToolError] = []
    failed_groups: set[str] = set()

    for step in steps:
        cmd_str = format_command(step.argv)
        if step.group in failed_groups:
            logger.info("Skipping %s (earlier %s step failed)", cmd_str, step.group)
            continue

        console.print(f"[cyan]{escape(step.description)}[/cyan] [dim]({escape(cmd_str)})[/dim]")
        result = runner.run(list(step.argv), cwd=cwd, timeout=timeout)
        results.append(result)

        if result.stdout:
            logger.debug("%s stdout:\n%s", cmd_str, result.stdout)
        if result.stderr:
            logger.debug("%s stderr:\n%s", cmd_str, result.stderr)

        if not result.success:
            failed_groups.add(step.group)
            if result.timed_out:
                message = f"{cmd_str} timed out after {timeout}s"
            else:
                detail = result.stderr.splitlines()[-1] if result.stderr else "no output"
                message = f"{cmd_str} failed (exit {result.returncode}): {detail}"
            errors.append(
                ExternalToolError(
                    message,
                    command=cmd_str,
                    returncode=result.returncode,
                    stderr=result.stderr,
                )
            )

    return results, errors
