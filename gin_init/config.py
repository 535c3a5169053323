"""gin-init configuration.

Typed configuration for a scaffolding run. All settings use Pydantic v2 models
so they are validated at construction time and can be serialised to/from JSON
or read from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_DEPENDENCIES: list[str] = ["github.com/gin-gonic/gin"]

DEFAULT_TOOLS: list[str] = [
    "github.com/sqlc-dev/sqlc/cmd/sqlc@latest",
    "github.com/golang-migrate/migrate/v4/cmd/migrate@latest",
]


class ToolchainConfig(BaseModel):
    """Settings for the best-effort toolchain steps run after generation."""

    timeout: int = Field(default=300, ge=1, description="Per-command timeout in seconds")
    generate_docs: bool = Field(default=False, description="Run swag to generate API docs")
    git_branch: str = Field(default="main", min_length=1)
    dependencies: list[str] = Field(default_factory=lambda: list(DEFAULT_DEPENDENCIES))
    tools: list[str] = Field(default_factory=lambda: list(DEFAULT_TOOLS))


class Config(BaseModel):
    """Global gin-init configuration.

    Created once by the CLI entry point (or by a test) and passed explicitly
    to the generator. Nothing in the scaffolder reads the process working
    directory or environment on its own.
    """

    output_dir: Path = Field(default=Path("."))
    run_tools: bool = Field(default=True)
    go_version: str = Field(default="1.24", min_length=1)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)

    def resolved_output_dir(self) -> Path:
        """Absolute form of ``output_dir``."""
        return self.output_dir.expanduser().resolve()

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            GIN_INIT_OUTPUT_DIR, GIN_INIT_RUN_TOOLS, GIN_INIT_GO_VERSION,
            GIN_INIT_TOOL_TIMEOUT, GIN_INIT_GENERATE_DOCS, GIN_INIT_GIT_BRANCH.
        """
        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("GIN_INIT_TOOL_TIMEOUT"):
            toolchain_kwargs["timeout"] = int(os.environ["GIN_INIT_TOOL_TIMEOUT"])
        if os.environ.get("GIN_INIT_GENERATE_DOCS"):
            toolchain_kwargs["generate_docs"] = _env_flag(os.environ["GIN_INIT_GENERATE_DOCS"])
        if os.environ.get("GIN_INIT_GIT_BRANCH"):
            toolchain_kwargs["git_branch"] = os.environ["GIN_INIT_GIT_BRANCH"]

        kwargs: dict[str, Any] = {
            "output_dir": Path(os.environ.get("GIN_INIT_OUTPUT_DIR", ".")),
            "toolchain": ToolchainConfig(**toolchain_kwargs),
        }
        if os.environ.get("GIN_INIT_RUN_TOOLS"):
            kwargs["run_tools"] = _env_flag(os.environ["GIN_INIT_RUN_TOOLS"])
        if os.environ.get("GIN_INIT_GO_VERSION"):
            kwargs["go_version"] = os.environ["GIN_INIT_GO_VERSION"]

        return cls(**kwargs)


def _env_flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")
