"""Data model for a scaffolding run."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from gin_init.errors import InvalidInputError
from gin_init.runner import CommandResult

# Characters that would let a project name escape the output directory or
# produce an unusable directory name.
_FORBIDDEN_NAME_CHARS = ("/", "\\", "\x00")

# The name becomes a directory and a Docker container name prefix, and is
# pasted unquoted into compose YAML. Docker allows [a-zA-Z0-9][a-zA-Z0-9_.-]*.
_PROJECT_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")


class ScaffoldRequest(BaseModel):
    """The two user inputs for one invocation. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1, description="Directory name of the new project")
    module_path: str = Field(..., min_length=1, description="Go module path, e.g. github.com/user/project")

    @property
    def template_context(self) -> dict[str, str]:
        """Values available to every template."""
        return {
            "project_name": self.project_name,
            "module_path": self.module_path,
        }


class FileTemplate(BaseModel):
    """One entry of the skeleton table.

    ``template`` names a packaged Jinja2 file relative to the templates
    directory. Directory-only entries have no template. A ``keep_existing``
    file is only written when it is not already present.
    """

    model_config = ConfigDict(frozen=True)

    relative_path: str
    template: str | None = None
    directory_only: bool = False
    keep_existing: bool = False


class ScaffoldPlan(BaseModel):
    """Everything the generator will create, in order.

    ``directories`` is ordered parents-first and already contains the parent
    of every file in ``files``.
    """

    model_config = ConfigDict(frozen=True)

    root: Path
    directories: tuple[Path, ...]
    files: tuple[FileTemplate, ...]

    def target(self, entry: FileTemplate) -> Path:
        """Absolute destination of a skeleton entry."""
        return self.root / entry.relative_path


class ScaffoldResult(BaseModel):
    """What a completed run produced."""

    root: Path
    directories_created: list[Path] = Field(default_factory=list)
    files_written: list[Path] = Field(default_factory=list)
    files_kept: list[Path] = Field(default_factory=list)
    tool_results: list[CommandResult] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def tools_ok(self) -> bool:
        return not self.warnings


def build_request(project_name: str | None, module_path: str | None) -> ScaffoldRequest:
    """Validate raw user input and build a ``ScaffoldRequest``.

    Surrounding whitespace is stripped from both values.

    Raises:
        InvalidInputError: If the project name is empty, not a single path
            component, or uses characters outside ``[A-Za-z0-9_.-]``, or if
            the module path is empty or contains whitespace.
    """
    name = (project_name or "").strip()
    module = (module_path or "").strip()

    if not name:
        raise InvalidInputError("Project name must not be empty.", field="project_name")
    if name in (".", ".."):
        raise InvalidInputError(
            f"Project name '{name}' is not a valid directory name.", field="project_name"
        )
    if any(ch in name for ch in _FORBIDDEN_NAME_CHARS):
        raise InvalidInputError(
            f"Project name '{name}' must not contain path separators.", field="project_name"
        )
    if not _PROJECT_NAME_RE.fullmatch(name):
        raise InvalidInputError(
            f"Project name {name!r} may only contain letters, digits, '_', '.' and '-',"
            " and must start with a letter or digit.",
            field="project_name",
        )
    if not module:
        raise InvalidInputError("Module path must not be empty.", field="module_path")
    if any(ch.isspace() for ch in module):
        raise InvalidInputError(
            f"Module path '{module}' must not contain whitespace.", field="module_path"
        )

    return ScaffoldRequest(project_name=name, module_path=module)
