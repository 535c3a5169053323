"""Error taxonomy for the scaffolder."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error the scaffolder reports to the user."""


class InvalidInputError(ScaffoldError):
    """Raised when the project name or module path is unusable.

    Always raised before anything is written to disk.
    """

    def __init__(self, message: str, field: str = ""):
        self.field = field
        super().__init__(message)


class FilesystemError(ScaffoldError):
    """Raised when a directory or file under the target cannot be created."""

    def __init__(self, message: str, path: str | Path = ""):
        self.path = Path(path) if path else None
        super().__init__(message)


class ExternalToolError(ScaffoldError):
    """A toolchain command failed, timed out, or could not be started.

    The generator collects these as warnings instead of raising them.
    """

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        stderr: str = "",
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)
