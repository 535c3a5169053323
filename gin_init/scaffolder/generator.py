"""Main scaffolding orchestrator.

Takes a ``ScaffoldRequest`` and a ``Config`` and materialises the fixed Go +
Gin project skeleton. The run is a single forward pass:

1. plan (pure, derived from the request)
2. render every template in memory
3. create directories, parents first
4. write files, overwriting whatever is there except an existing ``.env``
5. run the toolchain steps (best effort)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from gin_init.config import Config
from gin_init.errors import FilesystemError
from gin_init.logger import get_logger
from gin_init.runner import CommandRunner, SubprocessRunner
from gin_init.utils import print_next_steps, print_summary_table, print_warning

from .models import ScaffoldPlan, ScaffoldRequest, ScaffoldResult, build_request
from .skeleton import build_plan
from .templates import TemplateRenderer
from .toolchain import build_steps, run_toolchain

logger = get_logger(__name__)


class ProjectGenerator:
    """Scaffolds one project per call to :meth:`generate`.

    Re-running against an existing project directory is supported: skeleton
    files are rewritten with fresh content and any other files are left
    untouched, so the skeleton ends up byte-identical to a fresh run. The one
    exception is an existing ``.env``, which holds the user's local settings
    and is kept as is.
    """

    def __init__(
        self,
        config: Config | None = None,
        runner: CommandRunner | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or Config()
        self.runner = runner or SubprocessRunner()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def plan(self, request: ScaffoldRequest) -> ScaffoldPlan:
        """Return the plan for *request* without touching the filesystem."""
        return build_plan(request, self.config.output_dir)

    def generate(self, request: ScaffoldRequest) -> ScaffoldResult:
        """Generate the complete project for *request*.

        Raises:
            FilesystemError: If the target path is occupied by a non-directory
                or any directory/file cannot be created. Nothing is cleaned up.
        """
        plan = self.plan(request)
        logger.info("Scaffolding %s (%s) into %s", request.project_name, request.module_path, plan.root)

        if plan.root.exists() and not plan.root.is_dir():
            raise FilesystemError(
                f"Target path exists and is not a directory: {plan.root}", path=plan.root
            )

        contents = self._render_all(plan, self._build_context(request))

        result = ScaffoldResult(root=plan.root)
        result.directories_created = self._create_directories(plan)
        result.files_written, result.files_kept = self._write_files(plan, contents)

        if self.config.run_tools:
            self._run_tools(request, plan, result)
        else:
            logger.info("Skipping toolchain steps")

        return result

    # -- Context building --------------------------------------------------

    def _build_context(self, request: ScaffoldRequest) -> dict[str, Any]:
        """Build the Jinja2 template context from the request and config."""
        return {
            **request.template_context,
            "go_version": self.config.go_version,
        }

    # -- Rendering ---------------------------------------------------------

    def _render_all(self, plan: ScaffoldPlan, ctx: dict[str, Any]) -> dict[str, str]:
        """Render every file template up front, keyed by relative path."""
        rendered: dict[str, str] = {}
        for entry in plan.files:
            rendered[entry.relative_path] = self.renderer.render(entry.template, ctx)
        return rendered

    # -- Directory structure -----------------------------------------------

    def _create_directories(self, plan: ScaffoldPlan) -> list[Path]:
        """Create the project root and every skeleton directory, in order."""
        created: list[Path] = []
        for index, directory in enumerate(plan.directories):
            existed = directory.is_dir()
            try:
                # Only the root may need missing ancestors; everything below
                # it is listed parents-first.
                directory.mkdir(parents=index == 0, exist_ok=True)
            except OSError as exc:
                raise FilesystemError(
                    f"Cannot create directory {directory}: {exc.strerror or exc}",
                    path=directory,
                ) from exc
            if not existed:
                created.append(directory)
                logger.debug("Created directory %s", directory)
        return created

    # -- Files -------------------------------------------------------------

    def _write_files(
        self, plan: ScaffoldPlan, contents: dict[str, str]
    ) -> tuple[list[Path], list[Path]]:
        """Write rendered contents, overwriting existing files.

        ``keep_existing`` entries that are already present are left untouched
        and returned in the second list.
        """
        written: list[Path] = []
        kept: list[Path] = []
        for entry in plan.files:
            target = plan.target(entry)
            if entry.keep_existing and target.exists():
                logger.info("Keeping existing %s", target)
                kept.append(target)
                continue
            try:
                # Bytes, so no platform newline translation happens.
                target.write_bytes(contents[entry.relative_path].encode("utf-8"))
            except OSError as exc:
                raise FilesystemError(
                    f"Cannot write {target}: {exc.strerror or exc}", path=target
                ) from exc
            written.append(target)
            logger.debug("Wrote %s", target)
        return written, kept

    # -- Toolchain ---------------------------------------------------------

    def _run_tools(
        self, request: ScaffoldRequest, plan: ScaffoldPlan, result: ScaffoldResult
    ) -> None:
        steps = build_steps(request, self.config)
        results, errors = run_toolchain(
            steps, self.runner, cwd=plan.root, timeout=self.config.toolchain.timeout
        )
        result.tool_results = results
        for error in errors:
            print_warning(f"Warning: {error}")
            result.warnings.append(str(error))


# ---------------------------------------------------------------------------
# Convenience entry points
# ---------------------------------------------------------------------------


def scaffold(
    project_name: str | None,
    module_path: str | None,
    config: Config | None = None,
    runner: CommandRunner | None = None,
) -> ScaffoldResult:
    """Validate raw input and generate the project.

    Raises:
        InvalidInputError: Before any filesystem work, on bad input.
        FilesystemError: If the tree cannot be created.
    """
    request = build_request(project_name, module_path)
    return ProjectGenerator(config, runner=runner).generate(request)


def next_steps(request: ScaffoldRequest) -> list[str]:
    """Follow-up instructions shown after a successful run."""
    return [
        f"cd ./{request.project_name}",
        "1. Configure your .env file",
        "2. Run 'make dev' to start the development server",
        "3. Run 'make test' to start the test stack",
    ]


def print_report(request: ScaffoldRequest, result: ScaffoldResult, branch: str = "main") -> None:
    """Print the completion summary and next steps."""
    print_summary_table(
        {
            "Project": request.project_name,
            "Module": request.module_path,
            "Location": str(result.root),
            "Directories created": str(len(result.directories_created)),
            "Files written": str(len(result.files_written)),
            "Files kept": str(len(result.files_kept)),
            "Toolchain commands": str(len(result.tool_results)),
            "Warnings": str(len(result.warnings)),
        },
        title="Scaffold complete",
    )
    title = f"Project {request.project_name} initialized"
    if result.tool_results and result.tools_ok:
        title += f" on branch '{branch}'"
    print_next_steps(title, next_steps(request))
