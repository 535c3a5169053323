"""The fixed project skeleton.

Templates are data: the tables below map every generated path to the
packaged Jinja2 file it is rendered from. Adding a file to the scaffold means
adding a row here and a ``.j2`` file under ``templates/``.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from .models import FileTemplate, ScaffoldPlan, ScaffoldRequest

# Component folders created even when nothing is rendered into them.
SKELETON_DIRECTORIES: tuple[str, ...] = (
    "cmd/server",
    "internal/api/handler",
    "internal/domain",
    "internal/repositories",
    "internal/services",
    "internal/db/migrations",
    "internal/db/queries",
    "internal/db/sqlc",
    "configs",
)

# Output path -> template name. Order is the write order.
SKELETON_FILES: tuple[tuple[str, str], ...] = (
    (".env.example", "env.example.j2"),
    (".env", "env.example.j2"),
    (".env.dev", "env.example.j2"),
    (".env.test", "env.example.j2"),
    (".dockerignore", "dockerignore.j2"),
    ("Dockerfile.dev", "Dockerfile.dev.j2"),
    ("docker-compose.yml", "docker-compose.yml.j2"),
    ("docker-compose.test.yml", "docker-compose.test.yml.j2"),
    ("docker-compose.prod.yml", "docker-compose.prod.yml.j2"),
    (".air.toml", "air.toml.j2"),
    ("Makefile", "Makefile.j2"),
    ("sqlc.yaml", "sqlc.yaml.j2"),
    (".gitignore", "gitignore.j2"),
    ("cmd/server/main.go", "go/main.go.j2"),
    ("internal/api/route.go", "go/route.go.j2"),
    ("internal/api/handler/health.go", "go/health.go.j2"),
)

# Files the user is told to edit. A re-run leaves an existing copy alone.
KEEP_EXISTING_FILES: frozenset[str] = frozenset({".env"})


def skeleton_entries() -> list[FileTemplate]:
    """Every skeleton entry: directories first, then files."""
    entries = [
        FileTemplate(relative_path=d, directory_only=True) for d in SKELETON_DIRECTORIES
    ]
    entries.extend(
        FileTemplate(
            relative_path=path,
            template=template,
            keep_existing=path in KEEP_EXISTING_FILES,
        )
        for path, template in SKELETON_FILES
    )
    return entries


def build_plan(request: ScaffoldRequest, output_dir: Path) -> ScaffoldPlan:
    """Derive the ordered plan for *request* under *output_dir*.

    The project root is ``output_dir / project_name``; *output_dir* is
    resolved to an absolute path first. Directories are listed parents-first
    and include every ancestor of every file below the root, so walking the
    list in order satisfies the mkdir-before-write invariant.
    """
    root = Path(output_dir).expanduser().resolve() / request.project_name
    entries = skeleton_entries()

    relative_dirs: list[PurePosixPath] = []
    seen: set[PurePosixPath] = set()

    def _add(rel: PurePosixPath) -> None:
        # Ancestors first so the list stays parents-first.
        for parent in reversed(rel.parents):
            if parent != PurePosixPath(".") and parent not in seen:
                seen.add(parent)
                relative_dirs.append(parent)
        if rel not in seen:
            seen.add(rel)
            relative_dirs.append(rel)

    for entry in entries:
        rel = PurePosixPath(entry.relative_path)
        if entry.directory_only:
            _add(rel)
        elif rel.parent != PurePosixPath("."):
            _add(rel.parent)

    directories = (root, *(root.joinpath(*rel.parts) for rel in relative_dirs))
    files = tuple(entry for entry in entries if not entry.directory_only)
    return ScaffoldPlan(root=root, directories=directories, files=files)
