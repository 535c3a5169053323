"""Command-line entry point for gin-init."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.markup import escape
from rich.prompt import Prompt

from gin_init import __version__
from gin_init.config import Config
from gin_init.errors import ScaffoldError
from gin_init.logger import setup_logging
from gin_init.runner import CommandRunner
from gin_init.scaffolder import ProjectGenerator, build_request, print_report
from gin_init.utils import console, print_error, print_success


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gin-init",
        description="Scaffold a new Go + Gin backend service project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  gin-init\n"
            "  gin-init --name billing-svc --module example.com/org/billing-svc\n"
            "  gin-init -n billing-svc -m example.com/org/billing-svc -o ~/src --skip-tools\n"
        ),
    )
    parser.add_argument("--name", "-n", default=None, help="Project (directory) name")
    parser.add_argument(
        "--module", "-m", default=None, help="Go module path, e.g. github.com/user/project"
    )
    parser.add_argument(
        "--output", "-o", default=None, help="Parent directory for the project (default: .)"
    )
    parser.add_argument(
        "--skip-tools",
        action="store_true",
        help="Only write files; do not run go, git or swag",
    )
    parser.add_argument(
        "--docs", action="store_true", help="Generate API docs with swag after scaffolding"
    )
    parser.add_argument(
        "--timeout", type=int, default=None, help="Per-command toolchain timeout in seconds"
    )
    parser.add_argument(
        "--go-version", default=None, help="Go version for the development Dockerfile"
    )
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; missing values are treated as empty",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_config(args: argparse.Namespace) -> Config:
    """Environment defaults overridden by explicit command-line flags."""
    data: dict[str, Any] = Config.from_env().model_dump()
    if args.output is not None:
        data["output_dir"] = Path(args.output)
    if args.skip_tools:
        data["run_tools"] = False
    if args.go_version is not None:
        data["go_version"] = args.go_version
    if args.timeout is not None:
        data["toolchain"]["timeout"] = args.timeout
    if args.docs:
        data["toolchain"]["generate_docs"] = True
    return Config.model_validate(data)


def _ask(value: str | None, prompt: str, interactive: bool) -> str:
    if value is not None or not interactive:
        return value or ""
    return Prompt.ask(prompt, console=console, default="", show_default=False)


def main(argv: list[str] | None = None, runner: CommandRunner | None = None) -> None:
    """CLI entry point for ``gin-init`` and ``python -m gin_init``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        config = resolve_config(args)
    except ValidationError as exc:
        print_error(f"Error: invalid configuration:\n{exc}")
        sys.exit(1)
    except ValueError as exc:
        print_error(f"Error: invalid environment setting: {exc}")
        sys.exit(1)

    interactive = not args.no_input
    try:
        project_name = _ask(args.name, "Enter project name", interactive)
        module_path = _ask(
            args.module, "Enter Go module path (e.g., github.com/user/project)", interactive
        )
    except (EOFError, KeyboardInterrupt):
        console.print()
        print_error("Error: input aborted before a project name and module path were given.")
        sys.exit(1)

    try:
        request = build_request(project_name, module_path)
        console.print(
            f"Initializing Go Gin project: [bold]{escape(request.project_name)}[/bold] "
            f"({escape(request.module_path)})",
            markup=True,
            highlight=False,
        )
        result = ProjectGenerator(config, runner=runner).generate(request)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    print_report(request, result, branch=config.toolchain.git_branch)
    if result.warnings:
        print_success(
            f"Project {request.project_name} created with {len(result.warnings)} toolchain warning(s)."
        )
    else:
        print_success(f"Project {request.project_name} initialized successfully!")


if __name__ == "__main__":
    main()
