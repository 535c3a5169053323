"""gin-init scaffolder -- generates a Go + Gin service skeleton.

The skeleton is a fixed table of directories and Jinja2 templates
(:mod:`gin_init.scaffolder.skeleton`). A ``ProjectGenerator`` plans the tree,
creates directories, writes the rendered files, and then runs the Go and git
toolchains on a best-effort basis.

Quick usage::

    from pathlib import Path

    from gin_init.config import Config
    from gin_init.scaffolder import ProjectGenerator, build_request

    request = build_request("billing-svc", "example.com/org/billing-svc")
    generator = ProjectGenerator(Config(output_dir=Path("/tmp"), run_tools=False))
    result = generator.generate(request)
"""

from gin_init.scaffolder.generator import ProjectGenerator, print_report, scaffold
from gin_init.scaffolder.models import (
    FileTemplate,
    ScaffoldPlan,
    ScaffoldRequest,
    ScaffoldResult,
    build_request,
)
from gin_init.scaffolder.skeleton import build_plan
from gin_init.scaffolder.templates import TemplateRenderer

__all__ = [
    "FileTemplate",
    "ProjectGenerator",
    "ScaffoldPlan",
    "ScaffoldRequest",
    "ScaffoldResult",
    "TemplateRenderer",
    "build_plan",
    "build_request",
    "print_report",
    "scaffold",
]
