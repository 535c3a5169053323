"""Tests for Jinja2 template rendering.

Covers:
- Module path and project name substitution
- Templates that must not substitute anything
- Shell/Make/Compose syntax passes through untouched
- StrictUndefined behaviour and custom template directories
"""

from __future__ import annotations

import pytest
from jinja2 import UndefinedError

from gin_init.scaffolder.skeleton import SKELETON_FILES
from gin_init.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def context() -> dict[str, str]:
    return {
        "project_name": "billing-svc",
        "module_path": "example.com/org/billing-svc",
        "go_version": "1.24",
    }


class TestGoSources:
    def test_main_imports_api_package(self, renderer, context):
        content = renderer.render("go/main.go.j2", context)
        assert '"example.com/org/billing-svc/internal/api"' in content
        assert "package main" in content
        assert 'port = "8080"' in content

    def test_route_imports_handler_package(self, renderer, context):
        content = renderer.render("go/route.go.j2", context)
        assert '"example.com/org/billing-svc/internal/api/handler"' in content
        assert 'r.Group("/api/v1")' in content

    def test_health_handler(self, renderer, context):
        content = renderer.render("go/health.go.j2", context)
        assert 'rg.GET("/health"' in content
        assert '"status": "ok"' in content
        assert "billing-svc" not in content


class TestConfigFiles:
    def test_env_example_keys(self, renderer, context):
        content = renderer.render("env.example.j2", context)
        assert "APP_PORT=8080" in content
        for key in ("DB_USER=", "DB_PASSWORD=", "DB_NAME=", "DB_HOST=", "DB_PORT=", "DB_SSLMODE="):
            assert key in content

    def test_compose_container_names(self, renderer, context):
        content = renderer.render("docker-compose.yml.j2", context)
        assert 'container_name: "billing-svc_db"' in content
        assert 'container_name: "billing-svc_redis"' in content
        assert 'container_name: "billing-svc_app"' in content

    def test_compose_keeps_variable_references(self, renderer, context):
        content = renderer.render("docker-compose.yml.j2", context)
        assert "POSTGRES_USER: ${DB_USER}" in content
        assert '"${APP_PORT}:${APP_PORT}"' in content

    @pytest.mark.parametrize("template", ["docker-compose.test.yml.j2", "docker-compose.prod.yml.j2"])
    def test_secondary_compose_ports(self, renderer, context, template):
        content = renderer.render(template, context)
        assert '"${APP_PORT}:${APP_PORT}"' in content

    def test_dockerfile_go_version(self, renderer, context):
        content = renderer.render("Dockerfile.dev.j2", {**context, "go_version": "1.23"})
        assert content.startswith("FROM golang:1.23-alpine\n")

    def test_makefile_targets_use_tabs(self, renderer, context):
        content = renderer.render("Makefile.j2", context)
        for target in (
            "dev",
            "test",
            "prod",
            "exec",
            "logs-app",
            "logs-db",
            "down",
            "migrate-new",
            "migrate-up",
            "migrate-down",
            "sqlc",
            "print-db-url",
        ):
            assert f"\n{target}:\n\t" in content, f"target {target} missing or not tab-indented"

    def test_makefile_variables_untouched(self, renderer, context):
        content = renderer.render("Makefile.j2", context)
        assert "$(DB_USER):$(DB_PASSWORD)@localhost:$(DB_PORT)/$(DB_NAME)" in content
        assert "export $(shell sed 's/=.*//' .env)" in content

    def test_gitignore_keeps_env_example(self, renderer, context):
        content = renderer.render("gitignore.j2", context)
        assert ".env\n" in content
        assert "!.env.example" in content

    def test_trailing_newline_kept(self, renderer, context):
        for _, name in SKELETON_FILES:
            assert renderer.render(name, context).endswith("\n"), name


class TestRendererBehaviour:
    def test_unknown_placeholder_raises(self, tmp_path):
        (tmp_path / "broken.j2").write_text("{{ nope }}\n", encoding="utf-8")
        with pytest.raises(UndefinedError):
            TemplateRenderer(tmp_path).render("broken.j2", {})

    def test_custom_template_dir(self, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "x.txt.j2").write_text("hi {{ project_name }}\n", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.template_dir == tmp_path
        assert renderer.render("sub/x.txt.j2", {"project_name": "p"}) == "hi p\n"
