"""gin-init: scaffold a Go + Gin backend service project."""

__version__ = "0.1.0"
