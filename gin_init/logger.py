"""Logging setup: stdlib ``logging`` rendered through Rich."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from gin_init.utils import console

ROOT_LOGGER = "gin_init"

_configured = False


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a ``RichHandler`` to the ``gin_init`` logger.

    Safe to call more than once; later calls only adjust the level.

    Args:
        verbose: Log at DEBUG instead of INFO.

    Returns:
        The package root logger.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER)
    level = logging.DEBUG if verbose else logging.INFO
    root.setLevel(level)

    if not _configured:
        handler = RichHandler(
            console=console,
            show_time=False,
            show_path=verbose,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.propagate = False
        _configured = True

    for handler in root.handlers:
        handler.setLevel(level)

    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``gin_init`` hierarchy."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
