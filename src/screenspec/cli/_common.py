"""Shared helpers for CLI commands."""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from screenspec.cli._console import console, print_err
from screenspec.config.settings import InterpreterSettings
from screenspec.runtime.document_loader import Bundle, DocumentLoadError, load_bundle
from screenspec.startup import ensure_initialized as _ensure_initialized

logger = logging.getLogger(__name__)


def ensure_initialized(config_path: Optional[Path] = None) -> InterpreterSettings:
    """Initialize environment and return the interpreter settings."""
    return _ensure_initialized(config_path).settings


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging with Rich handler."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Suppress noisy third-party loggers
    for name in ("uvicorn.access", "httpx", "httpcore", "watchdog"):
        logging.getLogger(name).setLevel(logging.WARNING)


def open_bundle(bundle_dir: Optional[Path], settings: InterpreterSettings) -> Bundle:
    """Load a bundle, exiting with status 1 on failure.

    Raises:
        SystemExit: If the bundle cannot be loaded.
    """
    target = bundle_dir or settings.bundle_dir
    try:
        return load_bundle(target, settings)
    except DocumentLoadError as e:
        print_err(str(e))
        raise SystemExit(1)
