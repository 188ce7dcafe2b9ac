"""CLI package: Typer-based command-line interface.

Usage:
    screenspec --help
    python -m screenspec.cli inspect path/to/bundle
"""

from screenspec.cli._app import app

# Register command modules (side-effect imports)
import screenspec.cli.cmd_inspect  # noqa: F401
import screenspec.cli.cmd_simulate  # noqa: F401
import screenspec.cli.cmd_serve  # noqa: F401

__all__ = ["app"]
