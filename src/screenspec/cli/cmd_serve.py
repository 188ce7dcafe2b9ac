"""Serve command: run the HTTP host for remote view layers."""

from pathlib import Path

import typer

from screenspec.cli._app import app
from screenspec.cli._common import ensure_initialized, open_bundle, setup_logging
from screenspec.cli._console import print_ok


@app.command("serve", help="Serve a bundle over HTTP (view / input / click).")
def serve_cmd(
    ctx: typer.Context,
    bundle_dir: Path = typer.Option(None, "--bundle", "-b", help="Bundle directory (default: settings.bundle_dir)"),
    host: str = typer.Option(None, "--host", help="Bind host (default: settings.api_host)"),
    port: int = typer.Option(None, "--port", help="Bind port (default: settings.api_port)"),
):
    """Load the bundle once, then hand the app to uvicorn."""
    settings = ensure_initialized(ctx.obj["config"])
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    import uvicorn

    from screenspec.api.main import create_app

    bundle = open_bundle(bundle_dir, settings)
    bind_host = host or settings.api_host
    bind_port = port or settings.api_port

    print_ok(f"Serving {bundle.root} at http://{bind_host}:{bind_port}")
    print_ok(f"API docs: http://{bind_host}:{bind_port}/docs")
    uvicorn.run(create_app(bundle), host=bind_host, port=bind_port, log_level="info")
