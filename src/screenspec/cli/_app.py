"""Root Typer application with global options."""

from pathlib import Path

import typer

from screenspec import __version__

app = typer.Typer(
    name="screenspec",
    help="Interpret declarative multi-screen form bundles.",
    epilog="A bundle is a directory holding the document (settings.document_file, bundle.json by default) and its base64 image assets.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"screenspec {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug-level logging (rule and trace detail)"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Warnings and errors only"),
    json_output: bool = typer.Option(False, "--json", help="Reports as JSON on stdout"),
    config: Path = typer.Option(None, "--config", "-c", help="Settings file (default: <project root>/screenspec.yaml)"),
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show the interpreter version and exit"
    ),
):
    """Inspect, check, simulate and serve specification-driven forms."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["json"] = json_output
    ctx.obj["config"] = config
