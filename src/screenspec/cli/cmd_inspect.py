"""Inspect and check commands: summarize and lint a bundle."""

from pathlib import Path

import typer

from screenspec.cli._app import app
from screenspec.cli._common import ensure_initialized, open_bundle, setup_logging
from screenspec.cli._console import console, output_result, output_table, print_findings
from screenspec.schemas.document import RuleScope


@app.command("inspect", help="Summarize the screens, rules and transitions of a bundle.")
def inspect_cmd(
    ctx: typer.Context,
    bundle_dir: Path = typer.Argument(None, help="Bundle directory (default: settings.bundle_dir)"),
):
    """Print one table per section of the document."""
    settings = ensure_initialized(ctx.obj["config"])
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    document = open_bundle(bundle_dir, settings).document

    screens = [
        {
            "id": screen.id,
            "title": screen.title or "",
            "components": len(screen.components),
            "initial": screen.id == document.initial_screen_id,
        }
        for screen in document.screens
    ]
    rules = [
        {
            "id": rule.id,
            "scope": "global" if rule.scope == RuleScope.GLOBAL else f"screen:{rule.screen_id}",
            "on_event": rule.on_event,
            "guards": len(rule.when),
            "steps": ",".join(step.type for step in rule.steps),
        }
        for rule in document.rules
    ]
    transitions = [
        {"id": t.id, "event": t.event, "from": t.from_screen, "to": t.to_screen}
        for t in document.transitions
    ]

    if ctx.obj["json"]:
        output_result({"screens": screens, "rules": rules, "transitions": transitions}, ctx=ctx)
        return

    app_name = document.meta.app_name or "(unnamed)"
    console.print(f"\n[bold]{app_name}[/bold] dsl={document.meta.dsl_version or '?'}\n")
    output_table(screens, ctx=ctx, title="Screens")
    output_table(rules, ctx=ctx, title="Rules")
    output_table(transitions, ctx=ctx, title="Transitions")


@app.command("check", help="Validate a bundle and report parts that will never run.")
def check_cmd(
    ctx: typer.Context,
    bundle_dir: Path = typer.Argument(None, help="Bundle directory (default: settings.bundle_dir)"),
    strict: bool = typer.Option(False, "--strict", help="Exit with status 1 when there are findings"),
):
    """Load the bundle (schema + references) and lint it."""
    settings = ensure_initialized(ctx.obj["config"])
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from screenspec.runtime.linter import lint_document

    bundle = open_bundle(bundle_dir, settings)
    report = lint_document(bundle.document)

    if ctx.obj["json"]:
        output_result(report.to_dict(), ctx=ctx)
    else:
        print_findings(report, source=str(bundle.root))

    if strict and report.findings:
        raise SystemExit(1)
