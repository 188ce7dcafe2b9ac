"""Simulate command: replay field edits and clicks against a bundle.

Script format (YAML):

    steps:
      - input: {field: email_input, value: "a@b.com"}
      - click: submit

Components are addressed by id on whichever screen is active when the step
runs.
"""

from pathlib import Path
from typing import Any, Dict, List

import typer
import yaml

from screenspec.cli._app import app
from screenspec.cli._common import ensure_initialized, open_bundle, setup_logging
from screenspec.cli._console import console, output_result, print_err, print_ok
from screenspec.runtime.session import InterpreterSession


class ScriptError(ValueError):
    """Raised when a simulation script is malformed."""


def load_script(script_path: Path) -> List[Dict[str, Any]]:
    """Read and shape-check a simulation script.

    Raises:
        ScriptError: If the file is missing, not YAML, or a step is malformed.
    """
    try:
        with open(script_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ScriptError(f"Script file not found: {script_path}")
    except yaml.YAMLError as e:
        raise ScriptError(f"Invalid YAML in script: {e}")

    steps = data.get("steps") if isinstance(data, dict) else data
    if not isinstance(steps, list):
        raise ScriptError("Script must be a list of steps or contain a 'steps' list")

    for index, step in enumerate(steps):
        if not isinstance(step, dict) or len(step) != 1:
            raise ScriptError(f"Step {index}: expected exactly one of 'input' or 'click'")
        if "click" in step:
            if not isinstance(step["click"], str):
                raise ScriptError(f"Step {index}: 'click' must be a component id")
        elif "input" in step:
            payload = step["input"]
            if not isinstance(payload, dict) or "field" not in payload:
                raise ScriptError(f"Step {index}: 'input' needs 'field' and 'value'")
        else:
            raise ScriptError(f"Step {index}: unknown action '{next(iter(step))}'")

    return steps


def run_script(session: InterpreterSession, steps: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Apply each step to the session; returns one state row per step."""
    rows = []
    for index, step in enumerate(steps):
        screen_id = session.active_screen_id
        if "click" in step:
            action = f"click {step['click']}"
            session.button_click(screen_id, step["click"])
        else:
            payload = step["input"]
            value = "" if payload.get("value") is None else str(payload["value"])
            action = f"input {payload['field']}={value!r}"
            session.input_change(screen_id, payload["field"], value)

        rows.append({
            "step": index,
            "action": action,
            "screen": session.active_screen_id,
            "errors": dict(session.errors),
        })
    return rows


@app.command("simulate", help="Replay a YAML script of edits and clicks.")
def simulate_cmd(
    ctx: typer.Context,
    bundle_dir: Path = typer.Argument(..., help="Bundle directory"),
    script: Path = typer.Argument(..., help="YAML script of input/click steps"),
    trace: bool = typer.Option(False, "--trace", help="Show state after every step"),
):
    """Run the script through a fresh session and print the resulting state."""
    settings = ensure_initialized(ctx.obj["config"])
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    bundle = open_bundle(bundle_dir, settings)
    try:
        steps = load_script(script)
    except ScriptError as e:
        print_err(str(e))
        raise SystemExit(1)

    session = InterpreterSession(bundle.document, assets=bundle.assets)
    rows = run_script(session, steps)

    final = {
        "screen": session.active_screen_id,
        "values": dict(session.values),
        "errors": dict(session.errors),
    }

    if ctx.obj["json"]:
        output_result({"steps": rows, "final": final} if trace else final, ctx=ctx)
        return

    if trace:
        for row in rows:
            errors = ", ".join(f"{k}: {v}" for k, v in row["errors"].items()) or "-"
            console.print(f"  [{row['step']}] {row['action']:<40} screen={row['screen']} errors={errors}")

    print_ok(f"Replayed {len(rows)} step(s)")
    output_result(final, ctx=ctx, title="Final state")
