"""Rich console singleton and output helpers."""

import json as json_mod

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Status/progress to stderr so it doesn't pollute piped JSON output
console = Console(stderr=True)

# Data output to stdout (pipeable to jq)
stdout_console = Console()


def print_ok(msg: str) -> None:
    """Print a success message to stderr."""
    console.print(f"[green]✓[/green] {msg}")


def print_err(msg: str) -> None:
    """Print an error message to stderr."""
    console.print(f"[red]✗[/red] {msg}")


def print_warn(msg: str) -> None:
    """Print a warning message to stderr."""
    console.print(f"[yellow]![/yellow] {msg}")


def output_result(data: dict, *, ctx: typer.Context, title: str = "") -> None:
    """Print result as JSON (stdout) or Rich panel (stderr)."""
    if ctx.obj.get("json"):
        stdout_console.print_json(data=data)
    else:
        formatted = json_mod.dumps(data, indent=2, ensure_ascii=False, default=str)
        if title:
            console.print(Panel(formatted, title=title, border_style="blue"))
        else:
            console.print(formatted)


def output_table(rows: list[dict], *, ctx: typer.Context, title: str = "", columns: list[str] | None = None) -> None:
    """Print rows as JSON array or Rich table."""
    if ctx.obj.get("json"):
        stdout_console.print_json(data=rows)
        return

    if not rows:
        console.print("[dim]No data[/dim]")
        return

    cols = columns or list(rows[0].keys())
    table = Table(title=title, show_lines=False)
    for col in cols:
        table.add_column(col)
    for row in rows:
        table.add_row(*[str(row.get(c, "")) for c in cols])
    console.print(table)


def print_findings(report, *, source: str = "") -> None:
    """Print a lint report grouped by finding type, one line per finding."""
    prefix = f"{source}: " if source else ""
    if not report.findings:
        print_ok(f"{escape(prefix)}document is valid, no findings")
        return

    print_warn(f"{escape(prefix)}{len(report.findings)} finding(s)")
    by_type: dict[str, list] = {}
    for finding in report.findings:
        by_type.setdefault(finding.type.value, []).append(finding)

    for type_name in sorted(by_type):
        group = by_type[type_name]
        console.print(f"\n  [bold yellow]{type_name}[/bold yellow] ({len(group)})")
        for finding in group:
            console.print(
                f"    [cyan]{escape(finding.location)}[/cyan] {escape(finding.message)}", highlight=False, soft_wrap=True
            )
