"""
CLI: ``prompt-spine variables``: list every template variable.
"""

from __future__ import annotations

import typer
from rich.table import Table

from promptspine.cli.utils import console, print_json
from promptspine.prompts import get_enum_values, get_valid_variables


def variables(
    namespace: str | None = typer.Option(
        None, "--namespace", "-n", help="Only variables under this prefix (e.g. topic, seo)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List the variables templates may reference, with enumerated values."""
    names = get_valid_variables()
    if namespace:
        names = [n for n in names if n.split(".", 1)[0] == namespace]

    rows = [(name, sorted(get_enum_values(name) or ())) for name in names]

    if as_json:
        print_json(
            {
                "variables": [{"name": name, "values": values} for name, values in rows],
                "count": len(rows),
            }
        )
        return

    if not rows:
        console.print("[dim]No variables.[/dim]")
        return

    table = Table(title="Template variables", show_lines=False, pad_edge=False)
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Allowed values", overflow="fold")
    for name, values in rows:
        table.add_row(name, ", ".join(values) if values else "[dim]any[/dim]")
    console.print(table)
    console.print(f"\n[dim]{len(rows)} variable(s)[/dim]")
