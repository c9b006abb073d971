"""
CLI: ``prompt-spine diff``: compare a live render against a stored snapshot.

Exit codes:
    0  no differences
    1  error (missing topic, template, snapshot, or render failure)
    2  differences found
"""

from __future__ import annotations

from pathlib import Path

import typer

from promptspine.cli.utils import (
    console,
    fail_with,
    print_header,
    print_json,
    render_preview,
    resolve_settings,
)
from promptspine.core.errors import PromptSpineError
from promptspine.prompts import compute_diff, format_diff, load_snapshot, normalize_for_diff

_LINE_STYLES = {"+ ": "green", "- ": "red", "  ": "dim"}


def _print_diff(text: str) -> None:
    for line in text.split("\n"):
        style = _LINE_STYLES.get(line[:2])
        if line.startswith("───"):
            style = "bold"
        elif line == "No differences found.":
            style = "green"
        console.out(line, style=style, highlight=False)


def diff(
    topic: str = typer.Option(..., "--topic", "-t", help="Topic ID from the topics file"),
    template: str = typer.Option(..., "--template", help="Template filename in the prompts directory"),
    against: str = typer.Option(..., "--against", help="Stored snapshot hash to compare against"),
    no_constraints: bool = typer.Option(False, "--no-constraints", help="Skip constraint injection"),
    context_lines: int = typer.Option(3, "--context", "-C", min=0, help="Unchanged lines around each change"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
    topics: Path | None = typer.Option(None, "--topics", help="Topics JSON file"),
    standards: Path | None = typer.Option(None, "--standards", help="Content standards JSON file"),
    seo: Path | None = typer.Option(None, "--seo", help="SEO guidelines JSON file"),
    prompts: Path | None = typer.Option(None, "--prompts", help="Templates directory"),
    snapshot_dir: Path | None = typer.Option(None, "--snapshot-dir", help="Snapshot store root"),
) -> None:
    """Diff the current render against a stored snapshot (exit 0 same, 2 changed, 1 error)."""
    settings = resolve_settings(
        topics=topics, standards=standards, seo=seo, prompts=prompts, snapshot_dir=snapshot_dir
    )

    try:
        snapshot = load_snapshot(against, template, topic, settings.snapshot_dir)
        result = render_preview(
            topic, template, settings=settings, include_constraints=not no_constraints
        )
    except PromptSpineError as e:
        fail_with(e)

    # Run ids and timestamps change on every render.
    result_diff = compute_diff(
        normalize_for_diff(snapshot.rendered_text),
        normalize_for_diff(result.rendered),
        snapshot_id=against,
    )

    if as_json:
        print_json({"mode": "diff", "topic": topic, "template": template, **result_diff.to_dict()})
    else:
        print_header("Prompt Diff", result.header_rows())
        _print_diff(format_diff(result_diff, context_lines=context_lines))
        console.print()

    raise typer.Exit(code=result_diff.exit_code)
