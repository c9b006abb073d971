"""
CLI: ``prompt-spine preview``: render a template for one topic.
"""

from __future__ import annotations

from pathlib import Path

import typer

from promptspine.cli.utils import (
    err_console,
    fail_with,
    print_header,
    print_json,
    print_text,
    render_preview,
    resolve_settings,
)
from promptspine.core.errors import PromptSpineError
from promptspine.core.git import capture_git_state
from promptspine.prompts import compute_template_version, create_snapshot, store_snapshot


def preview(
    topic: str = typer.Option(..., "--topic", "-t", help="Topic ID from the topics file"),
    template: str = typer.Option(..., "--template", help="Template filename in the prompts directory"),
    no_constraints: bool = typer.Option(False, "--no-constraints", help="Skip constraint injection"),
    store: bool = typer.Option(False, "--store", help="Store the render as a content-addressed snapshot"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
    topics: Path | None = typer.Option(None, "--topics", help="Topics JSON file"),
    standards: Path | None = typer.Option(None, "--standards", help="Content standards JSON file"),
    seo: Path | None = typer.Option(None, "--seo", help="SEO guidelines JSON file"),
    prompts: Path | None = typer.Option(None, "--prompts", help="Templates directory"),
    snapshot_dir: Path | None = typer.Option(None, "--snapshot-dir", help="Snapshot store root"),
) -> None:
    """Render a prompt template for a topic and print it."""
    settings = resolve_settings(
        topics=topics, standards=standards, seo=seo, prompts=prompts, snapshot_dir=snapshot_dir
    )

    try:
        result = render_preview(
            topic, template, settings=settings, include_constraints=not no_constraints
        )

        if store:
            git = capture_git_state()
            snapshot = create_snapshot(
                rendered_text=result.rendered,
                template_name=template,
                template_version=compute_template_version(result.template.source),
                topic_id=result.topic.id,
                git_commit=git.commit if git else None,
                git_branch=git.branch if git else None,
            )
            path = store_snapshot(snapshot, settings.snapshot_dir)
            if as_json:
                print_json(
                    {
                        "mode": "store",
                        "hash": snapshot.hash,
                        "path": str(path),
                        "metadata": snapshot.metadata.to_dict(),
                    }
                )
                return
            err_console.print(f"[green]Versioned snapshot stored: {snapshot.hash}[/green]")
            err_console.print(f"  Path: {path}", style="dim", markup=False, highlight=False)
    except PromptSpineError as e:
        fail_with(e)

    if as_json:
        print_json({"mode": "preview", **result.to_dict()})
        return

    print_header("Prompt Preview", result.header_rows())
    print_text(result.rendered)
