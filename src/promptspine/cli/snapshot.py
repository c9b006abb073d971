"""
CLI: ``prompt-spine snapshot``: inspect the content-addressed snapshot store.
"""

from __future__ import annotations

from pathlib import Path

import typer

from promptspine.cli.utils import console, fail_with, print_header, print_json, print_text, resolve_settings
from promptspine.core.errors import SnapshotError
from promptspine.prompts import list_snapshots, load_snapshot, verify_snapshot

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_snapshot(
    hash: str = typer.Argument(..., help="Snapshot hash (12 hex characters)"),
    topic: str = typer.Option(..., "--topic", "-t", help="Topic ID"),
    template: str = typer.Option(..., "--template", help="Template filename"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
    snapshot_dir: Path | None = typer.Option(None, "--snapshot-dir", help="Snapshot store root"),
) -> None:
    """Load a snapshot, verify its integrity, and print it.

    Exits 1 when the snapshot is missing or its text no longer matches its hash.
    """
    settings = resolve_settings(snapshot_dir=snapshot_dir)
    try:
        snapshot = load_snapshot(hash, template, topic, settings.snapshot_dir)
    except SnapshotError as e:
        fail_with(e)

    verification = verify_snapshot(snapshot)

    if as_json:
        print_json(
            {
                "mode": "snapshot",
                "hash": snapshot.hash,
                "verified": verification.valid,
                "computedHash": verification.computed_hash,
                "metadata": snapshot.metadata.to_dict(),
                "rendered": snapshot.rendered_text,
            }
        )
    else:
        meta = snapshot.metadata
        integrity = "verified" if verification.valid else f"FAILED (computed {verification.computed_hash})"
        print_header(
            "Snapshot Viewer",
            [
                ("Hash", snapshot.hash),
                ("Integrity", integrity),
                ("Topic", meta.topic_id),
                ("Template", meta.template_name),
                ("Template version", meta.template_version),
                ("Git commit", meta.git_commit),
                ("Git branch", meta.git_branch),
                ("Created", meta.created_at),
            ],
        )
        print_text(snapshot.rendered_text)

    if not verification.valid:
        raise typer.Exit(code=1)


@app.command("list")
def list_snapshot_hashes(
    topic: str = typer.Option(..., "--topic", "-t", help="Topic ID"),
    template: str = typer.Option(..., "--template", help="Template filename"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
    snapshot_dir: Path | None = typer.Option(None, "--snapshot-dir", help="Snapshot store root"),
) -> None:
    """List stored snapshot hashes for a topic/template pair."""
    settings = resolve_settings(snapshot_dir=snapshot_dir)
    hashes = list_snapshots(template, topic, settings.snapshot_dir)

    if as_json:
        print_json(
            {
                "mode": "list-snapshots",
                "topic": topic,
                "template": template,
                "hashes": hashes,
                "count": len(hashes),
            }
        )
        return

    if not hashes:
        console.print("[dim]No snapshots found.[/dim]")
        return

    console.print(f"[bold]Snapshots for {topic} / {template}:[/bold]", highlight=False)
    for h in hashes:
        console.print(f"  {h}", highlight=False)
    console.print(f"\n[dim]  {len(hashes)} snapshot(s)[/dim]")
