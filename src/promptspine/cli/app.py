"""
Root Typer application for the prompt-spine CLI.

Commands:
    preview     render a template for one topic (optionally store a snapshot)
    diff        compare a live render against a stored snapshot
    variables   list the template variable schema
    snapshot    show / list stored snapshots
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer
from typer import Typer

from promptspine import __version__
from promptspine.core.logging import configure_logging
from promptspine.core.settings import get_settings

app = Typer(
    name="prompt-spine",
    help="prompt-spine: deterministic prompt rendering, snapshots and diffs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("prompt-spine")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"prompt-spine {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Override PROMPTSPINE_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)."
    ),
) -> None:
    """prompt-spine CLI: preview, snapshot and diff research prompts."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_format=settings.log_format == "json",
        force=log_level is not None,
    )


# ── Sub-command registration ─────────────────────────────────────────────

from promptspine.cli.diff import diff  # noqa: E402
from promptspine.cli.preview import preview  # noqa: E402
from promptspine.cli.snapshot import app as snapshot_app  # noqa: E402
from promptspine.cli.variables import variables  # noqa: E402

app.command("preview")(preview)
app.command("diff")(diff)
app.command("variables")(variables)
app.add_typer(snapshot_app, name="snapshot", help="Inspect stored prompt snapshots.")
