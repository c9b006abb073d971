"""
CLI utility helpers: consoles, error reporting, and the shared render flow.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from promptspine.core.errors import DomainLoadError, ErrorContext, PromptSpineError
from promptspine.core.logging import get_logger
from promptspine.core.settings import PromptSpineSettings, get_settings
from promptspine.core.timestamps import generate_run_id
from promptspine.domain import (
    ContentStandards,
    SeoGuidelines,
    Topic,
    create_specification,
    load_content_standards,
    load_seo_guidelines,
    load_topics,
)
from promptspine.prompts import (
    ParsedTemplate,
    PromptTemplateLoader,
    build_prompt_constraints,
    build_prompt_context,
    compute_prompt_hash,
    render_prompt,
)

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)


# ── Output helpers ───────────────────────────────────────────────────────


def fail(message: str, code: int = 1) -> NoReturn:
    """Print an error to stderr and exit."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)
    raise typer.Exit(code=code)


def fail_with(error: PromptSpineError) -> NoReturn:
    logger.debug("cli_error", **error.to_dict())
    fail(error.message)


def print_json(payload: dict[str, Any]) -> None:
    console.print_json(json.dumps(payload, default=str))


def print_text(text: str) -> None:
    """Write text verbatim: no markup, emoji codes or highlighting."""
    console.out(text, highlight=False)


def print_header(title: str, rows: list[tuple[str, str]]) -> None:
    console.print()
    console.print("[bold]" + "═" * 60 + "[/bold]")
    console.print(f"[bold] {title}[/bold]")
    console.print("[bold]" + "═" * 60 + "[/bold]")
    console.print()
    width = max(len(label) for label, _ in rows) + 2
    for label, value in rows:
        console.print(f"  [cyan]{(label + ':').ljust(width)}[/cyan] {escape(value)}", highlight=False)
    console.print()
    console.print("─" * 60)
    console.print()


# ── Shared render flow ───────────────────────────────────────────────────


@dataclass(frozen=True)
class PreviewResult:
    """A rendered prompt plus what the header and JSON output need."""

    topic: Topic
    template_name: str
    template: ParsedTemplate
    rendered: str
    constraints_included: bool

    @property
    def hash(self) -> str:
        return compute_prompt_hash(self.rendered)

    def metadata(self) -> dict[str, Any]:
        return {
            "topicEntity": self.topic.primary_entity,
            "topicCondition": self.topic.condition.value,
            "claimDirection": self.topic.claim.direction.value,
            "category": self.topic.category.value,
            "constraintsIncluded": self.constraints_included,
            "variableCount": len(self.template.variables),
            "lineCount": len(self.rendered.split("\n")),
            "charCount": len(self.rendered),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "topicId": self.topic.id,
            "templateName": self.template_name,
            "hash": self.hash,
            "rendered": self.rendered,
            "templateSource": self.template.source,
            "metadata": self.metadata(),
        }

    def header_rows(self) -> list[tuple[str, str]]:
        meta = self.metadata()
        return [
            ("Topic", self.topic.id),
            ("Entity", meta["topicEntity"]),
            ("Condition", meta["topicCondition"]),
            ("Direction", meta["claimDirection"]),
            ("Category", meta["category"]),
            ("Template", self.template_name),
            ("Lines", str(meta["lineCount"])),
            ("Characters", str(meta["charCount"])),
            ("Variables", str(meta["variableCount"])),
            ("Constraints", "yes" if self.constraints_included else "no"),
            ("Hash", self.hash),
        ]


def _optional(path: Path, loader):
    # Standards and SEO files are optional; a missing file means "not supplied".
    if not path.exists():
        logger.debug("optional_file_missing", path=str(path))
        return None
    return loader(path)


def render_preview(
    topic_id: str,
    template_name: str,
    *,
    settings: PromptSpineSettings | None = None,
    include_constraints: bool = True,
) -> PreviewResult:
    """Load every input and render one template for one topic.

    Raises:
        PromptSpineError: any load, parse or render failure
    """
    settings = settings or get_settings()

    collection = load_topics(settings.topics_path)
    topic = collection.get(topic_id)
    if topic is None:
        available = ", ".join(sorted(t.id for t in collection.topics))
        raise DomainLoadError(
            f'Topic "{topic_id}" not found.\nAvailable topics: {available}',
            context=ErrorContext(topic_id=topic_id, path=str(settings.topics_path)),
        )

    template = PromptTemplateLoader(settings.prompts_dir).load(template_name)

    standards: ContentStandards | None = _optional(settings.standards_path, load_content_standards)
    seo: SeoGuidelines | None = _optional(settings.seo_path, load_seo_guidelines)

    specification = create_specification(
        generate_run_id(),
        collection.topics,
        content_standards=standards,
        seo_guidelines=seo,
    )
    context = build_prompt_context(topic, specification, standards, seo)
    constraints = (
        build_prompt_constraints(topic, specification, standards) if include_constraints else None
    )
    rendered = render_prompt(template, context, strict=False, constraints=constraints)

    return PreviewResult(
        topic=topic,
        template_name=template_name,
        template=template,
        rendered=rendered,
        constraints_included=include_constraints,
    )


def resolve_settings(
    *,
    topics: Path | None = None,
    standards: Path | None = None,
    seo: Path | None = None,
    prompts: Path | None = None,
    snapshot_dir: Path | None = None,
) -> PromptSpineSettings:
    """Settings with any command-line path overrides applied."""
    overrides = {
        "topics_path": topics,
        "standards_path": standards,
        "seo_path": seo,
        "prompts_dir": prompts,
        "snapshot_dir": snapshot_dir,
    }
    return get_settings().model_copy(update={k: v for k, v in overrides.items() if v is not None})
