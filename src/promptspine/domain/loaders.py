"""
File loaders for topics, content standards, SEO guidelines and saved
research specifications.

Each loader reads a JSON file, validates it with the matching pydantic model
and raises ``DomainLoadError`` with the full list of validation issues on
failure. Duplicate topic ids are rejected. Saved specifications must share
the current major ``specificationVersion``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from promptspine.core.errors import DomainLoadError, ErrorContext
from promptspine.core.logging import get_logger
from promptspine.domain.specification import (
    SPECIFICATION_VERSION,
    ResearchSpecification,
    is_version_compatible,
)
from promptspine.domain.standards import ContentStandards, SeoGuidelines
from promptspine.domain.topic import TopicCollection

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _format_issues(exc: ValidationError) -> list[str]:
    issues = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "(root)"
        issues.append(f"{loc}: {err['msg']}")
    return issues


def _load_json(path: Path, what: str) -> object:
    if not path.exists():
        raise DomainLoadError(
            f"{what} file not found: {path}",
            context=ErrorContext(path=str(path)),
        )
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DomainLoadError(
            f"Failed to read {what} file {path}: {e}",
            context=ErrorContext(path=str(path)),
            cause=e,
        ) from e


def _validate(model: type[ModelT], data: object, path: Path, what: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        issues = _format_issues(e)
        raise DomainLoadError(
            f"{what} validation failed: {len(issues)} error(s)\n  - " + "\n  - ".join(issues),
            context=ErrorContext(path=str(path), metadata={"issues": issues}),
            cause=e,
        ) from e


def load_topics(path: Path | str) -> TopicCollection:
    """Load a ``{"version": ..., "topics": [...]}`` file."""
    path = Path(path)
    collection = _validate(TopicCollection, _load_json(path, "Topics"), path, "Topics")

    seen: dict[str, int] = {}
    duplicates = []
    for index, topic in enumerate(collection.topics):
        if topic.id in seen:
            duplicates.append(
                f'Duplicate topic ID "{topic.id}" (first seen at index {seen[topic.id]}, '
                f"duplicate at index {index})"
            )
        else:
            seen[topic.id] = index
    if duplicates:
        raise DomainLoadError(
            "Topics validation failed:\n  - " + "\n  - ".join(duplicates),
            context=ErrorContext(path=str(path), metadata={"issues": duplicates}),
        )

    logger.debug("topics_loaded", path=str(path), count=len(collection.topics))
    return collection


def load_content_standards(path: Path | str) -> ContentStandards:
    path = Path(path)
    standards = _validate(
        ContentStandards, _load_json(path, "Content standards"), path, "Content standards"
    )
    logger.debug("content_standards_loaded", path=str(path), name=standards.name)
    return standards


def load_seo_guidelines(path: Path | str) -> SeoGuidelines:
    path = Path(path)
    guidelines = _validate(SeoGuidelines, _load_json(path, "SEO guidelines"), path, "SEO guidelines")
    logger.debug("seo_guidelines_loaded", path=str(path), name=guidelines.name)
    return guidelines


# ── Research specifications ──────────────────────────────────────────


def get_specification_filename(run_id: str) -> str:
    return f"specification-{run_id}.json"


def save_specification(
    spec: ResearchSpecification,
    directory: Path | str,
    filename: str | None = None,
) -> Path:
    """Write ``spec`` as camelCase JSON. Returns the file path.

    The default filename is ``specification-<run id>.json`` so the file
    sits next to the run's logs and snapshots under the same id.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / (filename or get_specification_filename(spec.run_metadata.run_id))
    path.write_text(spec.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    logger.debug("specification_saved", path=str(path), run_id=spec.run_metadata.run_id)
    return path


def load_specification(path: Path | str) -> ResearchSpecification:
    """Load a saved specification.

    Raises:
        DomainLoadError: unreadable file, validation failure, or a
            ``specificationVersion`` with a different major version
    """
    path = Path(path)
    spec = _validate(
        ResearchSpecification, _load_json(path, "Specification"), path, "Specification"
    )
    if not is_version_compatible(spec.specification_version):
        raise DomainLoadError(
            f"Incompatible specification version: {spec.specification_version} "
            f"(current: {SPECIFICATION_VERSION})",
            context=ErrorContext(path=str(path)),
        )
    logger.debug("specification_loaded", path=str(path), run_id=spec.run_metadata.run_id)
    return spec


__all__ = [
    "load_topics",
    "load_content_standards",
    "load_seo_guidelines",
    "get_specification_filename",
    "save_specification",
    "load_specification",
]
