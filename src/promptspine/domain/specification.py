"""
Research specification: the frozen description of one research run.

A specification bundles run metadata (run id, start time, optional git
state), the research configuration (quality requirements, source policy),
the topics under research with pre-computed indexes and stats, and the
optional content standards / SEO guidelines the downstream writers use.

Manifesto:
    The run id is *data*. It is generated once by the caller and passed in,
    never read from a module-level "current run". Two specifications built
    from the same inputs and run id are equal.

Architecture::

    create_specification(run_id, topics, ...)
        │
        ├── sort topics by id
        ├── RunMetadata (run id, startedAt, optional GitState)
        ├── TopicIndexes (byCondition / byCategory / byEntityType / byClaimDirection)
        ├── SpecificationStats
        └── ResearchSpecification (frozen)

Tags:
    specification, research-run, pydantic, domain
"""

from __future__ import annotations

import socket
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import datetime

from pydantic import AliasChoices, Field

from promptspine.core.git import capture_git_state
from promptspine.core.timestamps import generate_run_id, to_iso8601, utc_now
from promptspine.domain.base import DomainModel, StringMap
from promptspine.domain.enums import (
    ClaimDirection,
    ContentCategory,
    EvidenceType,
    SkinCondition,
    SourceType,
    TopicStatus,
)
from promptspine.domain.standards import ContentStandards, SeoGuidelines
from promptspine.domain.topic import Topic

SPECIFICATION_VERSION = "2.0.0"


# ── Research configuration ───────────────────────────────────────────


class QualityRequirements(DomainModel):
    """Minimum evidence quality a research run must meet."""

    min_citations_per_claim: int = Field(default=2, ge=1)
    min_sources_per_topic: int = Field(default=3, ge=1)
    max_source_age_years: int = Field(default=10, ge=0, description="0 disables the age ceiling")
    allowed_evidence_types: tuple[EvidenceType, ...] = Field(
        default=(
            EvidenceType.SYSTEMATIC_REVIEW,
            EvidenceType.META_ANALYSIS,
            EvidenceType.RANDOMIZED_CONTROLLED_TRIAL,
            EvidenceType.COHORT_STUDY,
            EvidenceType.CLINICAL_GUIDELINE,
        ),
        min_length=1,
    )
    require_high_quality_source: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "requireHighQualitySource",
            "requireAtLeastOneHighQuality",
            "require_high_quality_source",
        ),
        description="At least one systematic review, RCT, or clinical guideline is required",
    )


class SourcePolicy(DomainModel):
    """Which sources researchers may cite."""

    allowed_source_types: tuple[SourceType, ...] = (
        SourceType.PEER_REVIEWED_JOURNAL,
        SourceType.REVIEW_PAPER,
        SourceType.CLINICAL_GUIDELINE,
        SourceType.GOVERNMENT_HEALTH_AGENCY,
        SourceType.PROFESSIONAL_ASSOCIATION,
    )
    allow_preprints: bool = False
    require_peer_review: bool = True
    excluded_publishers: tuple[str, ...] = ()
    excluded_domains: tuple[str, ...] = ()
    preferred_databases: tuple[str, ...] = ("PubMed", "Cochrane Library", "MEDLINE")


class ResearchConfig(DomainModel):
    """Run-wide research configuration. Defaults mirror the shipped config."""

    supported_conditions: tuple[SkinCondition, ...] = tuple(SkinCondition)
    supported_categories: tuple[ContentCategory, ...] = tuple(ContentCategory)
    quality_requirements: QualityRequirements = Field(default_factory=QualityRequirements)
    source_policy: SourcePolicy = Field(default_factory=SourcePolicy)


# ── Run metadata ─────────────────────────────────────────────────────


class GitState(DomainModel):
    commit_sha: str
    commit_short: str | None = None
    branch: str
    is_dirty: bool = False
    commit_date: str | None = None


class RunMetadata(DomainModel):
    run_id: str = Field(..., min_length=1)
    started_at: str
    hostname: str | None = None
    initiated_by: str | None = None
    git: GitState | None = None
    context: StringMap | None = None


# ── Derived views ────────────────────────────────────────────────────


class TopicIndexes(DomainModel):
    """Topic ids grouped by key, each map sorted by key."""

    by_condition: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    by_category: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    by_entity_type: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    by_claim_direction: dict[str, tuple[str, ...]] = Field(default_factory=dict)


class SpecificationStats(DomainModel):
    total_topics: int = Field(default=0, ge=0)
    active_topics: int = Field(default=0, ge=0)
    unique_conditions: int = Field(default=0, ge=0)
    unique_categories: int = Field(default=0, ge=0)
    unique_entity_types: int = Field(default=0, ge=0)
    helps_claims: int = Field(default=0, ge=0)
    harms_claims: int = Field(default=0, ge=0)


class ResearchSpecification(DomainModel):
    """Immutable record of a research run."""

    specification_version: str = Field(default=SPECIFICATION_VERSION, pattern=r"^\d+\.\d+\.\d+$")
    run_metadata: RunMetadata
    research_config: ResearchConfig = Field(default_factory=ResearchConfig)
    topics: tuple[Topic, ...] = ()
    topic_indexes: TopicIndexes = Field(default_factory=TopicIndexes)
    stats: SpecificationStats = Field(default_factory=SpecificationStats)
    content_standards: ContentStandards | None = None
    seo_guidelines: SeoGuidelines | None = None


# ── Factory ──────────────────────────────────────────────────────────


def _index(topics: Iterable[Topic], key) -> dict[str, tuple[str, ...]]:
    groups: dict[str, list[str]] = defaultdict(list)
    for topic in topics:
        groups[key(topic).value].append(topic.id)
    return {k: tuple(groups[k]) for k in sorted(groups)}


def build_topic_indexes(topics: Iterable[Topic]) -> TopicIndexes:
    topics = list(topics)
    return TopicIndexes(
        by_condition=_index(topics, lambda t: t.condition),
        by_category=_index(topics, lambda t: t.category),
        by_entity_type=_index(topics, lambda t: t.entity_type),
        by_claim_direction=_index(topics, lambda t: t.claim.direction),
    )


def compute_stats(topics: Iterable[Topic]) -> SpecificationStats:
    topics = list(topics)
    return SpecificationStats(
        total_topics=len(topics),
        active_topics=sum(1 for t in topics if t.status == TopicStatus.ACTIVE),
        unique_conditions=len({t.condition for t in topics}),
        unique_categories=len({t.category for t in topics}),
        unique_entity_types=len({t.entity_type for t in topics}),
        helps_claims=sum(1 for t in topics if t.claim.direction == ClaimDirection.HELPS),
        harms_claims=sum(1 for t in topics if t.claim.direction == ClaimDirection.HARMS),
    )


def create_specification(
    run_id: str,
    topics: Iterable[Topic],
    research_config: ResearchConfig | None = None,
    *,
    content_standards: ContentStandards | None = None,
    seo_guidelines: SeoGuidelines | None = None,
    started_at: datetime | None = None,
    initiated_by: str | None = None,
    capture_git: bool = False,
    context: Mapping[str, str] | None = None,
) -> ResearchSpecification:
    """Build a research specification for one run.

    Topics are sorted by id so the result does not depend on input order.

    Args:
        run_id: Identifier for this run (see :func:`generate_run_id`)
        topics: Topics under research
        research_config: Configuration (defaults to :class:`ResearchConfig`)
        content_standards: Optional editorial standards
        seo_guidelines: Optional SEO guidelines
        started_at: Override start timestamp (defaults to now, UTC)
        initiated_by: Optional user who started the run
        capture_git: Record the working tree's commit and branch
        context: Extra string annotations for the run
    """
    sorted_topics = sorted(topics, key=lambda t: t.id)

    git = None
    if capture_git:
        info = capture_git_state()
        if info is not None:
            git = GitState(commit_sha=info.commit, commit_short=info.commit[:7], branch=info.branch)

    run_metadata = RunMetadata(
        run_id=run_id,
        started_at=to_iso8601(started_at or utc_now()),
        hostname=socket.gethostname(),
        initiated_by=initiated_by,
        git=git,
        context=context,
    )

    return ResearchSpecification(
        specification_version=SPECIFICATION_VERSION,
        run_metadata=run_metadata,
        research_config=research_config or ResearchConfig(),
        topics=tuple(sorted_topics),
        topic_indexes=build_topic_indexes(sorted_topics),
        stats=compute_stats(sorted_topics),
        content_standards=content_standards,
        seo_guidelines=seo_guidelines,
    )


# ── Versioning and summaries ─────────────────────────────────────────


def is_version_compatible(version: str) -> bool:
    """True when ``version`` shares the current major version."""
    return version.split(".", 1)[0] == SPECIFICATION_VERSION.split(".", 1)[0]


def summarize_specification(
    spec: ResearchSpecification,
    *,
    include_topics: bool = False,
    include_config: bool = False,
) -> str:
    """Human-readable summary for logs and terminals."""
    meta = spec.run_metadata
    lines = [
        "=== Research Specification ===",
        f"Version: {spec.specification_version}",
        "",
        "--- Run Metadata ---",
        f"Run ID: {meta.run_id}",
        f"Started: {meta.started_at}",
    ]
    if meta.hostname:
        lines.append(f"Hostname: {meta.hostname}")
    if meta.initiated_by:
        lines.append(f"Initiated by: {meta.initiated_by}")
    if meta.git:
        lines += [
            "",
            "--- Git State ---",
            f"Commit: {meta.git.commit_short or meta.git.commit_sha} ({meta.git.branch})",
            f"Dirty: {'yes' if meta.git.is_dirty else 'no'}",
        ]

    stats = spec.stats
    lines += [
        "",
        "--- Statistics ---",
        f"Total topics: {stats.total_topics}",
        f"Active topics: {stats.active_topics}",
        f"Unique conditions: {stats.unique_conditions}",
        f"Unique categories: {stats.unique_categories}",
    ]

    if include_topics:
        lines += ["", "--- Topics ---"]
        lines += [
            f"  - {t.id}: {t.condition.value}/{t.category.value} [{t.priority.value}]"
            for t in spec.topics
        ]

    if include_config:
        config = spec.research_config
        lines += [
            "",
            "--- Research Config ---",
            f"Min citations: {config.quality_requirements.min_citations_per_claim}",
            f"Require peer review: {config.source_policy.require_peer_review}",
        ]

    cs = spec.content_standards
    if cs:
        alignment = ", ".join(d.value for d in cs.brand.dietary_alignment) or "none"
        lines += [
            "",
            "--- Content Standards ---",
            f"Name: {cs.name}",
            f"Tone: {', '.join(cs.tone.primary)}",
            f"Brand alignment: {alignment}",
            f"Forbidden phrases: {len(cs.forbidden.exact_phrases)}",
            f"Required disclaimers: {len(cs.required.disclaimers)}",
        ]

    seo = spec.seo_guidelines
    if seo:
        words = seo.content_length.word_count
        density = seo.keyword_density.primary_keyword
        lines += [
            "",
            "--- SEO Guidelines ---",
            f"Name: {seo.name}",
            f"Word count: {words.min}-{words.max}",
            f"Keyword density: {density.min}-{density.max}%",
            f"Min H2 headings: {seo.heading_structure.min_h2_count}",
        ]

    return "\n".join(lines)


__all__ = [
    "SPECIFICATION_VERSION",
    "QualityRequirements",
    "SourcePolicy",
    "ResearchConfig",
    "GitState",
    "RunMetadata",
    "TopicIndexes",
    "SpecificationStats",
    "ResearchSpecification",
    "build_topic_indexes",
    "compute_stats",
    "create_specification",
    "is_version_compatible",
    "summarize_specification",
    "generate_run_id",
]
