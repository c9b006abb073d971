"""
Typed prompt context.

Every legal ``{{path.to.value}}`` placeholder maps to exactly one member of
:class:`PromptVariable`. The context is a flat, immutable namespace of
dotted paths backed by the domain objects::

    topic.entity          → topic.primary_entity
    topic.claim.direction → topic.claim.direction
    research.runId        → specification.run_metadata.run_id
    seo.wordCountMin      → seo_guidelines.content_length.word_count.min

Manifesto:
    - **One closed schema:** ``PromptVariable`` enumerates every variable
      exactly once. "Is this name legal?" is a set-membership check.
    - **Every key, always:** a built context holds all schema keys. Keys
      whose source object was not supplied hold the ``UNSET`` sentinel,
      which is distinct from an empty string.
    - **Never raises:** absence is always representable.

Adding a variable takes two edits: a member on ``PromptVariable`` and its
extraction in :func:`build_prompt_context`.

Examples:
    >>> ctx = build_prompt_context(topic)
    >>> ctx["topic.entity"]
    'turmeric'
    >>> is_unset(ctx["research.runId"])
    True

Tags:
    prompts, context, variables, schema
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum

from promptspine.domain.specification import ResearchSpecification
from promptspine.domain.standards import ContentStandards, SeoGuidelines
from promptspine.domain.topic import Topic

UNSET = "__UNSET__"


class PromptVariable(str, Enum):
    """Every variable a template may reference."""

    # ── Topic ────────────────────────────────────────────────────
    TOPIC_ID = "topic.id"
    TOPIC_ENTITY = "topic.entity"
    TOPIC_ENTITY_TYPE = "topic.entityType"
    TOPIC_NAME = "topic.name"
    TOPIC_DESCRIPTION = "topic.description"
    TOPIC_CONDITION = "topic.condition"
    TOPIC_CATEGORY = "topic.category"
    TOPIC_PRIORITY = "topic.priority"
    TOPIC_STATUS = "topic.status"

    # ── Claim ────────────────────────────────────────────────────
    CLAIM_DIRECTION = "topic.claim.direction"
    CLAIM_MECHANISM = "topic.claim.mechanism"
    CLAIM_CONFIDENCE = "topic.claim.confidence"

    # ── Research specification ───────────────────────────────────
    RESEARCH_RUN_ID = "research.runId"
    RESEARCH_VERSION = "research.version"
    RESEARCH_STARTED_AT = "research.startedAt"
    RESEARCH_TOTAL_TOPICS = "research.totalTopics"
    RESEARCH_ACTIVE_TOPICS = "research.activeTopics"
    RESEARCH_MIN_CITATIONS_PER_CLAIM = "research.minCitationsPerClaim"
    RESEARCH_MIN_SOURCES_PER_TOPIC = "research.minSourcesPerTopic"
    RESEARCH_MAX_SOURCE_AGE_YEARS = "research.maxSourceAgeYears"
    RESEARCH_ALLOWED_EVIDENCE_TYPES = "research.allowedEvidenceTypes"
    RESEARCH_PREFERRED_DATABASES = "research.preferredDatabases"

    # ── Content standards ────────────────────────────────────────
    STANDARDS_NAME = "contentStandards.name"
    STANDARDS_TONE = "contentStandards.tone"
    STANDARDS_PERSPECTIVE = "contentStandards.perspective"
    STANDARDS_READING_LEVEL_MIN = "contentStandards.readingLevelMin"
    STANDARDS_READING_LEVEL_MAX = "contentStandards.readingLevelMax"
    STANDARDS_CITATION_FORMAT = "contentStandards.citationFormat"
    STANDARDS_MIN_REFERENCES = "contentStandards.minReferences"
    STANDARDS_CITATION_REQUIRED_FOR = "contentStandards.citationRequiredFor"
    STANDARDS_FORBIDDEN_PHRASES = "contentStandards.forbiddenPhrases"
    STANDARDS_REQUIRED_DISCLAIMERS = "contentStandards.requiredDisclaimers"
    STANDARDS_BRAND_VALUES = "contentStandards.brandValues"
    STANDARDS_EMPHASIZE = "contentStandards.emphasize"
    STANDARDS_DEEMPHASIZE = "contentStandards.deemphasize"

    # ── SEO guidelines ───────────────────────────────────────────
    SEO_NAME = "seo.name"
    SEO_WORD_COUNT_MIN = "seo.wordCountMin"
    SEO_WORD_COUNT_MAX = "seo.wordCountMax"
    SEO_KEYWORD_DENSITY_MIN = "seo.keywordDensityMin"
    SEO_KEYWORD_DENSITY_MAX = "seo.keywordDensityMax"
    SEO_MIN_H2_COUNT = "seo.minH2Count"
    SEO_MAX_HEADING_WORDS = "seo.maxHeadingWords"
    SEO_META_TITLE_LENGTH_MIN = "seo.metaTitleLengthMin"
    SEO_META_TITLE_LENGTH_MAX = "seo.metaTitleLengthMax"
    SEO_META_DESCRIPTION_LENGTH_MIN = "seo.metaDescriptionLengthMin"
    SEO_META_DESCRIPTION_LENGTH_MAX = "seo.metaDescriptionLengthMax"
    SEO_FLESCH_READING_EASE_MIN = "seo.fleschReadingEaseMin"
    SEO_FLESCH_READING_EASE_MAX = "seo.fleschReadingEaseMax"
    SEO_MAX_PASSIVE_VOICE_PERCENT = "seo.maxPassiveVoicePercent"


VALID_VARIABLES: frozenset[str] = frozenset(v.value for v in PromptVariable)


def is_valid_variable(name: str) -> bool:
    return name in VALID_VARIABLES


def get_valid_variables() -> list[str]:
    """All legal variable names, sorted."""
    return sorted(VALID_VARIABLES)


def is_unset(value: str | None) -> bool:
    """True when ``value`` is the UNSET sentinel (not merely empty)."""
    return value == UNSET


class PromptContext(Mapping[str, str]):
    """Read-only mapping of variable name to rendered string value."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str]):
        self._values = dict(values)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PromptContext({len(self._values)} variables)"

    def unset_variables(self) -> list[str]:
        """Names whose source object was not supplied, sorted."""
        return sorted(k for k, v in self._values.items() if v == UNSET)


# ── Builder ──────────────────────────────────────────────────────────


def _num(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _join(items: Iterable[object], sep: str = ", ") -> str:
    return sep.join(getattr(item, "value", item) for item in items)


def build_prompt_context(
    topic: Topic,
    specification: ResearchSpecification | None = None,
    content_standards: ContentStandards | None = None,
    seo_guidelines: SeoGuidelines | None = None,
) -> PromptContext:
    """Build a fully-populated context from domain objects.

    Variables whose source is missing receive ``UNSET`` so the renderer can
    report them if a template actually needs them.
    """
    V = PromptVariable
    ctx: dict[str, str] = {
        V.TOPIC_ID: topic.id,
        V.TOPIC_ENTITY: topic.primary_entity,
        V.TOPIC_ENTITY_TYPE: topic.entity_type.value,
        V.TOPIC_NAME: topic.name,
        V.TOPIC_DESCRIPTION: topic.description or "",
        V.TOPIC_CONDITION: topic.condition.value,
        V.TOPIC_CATEGORY: topic.category.value,
        V.TOPIC_PRIORITY: topic.priority.value,
        V.TOPIC_STATUS: topic.status.value,
        V.CLAIM_DIRECTION: topic.claim.direction.value,
        V.CLAIM_MECHANISM: topic.claim.mechanism or "",
        V.CLAIM_CONFIDENCE: topic.claim.confidence.value,
    }

    if specification is not None:
        qr = specification.research_config.quality_requirements
        sp = specification.research_config.source_policy
        ctx.update(
            {
                V.RESEARCH_RUN_ID: specification.run_metadata.run_id,
                V.RESEARCH_VERSION: specification.specification_version,
                V.RESEARCH_STARTED_AT: specification.run_metadata.started_at,
                V.RESEARCH_TOTAL_TOPICS: _num(specification.stats.total_topics),
                V.RESEARCH_ACTIVE_TOPICS: _num(specification.stats.active_topics),
                V.RESEARCH_MIN_CITATIONS_PER_CLAIM: _num(qr.min_citations_per_claim),
                V.RESEARCH_MIN_SOURCES_PER_TOPIC: _num(qr.min_sources_per_topic),
                V.RESEARCH_MAX_SOURCE_AGE_YEARS: _num(qr.max_source_age_years),
                V.RESEARCH_ALLOWED_EVIDENCE_TYPES: _join(qr.allowed_evidence_types),
                V.RESEARCH_PREFERRED_DATABASES: _join(sp.preferred_databases),
            }
        )

    if content_standards is not None:
        cs = content_standards
        level = cs.tone.reading_level
        ctx.update(
            {
                V.STANDARDS_NAME: cs.name,
                V.STANDARDS_TONE: _join(cs.tone.primary),
                V.STANDARDS_PERSPECTIVE: cs.tone.perspective,
                V.STANDARDS_READING_LEVEL_MIN: _num(level.min) if level else UNSET,
                V.STANDARDS_READING_LEVEL_MAX: _num(level.max) if level else UNSET,
                V.STANDARDS_CITATION_FORMAT: cs.citations.format,
                V.STANDARDS_MIN_REFERENCES: _num(cs.citations.min_references),
                V.STANDARDS_CITATION_REQUIRED_FOR: _join(cs.citations.citation_required_for),
                V.STANDARDS_FORBIDDEN_PHRASES: _join(cs.forbidden.exact_phrases, "; "),
                V.STANDARDS_REQUIRED_DISCLAIMERS: _join(
                    (d.text for d in cs.required.disclaimers), "\n"
                ),
                V.STANDARDS_BRAND_VALUES: _join(cs.brand.values),
                V.STANDARDS_EMPHASIZE: _join(cs.brand.emphasize),
                V.STANDARDS_DEEMPHASIZE: _join(cs.brand.deemphasize),
            }
        )

    if seo_guidelines is not None:
        seo = seo_guidelines
        ctx.update(
            {
                V.SEO_NAME: seo.name,
                V.SEO_WORD_COUNT_MIN: _num(seo.content_length.word_count.min),
                V.SEO_WORD_COUNT_MAX: _num(seo.content_length.word_count.max),
                V.SEO_KEYWORD_DENSITY_MIN: _num(seo.keyword_density.primary_keyword.min),
                V.SEO_KEYWORD_DENSITY_MAX: _num(seo.keyword_density.primary_keyword.max),
                V.SEO_MIN_H2_COUNT: _num(seo.heading_structure.min_h2_count),
                V.SEO_MAX_HEADING_WORDS: _num(seo.heading_structure.max_heading_words),
                V.SEO_META_TITLE_LENGTH_MIN: _num(seo.meta_content.title_length.min),
                V.SEO_META_TITLE_LENGTH_MAX: _num(seo.meta_content.title_length.max),
                V.SEO_META_DESCRIPTION_LENGTH_MIN: _num(seo.meta_content.description_length.min),
                V.SEO_META_DESCRIPTION_LENGTH_MAX: _num(seo.meta_content.description_length.max),
                V.SEO_FLESCH_READING_EASE_MIN: _num(seo.readability.flesch_reading_ease.min),
                V.SEO_FLESCH_READING_EASE_MAX: _num(seo.readability.flesch_reading_ease.max),
                V.SEO_MAX_PASSIVE_VOICE_PERCENT: _num(seo.readability.max_passive_voice_percent),
            }
        )

    # Plain-string keys in schema order; absent sources fall back to UNSET.
    return PromptContext({v.value: ctx.get(v, UNSET) for v in PromptVariable})


__all__ = [
    "UNSET",
    "PromptVariable",
    "VALID_VARIABLES",
    "is_valid_variable",
    "get_valid_variables",
    "is_unset",
    "PromptContext",
    "build_prompt_context",
]
