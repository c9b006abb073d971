"""
Guardrail constraints injected into rendered prompts.

Rules are *derived* from the domain objects, never authored in templates,
so a template edit cannot silently drop a guardrail.

Architecture::

    build_prompt_constraints(topic, specification?, content_standards?)
        │
        ├── universal   (run-wide, only when the source object is present)
        │     evidence ........ citation / source minimums, age ceiling,
        │                       evidence types, high-quality source
        │     source_policy ... preprints, peer review, excluded publishers/domains
        │     forbidden_content exact phrases, forbidden claim categories
        │     brand ........... vegan, cruelty-free, de-emphasis
        │
        └── directional (always, from the topic alone)
              claim direction, category, entity type, confidence

    format_constraints(c) → "## Constraints & Exclusions" markdown block

Rule order is fixed, so identical inputs give byte-identical output.
Derivation never raises; missing inputs just yield fewer rules.

Tags:
    prompts, constraints, guardrails, determinism
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from promptspine.domain.enums import (
    ANIMAL_CATEGORIES,
    HELP_CATEGORIES,
    ClaimConfidence,
    ClaimDirection,
    ContentCategory,
    DietaryAlignment,
    EntityType,
)
from promptspine.domain.specification import ResearchSpecification
from promptspine.domain.standards import ContentStandards
from promptspine.domain.topic import Topic

ConstraintCategory = Literal["evidence", "exclusion", "source_policy", "brand", "forbidden_content"]

CONSTRAINTS_HEADING = "## Constraints & Exclusions"
UNIVERSAL_SUBHEADING = "### Universal Constraints"
DIRECTIONAL_SUBHEADING = "### Topic-Specific Constraints"
NO_CONSTRAINTS = "No additional constraints for this topic."


@dataclass(frozen=True, slots=True)
class ConstraintRule:
    category: ConstraintCategory
    text: str


@dataclass(frozen=True, slots=True)
class PromptConstraints:
    """Ordered universal and directional rules."""

    universal: tuple[ConstraintRule, ...] = ()
    directional: tuple[ConstraintRule, ...] = ()


# ── Universal rules ──────────────────────────────────────────────────


def _evidence_rules(specification: ResearchSpecification) -> list[ConstraintRule]:
    qr = specification.research_config.quality_requirements
    rules = [
        ConstraintRule(
            "evidence",
            f"Every factual claim MUST be supported by at least {qr.min_citations_per_claim} citation(s).",
        ),
        ConstraintRule(
            "evidence",
            f"Each topic MUST reference at least {qr.min_sources_per_topic} independent source(s).",
        ),
    ]
    if qr.max_source_age_years > 0:
        rules.append(
            ConstraintRule(
                "evidence",
                f"All sources MUST be published within the last {qr.max_source_age_years} years.",
            )
        )
    rules.append(
        ConstraintRule(
            "evidence",
            "Only the following evidence types are acceptable: "
            f"{', '.join(e.value for e in qr.allowed_evidence_types)}.",
        )
    )
    if qr.require_high_quality_source:
        rules.append(
            ConstraintRule(
                "evidence",
                "At least one source MUST be a systematic review, meta-analysis, RCT, or clinical guideline.",
            )
        )
    return rules


def _source_policy_rules(specification: ResearchSpecification) -> list[ConstraintRule]:
    sp = specification.research_config.source_policy
    rules = []
    if not sp.allow_preprints:
        rules.append(
            ConstraintRule("source_policy", "Do NOT cite preprints or non-peer-reviewed publications.")
        )
    if sp.require_peer_review:
        rules.append(
            ConstraintRule("source_policy", "All primary sources MUST be from peer-reviewed publications.")
        )
    if sp.excluded_publishers:
        rules.append(
            ConstraintRule("source_policy", f"Do NOT cite sources from: {', '.join(sp.excluded_publishers)}.")
        )
    if sp.excluded_domains:
        rules.append(
            ConstraintRule(
                "source_policy",
                f"Do NOT reference content from these domains: {', '.join(sp.excluded_domains)}.",
            )
        )
    return rules


def _forbidden_content_rules(standards: ContentStandards) -> list[ConstraintRule]:
    forbidden = standards.forbidden
    rules = []
    if forbidden.exact_phrases:
        quoted = ", ".join(f'"{p}"' for p in forbidden.exact_phrases)
        rules.append(ConstraintRule("forbidden_content", f"The following phrases MUST NOT appear: {quoted}."))
    for claim in forbidden.forbidden_claims:
        rules.append(
            ConstraintRule(
                "forbidden_content",
                f"Forbidden claim category [{claim.category}]: {claim.description}",
            )
        )
    return rules


def _brand_rules(standards: ContentStandards) -> list[ConstraintRule]:
    brand = standards.brand
    rules = []
    if DietaryAlignment.VEGAN in brand.dietary_alignment:
        rules.append(
            ConstraintRule(
                "brand",
                "Content MUST align with vegan values. Do NOT frame animal-derived ingredients "
                "as superior to plant-based alternatives.",
            )
        )
    if DietaryAlignment.CRUELTY_FREE in brand.dietary_alignment:
        rules.append(
            ConstraintRule(
                "brand",
                "Do NOT present animal testing as acceptable or necessary. "
                "Reference cruelty-free alternatives where relevant.",
            )
        )
    if brand.deemphasize:
        rules.append(ConstraintRule("brand", f"Minimize emphasis on: {', '.join(brand.deemphasize)}."))
    return rules


# ── Directional rules ────────────────────────────────────────────────


def _directional_rules(topic: Topic) -> list[ConstraintRule]:
    entity = topic.primary_entity
    condition = topic.condition.value
    rules = []

    if topic.claim.direction == ClaimDirection.HELPS:
        rules.append(
            ConstraintRule(
                "exclusion",
                f'Do NOT include evidence that "{entity}" harms "{condition}". '
                "This topic asserts a beneficial relationship only.",
            )
        )
        rules.append(
            ConstraintRule(
                "exclusion",
                "Do NOT include disclaimers that undermine the beneficial claim "
                "unless required by evidence strength caveats.",
            )
        )
    elif topic.claim.direction == ClaimDirection.HARMS:
        rules.append(
            ConstraintRule(
                "exclusion",
                f'Do NOT include evidence that "{entity}" helps "{condition}". '
                "This topic asserts a harmful relationship only.",
            )
        )
        rules.append(
            ConstraintRule("exclusion", "Do NOT include framing that normalizes or minimizes the harmful effect.")
        )

    if topic.category in ANIMAL_CATEGORIES:
        rules.append(
            ConstraintRule(
                "exclusion",
                "Include ethical and animal welfare considerations. "
                "Do NOT omit cruelty-free or vegan alternatives.",
            )
        )
        rules.append(
            ConstraintRule(
                "brand",
                f'When discussing "{entity}", always present plant-based or synthetic '
                "alternatives as the preferred option.",
            )
        )

    if topic.category == ContentCategory.SKINCARE_CHEMICALS_THAT_HARM_SKIN:
        rules.append(
            ConstraintRule(
                "exclusion",
                "Reference regulatory safety data (FDA, EU SCCS). Do NOT present industry-funded "
                "studies without noting the funding source.",
            )
        )

    if topic.category in HELP_CATEGORIES and topic.entity_type == EntityType.HERB:
        rules.append(
            ConstraintRule(
                "evidence",
                "When citing traditional or Ayurvedic use, clearly distinguish traditional evidence "
                "from clinical trial evidence.",
            )
        )

    if topic.category == ContentCategory.HABITS_THAT_HARM_SKIN:
        rules.append(
            ConstraintRule(
                "exclusion",
                "Focus on modifiable behaviors. Do NOT include genetic predispositions or "
                "non-modifiable risk factors as the primary framing.",
            )
        )

    if topic.claim.confidence == ClaimConfidence.PRELIMINARY:
        rules.append(
            ConstraintRule(
                "evidence",
                "The evidence base is preliminary. Clearly flag where evidence is limited to "
                "in-vitro, animal, or small-sample studies.",
            )
        )
    elif topic.claim.confidence == ClaimConfidence.EMERGING:
        rules.append(
            ConstraintRule(
                "evidence",
                'The evidence is emerging. Use hedging language (e.g., "suggests", "may", '
                '"preliminary data indicates") for claims lacking strong RCT support.',
            )
        )

    return rules


def build_prompt_constraints(
    topic: Topic,
    specification: ResearchSpecification | None = None,
    content_standards: ContentStandards | None = None,
) -> PromptConstraints:
    """Derive the guardrail rules for one topic. Pure and deterministic."""
    universal: list[ConstraintRule] = []
    if specification is not None:
        universal.extend(_evidence_rules(specification))
        universal.extend(_source_policy_rules(specification))
    if content_standards is not None:
        universal.extend(_forbidden_content_rules(content_standards))
        universal.extend(_brand_rules(content_standards))

    return PromptConstraints(
        universal=tuple(universal),
        directional=tuple(_directional_rules(topic)),
    )


def format_constraints(constraints: PromptConstraints) -> str:
    """Serialize constraints as the ``## Constraints & Exclusions`` block."""
    lines = [CONSTRAINTS_HEADING, ""]

    for heading, rules in (
        (UNIVERSAL_SUBHEADING, constraints.universal),
        (DIRECTIONAL_SUBHEADING, constraints.directional),
    ):
        if rules:
            lines.extend([heading, ""])
            lines.extend(f"- [{rule.category}] {rule.text}" for rule in rules)
            lines.append("")

    if not constraints.universal and not constraints.directional:
        lines.extend([NO_CONSTRAINTS, ""])

    return "\n".join(lines)


def count_constraints(constraints: PromptConstraints) -> int:
    return len(constraints.universal) + len(constraints.directional)


__all__ = [
    "ConstraintCategory",
    "ConstraintRule",
    "PromptConstraints",
    "build_prompt_constraints",
    "format_constraints",
    "count_constraints",
]
