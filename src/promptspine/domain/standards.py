"""
Content standards and SEO guidelines.

Two editorial documents that shape generated content:

- ``ContentStandards``: tone, citation rules, forbidden content, required
  disclaimers and brand alignment.
- ``SeoGuidelines``: keyword density, heading structure, length targets,
  meta content and readability ranges.

Both load from camelCase JSON. Nested sections with sensible defaults may
be omitted entirely.

Tags:
    standards, seo, content, pydantic, domain
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator

from promptspine.domain.base import DomainModel, Range
from promptspine.domain.enums import DietaryAlignment

_SEMVER = r"^\d+\.\d+\.\d+$"


# =============================================================================
# Content standards
# =============================================================================


class ReadingLevel(DomainModel):
    min: int | float = Field(..., ge=1, le=18)
    max: int | float = Field(..., ge=1, le=18)


class ToneRules(DomainModel):
    primary: tuple[str, ...] = Field(..., min_length=1)
    secondary: tuple[str, ...] = ()
    avoid: tuple[str, ...] = ()
    reading_level: ReadingLevel | None = None
    perspective: Literal["first_person", "second_person", "third_person", "mixed"] = "second_person"


class CitationRequirements(DomainModel):
    require_inline_citations: bool = True
    format: Literal["numeric", "author_year", "footnote", "hyperlink"] = "numeric"
    require_references_section: bool = True
    min_references: int = Field(default=3, ge=0)
    citation_required_for: tuple[str, ...] = (
        "statistics",
        "medical_claims",
        "treatment_efficacy",
        "study_results",
    )


class ForbiddenPattern(DomainModel):
    pattern: str
    reason: str
    severity: Literal["error", "warning"] = "error"


class ForbiddenClaim(DomainModel):
    category: str
    description: str
    examples: tuple[str, ...] = ()


class AvoidWord(DomainModel):
    word: str
    reason: str | None = None
    alternatives: tuple[str, ...] = ()


class ForbiddenContent(DomainModel):
    exact_phrases: tuple[str, ...] = ()
    patterns: tuple[ForbiddenPattern, ...] = ()
    forbidden_claims: tuple[ForbiddenClaim, ...] = ()
    avoid_words: tuple[AvoidWord, ...] = ()


class Disclaimer(DomainModel):
    id: str | None = None
    text: str
    placement: Literal["start", "end", "both"] = "end"
    applies_to: tuple[str, ...] = ("*",)


class RequiredSection(DomainModel):
    id: str
    title: str
    required: bool = False
    applies_to: tuple[str, ...] = ("*",)


class RequiredContent(DomainModel):
    disclaimers: tuple[Disclaimer, ...] = ()
    sections: tuple[RequiredSection, ...] = ()
    elements: tuple[str, ...] = ()


class BrandAlignment(DomainModel):
    values: tuple[str, ...] = ()
    dietary_alignment: tuple[DietaryAlignment, ...] = ()
    emphasize: tuple[str, ...] = ()
    deemphasize: tuple[str, ...] = ()


class ContentStandards(DomainModel):
    """Editorial standards applied to every piece of generated content."""

    version: str = Field(..., pattern=_SEMVER)
    name: str = Field(..., min_length=1)
    description: str | None = None
    tone: ToneRules
    citations: CitationRequirements = Field(default_factory=CitationRequirements)
    forbidden: ForbiddenContent = Field(default_factory=ForbiddenContent)
    required: RequiredContent = Field(default_factory=RequiredContent)
    brand: BrandAlignment = Field(default_factory=BrandAlignment)

    @model_validator(mode="after")
    def check_reading_level(self) -> ContentStandards:
        level = self.tone.reading_level
        if level is not None and level.min > level.max:
            raise ValueError("tone.readingLevel.min must not exceed tone.readingLevel.max")
        return self


# =============================================================================
# SEO guidelines
# =============================================================================


class KeywordDensity(DomainModel):
    primary_keyword: Range
    secondary_keywords: Range | None = None
    max_consecutive_repetitions: int = Field(default=2, ge=1)
    min_keyword_spacing: int = Field(default=50, ge=0)


class HeadingStructure(DomainModel):
    require_single_h1: bool = True
    h1_contains_keyword: bool = True
    min_h2_count: int = Field(default=2, ge=0)
    max_depth: int = Field(default=4, ge=1, le=6)
    require_proper_hierarchy: bool = True
    keyword_in_h2_percentage: int | float = Field(default=50, ge=0, le=100)
    max_heading_words: int = Field(default=10, ge=1)


class ContentLength(DomainModel):
    word_count: Range
    paragraph_words: Range = Range(min=20, max=150)
    sentence_words: Range = Range(min=5, max=25)
    paragraphs_before_heading: int = Field(default=4, ge=1)


class MetaContent(DomainModel):
    title_length: Range = Range(min=30, max=60)
    title_contains_keyword: bool = True
    keyword_in_first_half: bool = True
    description_length: Range = Range(min=120, max=160)
    description_contains_keyword: bool = True
    description_requires_cta: bool = Field(default=False, alias="descriptionRequiresCTA")


class LinkMedia(DomainModel):
    internal_links_per_thousand_words: Range = Range(min=2, max=5)
    external_links_per_thousand_words: Range = Range(min=1, max=3)
    require_image_alt_text: bool = True
    alt_text_contains_keyword: bool = False
    images_per_five_hundred_words: int | float = Field(default=1, ge=0)


class Readability(DomainModel):
    flesch_reading_ease: Range = Range(min=60, max=80)
    max_passive_voice_percent: int | float = Field(default=15, ge=0, le=100)
    max_consecutive_same_start: int = Field(default=2, ge=1)
    require_varied_sentence_length: bool = True


class SeoGuidelines(DomainModel):
    """Search-engine guidelines for generated articles."""

    version: str = Field(..., pattern=_SEMVER)
    name: str = Field(..., min_length=1)
    description: str | None = None
    applies_to: tuple[str, ...] = ("*",)
    keyword_density: KeywordDensity
    heading_structure: HeadingStructure = Field(default_factory=HeadingStructure)
    content_length: ContentLength
    meta_content: MetaContent = Field(default_factory=MetaContent)
    link_media: LinkMedia = Field(default_factory=LinkMedia)
    readability: Readability = Field(default_factory=Readability)


__all__ = [
    "ReadingLevel",
    "ToneRules",
    "CitationRequirements",
    "ForbiddenPattern",
    "ForbiddenClaim",
    "AvoidWord",
    "ForbiddenContent",
    "Disclaimer",
    "RequiredSection",
    "RequiredContent",
    "BrandAlignment",
    "ContentStandards",
    "KeywordDensity",
    "HeadingStructure",
    "ContentLength",
    "MetaContent",
    "LinkMedia",
    "Readability",
    "SeoGuidelines",
]
