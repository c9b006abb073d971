"""Domain models: topics, research specifications, content standards, SEO guidelines."""

from promptspine.domain.enums import (
    ANIMAL_CATEGORIES,
    HARM_CATEGORIES,
    HELP_CATEGORIES,
    ClaimConfidence,
    ClaimDirection,
    ContentCategory,
    DietaryAlignment,
    EntityType,
    EvidenceType,
    SkinCondition,
    SourceType,
    TopicPriority,
    TopicStatus,
)
from promptspine.domain.loaders import (
    get_specification_filename,
    load_content_standards,
    load_seo_guidelines,
    load_specification,
    load_topics,
    save_specification,
)
from promptspine.domain.specification import (
    SPECIFICATION_VERSION,
    GitState,
    QualityRequirements,
    ResearchConfig,
    ResearchSpecification,
    RunMetadata,
    SourcePolicy,
    SpecificationStats,
    TopicIndexes,
    create_specification,
    is_version_compatible,
    summarize_specification,
    generate_run_id,
)
from promptspine.domain.standards import ContentStandards, SeoGuidelines
from promptspine.domain.topic import Claim, Topic, TopicCollection

__all__ = [
    "ANIMAL_CATEGORIES",
    "HARM_CATEGORIES",
    "HELP_CATEGORIES",
    "ClaimConfidence",
    "ClaimDirection",
    "ContentCategory",
    "DietaryAlignment",
    "EntityType",
    "EvidenceType",
    "SkinCondition",
    "SourceType",
    "TopicPriority",
    "TopicStatus",
    "Claim",
    "Topic",
    "TopicCollection",
    "SPECIFICATION_VERSION",
    "GitState",
    "QualityRequirements",
    "ResearchConfig",
    "ResearchSpecification",
    "RunMetadata",
    "SourcePolicy",
    "SpecificationStats",
    "TopicIndexes",
    "create_specification",
    "is_version_compatible",
    "summarize_specification",
    "generate_run_id",
    "ContentStandards",
    "SeoGuidelines",
    "load_topics",
    "load_content_standards",
    "load_seo_guidelines",
    "get_specification_filename",
    "save_specification",
    "load_specification",
]
