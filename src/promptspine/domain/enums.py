"""
Closed value sets for the skin-health research domain.

Every enum here is a ``str`` Enum so members compare equal to the raw
strings found in topic JSON files and can be dropped into prompt text via
``.value`` without conversion.

Tags:
    enums, domain, topics, skin-conditions, categories
"""

from enum import Enum


class SkinCondition(str, Enum):
    """Skin conditions a topic can target."""

    REDNESS_HYPERPIGMENTATION = "redness_hyperpigmentation"
    DRYNESS_PREMATURE_AGING = "dryness_premature_aging"
    OILY_SKIN = "oily_skin"
    ACNE_ACNE_SCARS = "acne_acne_scars"


class ContentCategory(str, Enum):
    """Editorial categories; each one is either a *helps* or a *harms* bucket."""

    VEGAN_FOODS_THAT_HELP_SKIN = "vegan_foods_that_help_skin"
    AYURVEDIC_HERBS_IN_SKINCARE_THAT_HELP_SKIN = "ayurvedic_herbs_in_skincare_that_help_skin"
    ANIMAL_INGREDIENTS_IN_FOOD_THAT_HARM_SKIN = "animal_ingredients_in_food_that_harm_skin"
    ANIMAL_INGREDIENTS_IN_SKINCARE_THAT_HARM_SKIN = "animal_ingredients_in_skincare_that_harm_skin"
    OTHER_FOODS_THAT_HARM_SKIN = "other_foods_that_harm_skin"
    SKINCARE_CHEMICALS_THAT_HARM_SKIN = "skincare_chemicals_that_harm_skin"
    AYURVEDIC_PRACTICES_THAT_HELP_SKIN = "ayurvedic_practices_that_help_skin"
    OTHER_PRACTICES_THAT_HELP_SKIN = "other_practices_that_help_skin"
    HABITS_THAT_HARM_SKIN = "habits_that_harm_skin"
    AYURVEDIC_HERBS_TO_EAT_THAT_BENEFIT_SKIN = "ayurvedic_herbs_to_eat_that_benefit_skin"


class EntityType(str, Enum):
    """Kind of thing a topic's primary entity is."""

    FOOD = "food"
    HERB = "herb"
    INGREDIENT = "ingredient"
    CHEMICAL = "chemical"
    PRACTICE = "practice"
    HABIT = "habit"


class ClaimDirection(str, Enum):
    HELPS = "helps"
    HARMS = "harms"


class ClaimConfidence(str, Enum):
    """How strong the evidence behind a claim is expected to be."""

    ESTABLISHED = "established"
    EMERGING = "emerging"
    PRELIMINARY = "preliminary"


class TopicPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TopicStatus(str, Enum):
    ACTIVE = "active"  # ready for research
    DRAFT = "draft"
    ARCHIVED = "archived"
    SUSPENDED = "suspended"


class EvidenceType(str, Enum):
    SYSTEMATIC_REVIEW = "systematic_review"
    META_ANALYSIS = "meta_analysis"
    RANDOMIZED_CONTROLLED_TRIAL = "randomized_controlled_trial"
    COHORT_STUDY = "cohort_study"
    CASE_CONTROL_STUDY = "case_control_study"
    CROSS_SECTIONAL_STUDY = "cross_sectional_study"
    CASE_SERIES = "case_series"
    CASE_REPORT = "case_report"
    EXPERT_OPINION = "expert_opinion"
    CLINICAL_GUIDELINE = "clinical_guideline"


class SourceType(str, Enum):
    PEER_REVIEWED_JOURNAL = "peer_reviewed_journal"
    REVIEW_PAPER = "review_paper"
    CLINICAL_GUIDELINE = "clinical_guideline"
    MEDICAL_TEXTBOOK = "medical_textbook"
    GOVERNMENT_HEALTH_AGENCY = "government_health_agency"
    PROFESSIONAL_ASSOCIATION = "professional_association"
    PREPRINT = "preprint"


class DietaryAlignment(str, Enum):
    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    CRUELTY_FREE = "cruelty_free"
    SUSTAINABLE = "sustainable"
    ORGANIC = "organic"


# ── Category groupings ───────────────────────────────────────────────

ANIMAL_CATEGORIES: frozenset[ContentCategory] = frozenset(
    {
        ContentCategory.ANIMAL_INGREDIENTS_IN_FOOD_THAT_HARM_SKIN,
        ContentCategory.ANIMAL_INGREDIENTS_IN_SKINCARE_THAT_HARM_SKIN,
    }
)

HARM_CATEGORIES: frozenset[ContentCategory] = frozenset(
    {
        ContentCategory.ANIMAL_INGREDIENTS_IN_FOOD_THAT_HARM_SKIN,
        ContentCategory.ANIMAL_INGREDIENTS_IN_SKINCARE_THAT_HARM_SKIN,
        ContentCategory.OTHER_FOODS_THAT_HARM_SKIN,
        ContentCategory.SKINCARE_CHEMICALS_THAT_HARM_SKIN,
        ContentCategory.HABITS_THAT_HARM_SKIN,
    }
)

HELP_CATEGORIES: frozenset[ContentCategory] = frozenset(
    {
        ContentCategory.VEGAN_FOODS_THAT_HELP_SKIN,
        ContentCategory.AYURVEDIC_HERBS_IN_SKINCARE_THAT_HELP_SKIN,
        ContentCategory.AYURVEDIC_HERBS_TO_EAT_THAT_BENEFIT_SKIN,
        ContentCategory.AYURVEDIC_PRACTICES_THAT_HELP_SKIN,
        ContentCategory.OTHER_PRACTICES_THAT_HELP_SKIN,
    }
)


__all__ = [
    "SkinCondition",
    "ContentCategory",
    "EntityType",
    "ClaimDirection",
    "ClaimConfidence",
    "TopicPriority",
    "TopicStatus",
    "EvidenceType",
    "SourceType",
    "DietaryAlignment",
    "ANIMAL_CATEGORIES",
    "HARM_CATEGORIES",
    "HELP_CATEGORIES",
]
