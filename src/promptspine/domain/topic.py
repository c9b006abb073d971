"""
Topic model: one atomic research unit.

A topic pairs a single primary entity with a single skin condition and a
directional claim ("turmeric helps redness"). Topics are the only input
that is always present when a prompt is rendered.

Examples:
    >>> topic = Topic.model_validate(data)
    >>> topic.primary_entity, topic.claim.direction.value
    ('turmeric', 'helps')

Tags:
    topics, pydantic, domain
"""

from __future__ import annotations

from pydantic import ConfigDict, Field

from promptspine.domain.base import DomainModel, StringMap
from promptspine.domain.enums import (
    ClaimConfidence,
    ClaimDirection,
    ContentCategory,
    EntityType,
    SkinCondition,
    TopicPriority,
    TopicStatus,
)

TOPIC_ID_PATTERN = r"^[a-z][a-z0-9_]*$"


class Claim(DomainModel):
    """Directional claim linking the entity to the condition."""

    model_config = ConfigDict(extra="forbid")

    direction: ClaimDirection
    mechanism: str | None = Field(default=None, description="Proposed biological mechanism")
    confidence: ClaimConfidence = ClaimConfidence.ESTABLISHED


class Topic(DomainModel):
    """A single research topic."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(
        ...,
        min_length=1,
        pattern=TOPIC_ID_PATTERN,
        description="Lowercase alphanumeric with underscores, starting with a letter",
    )
    primary_entity: str = Field(..., min_length=1, description="The single thing being researched")
    entity_type: EntityType
    claim: Claim
    name: str = Field(..., min_length=1)
    description: str | None = None
    condition: SkinCondition
    category: ContentCategory
    priority: TopicPriority = TopicPriority.MEDIUM
    status: TopicStatus = TopicStatus.ACTIVE
    tags: tuple[str, ...] = ()
    metadata: StringMap | None = Field(default=None, description="Free-form string annotations")


class TopicCollection(DomainModel):
    """Versioned file of topics, as stored on disk."""

    version: str = Field(..., pattern=r"^\d+\.\d+\.\d+$")
    topics: tuple[Topic, ...]

    def get(self, topic_id: str) -> Topic | None:
        """Look up a topic by id."""
        for topic in self.topics:
            if topic.id == topic_id:
                return topic
        return None
