"""
Shared pytest fixtures and configuration for prompt-spine tests.

This module provides:
- Settings and logging cleanup fixtures for test isolation
- Factories for topics, specifications, content standards and SEO guidelines
- An on-disk project layout (topics, config, prompts, snapshot store) for CLI tests

Usage:
    Fixtures are auto-discovered by pytest. Factories are plain functions
    so tests can build variants with keyword overrides:

    def test_something(make_topic):
        topic = make_topic(claim={"direction": "harms"})
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from promptspine.core.settings import clear_settings_cache
from promptspine.domain import (
    ContentStandards,
    ResearchSpecification,
    SeoGuidelines,
    Topic,
    create_specification,
)

FIXED_RUN_ID = "20250101-abc123"
FIXED_STARTED_AT = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if test_path.parts and test_path.parts[0] == "cli":
            item.add_marker(pytest.mark.cli)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop cached settings and stray PROMPTSPINE_* variables around each test."""
    for key in (
        "PROMPTSPINE_PROMPTS_DIR",
        "PROMPTSPINE_SNAPSHOT_DIR",
        "PROMPTSPINE_TOPICS_PATH",
        "PROMPTSPINE_STANDARDS_PATH",
        "PROMPTSPINE_SEO_PATH",
        "PROMPTSPINE_LOG_LEVEL",
        "PROMPTSPINE_LOG_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Domain Factories
# =============================================================================


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def topic_data(**overrides: Any) -> dict[str, Any]:
    """camelCase topic payload, as it appears in a topics file."""
    base = {
        "id": "turmeric_helps_redness",
        "primaryEntity": "turmeric",
        "entityType": "herb",
        "claim": {
            "direction": "helps",
            "mechanism": "Curcumin reduces inflammatory signalling",
            "confidence": "established",
        },
        "name": "Turmeric for Redness",
        "description": "Dietary turmeric and facial redness",
        "condition": "redness_hyperpigmentation",
        "category": "ayurvedic_herbs_to_eat_that_benefit_skin",
        "priority": "high",
        "status": "active",
    }
    return _merge(base, overrides)


def standards_data(**overrides: Any) -> dict[str, Any]:
    base = {
        "version": "1.0.0",
        "name": "Test Standards",
        "tone": {
            "primary": ["empathetic", "evidence-based"],
            "readingLevel": {"min": 8, "max": 10},
            "perspective": "second_person",
        },
        "citations": {"format": "numeric", "minReferences": 5},
        "forbidden": {
            "exactPhrases": ["miracle cure", "guaranteed results"],
            "forbiddenClaims": [
                {"category": "medical_treatment", "description": "Replacing medical treatment"}
            ],
        },
        "required": {
            "disclaimers": [
                {"id": "medical", "text": "Not medical advice."},
                {"id": "consult", "text": "Consult a dermatologist."},
            ]
        },
        "brand": {
            "values": ["compassion", "science"],
            "dietaryAlignment": ["vegan", "cruelty_free"],
            "emphasize": ["whole foods"],
            "deemphasize": ["supplements"],
        },
    }
    return _merge(base, overrides)


def seo_data(**overrides: Any) -> dict[str, Any]:
    base = {
        "version": "1.0.0",
        "name": "Test SEO",
        "keywordDensity": {"primaryKeyword": {"min": 0.5, "max": 1.5}},
        "contentLength": {"wordCount": {"min": 1500, "max": 2500}},
    }
    return _merge(base, overrides)


@pytest.fixture
def make_topic():
    """Factory: ``make_topic(**camelCase_overrides) -> Topic``."""

    def _make(**overrides: Any) -> Topic:
        return Topic.model_validate(topic_data(**overrides))

    return _make


@pytest.fixture
def make_content_standards():
    def _make(**overrides: Any) -> ContentStandards:
        return ContentStandards.model_validate(standards_data(**overrides))

    return _make


@pytest.fixture
def make_seo_guidelines():
    def _make(**overrides: Any) -> SeoGuidelines:
        return SeoGuidelines.model_validate(seo_data(**overrides))

    return _make


@pytest.fixture
def make_specification():
    """Factory: deterministic specification with a fixed run id and start time."""

    def _make(topics: list[Topic], **kwargs: Any) -> ResearchSpecification:
        return create_specification(
            kwargs.pop("run_id", FIXED_RUN_ID),
            topics,
            started_at=kwargs.pop("started_at", FIXED_STARTED_AT),
            **kwargs,
        )

    return _make


@pytest.fixture
def helps_topic(make_topic) -> Topic:
    return make_topic()


@pytest.fixture
def harms_topic(make_topic) -> Topic:
    return make_topic(
        id="dairy_harms_acne",
        primaryEntity="dairy",
        entityType="food",
        claim={"direction": "harms", "mechanism": "IGF-1 signalling"},
        name="Dairy and Acne",
        condition="acne_acne_scars",
        category="animal_ingredients_in_food_that_harm_skin",
    )


# =============================================================================
# On-disk Project Layout
# =============================================================================


SIMPLE_TEMPLATE = (
    "Topic: {{topic.name}}\n"
    "Run: {{research.runId}}\n"
    "{{#if topic.claim.direction == \"helps\"}}BENEFIT.{{/if}}"
    "{{#if topic.claim.direction == \"harms\"}}WARNING.{{/if}}\n"
)


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A project tree with topics, standards, SEO, one template and an empty store.

    PROMPTSPINE_* variables point at it so CLI commands run without flags.
    """
    (tmp_path / "topics").mkdir()
    (tmp_path / "config").mkdir()
    (tmp_path / "prompts").mkdir()

    topics = {
        "version": "1.0.0",
        "topics": [
            topic_data(),
            topic_data(
                id="dairy_harms_acne",
                primaryEntity="dairy",
                entityType="food",
                claim={"direction": "harms"},
                name="Dairy and Acne",
                condition="acne_acne_scars",
                category="animal_ingredients_in_food_that_harm_skin",
            ),
        ],
    }
    (tmp_path / "topics" / "topics.json").write_text(json.dumps(topics), encoding="utf-8")
    (tmp_path / "config" / "content-standards.json").write_text(
        json.dumps(standards_data()), encoding="utf-8"
    )
    (tmp_path / "config" / "seo-guidelines.json").write_text(json.dumps(seo_data()), encoding="utf-8")
    (tmp_path / "prompts" / "simple.md").write_text(SIMPLE_TEMPLATE, encoding="utf-8")

    monkeypatch.setenv("PROMPTSPINE_TOPICS_PATH", str(tmp_path / "topics" / "topics.json"))
    monkeypatch.setenv("PROMPTSPINE_STANDARDS_PATH", str(tmp_path / "config" / "content-standards.json"))
    monkeypatch.setenv("PROMPTSPINE_SEO_PATH", str(tmp_path / "config" / "seo-guidelines.json"))
    monkeypatch.setenv("PROMPTSPINE_PROMPTS_DIR", str(tmp_path / "prompts"))
    monkeypatch.setenv("PROMPTSPINE_SNAPSHOT_DIR", str(tmp_path / "snapshots"))
    clear_settings_cache()
    return tmp_path
