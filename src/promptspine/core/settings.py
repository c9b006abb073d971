"""Settings for prompt-spine.

All file locations the CLI and automation need (templates, topics,
standards, snapshot store) plus logging preferences, read from
``PROMPTSPINE_*`` environment variables and an optional ``.env`` file.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, not runtime
    - **Environment-driven:** Reads from env vars and .env files
    - **Sensible defaults:** Works out of the box from a project checkout

Examples:
    >>> from promptspine.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.snapshot_dir
    PosixPath('snapshots/prompts')

Tags:
    settings, configuration, pydantic, environment, prompt-spine
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PromptSpineSettings(BaseSettings):
    """Settings shared by the CLI and automation collaborators.

    Fields
    ──────
    prompts_dir     : Directory holding ``.md`` / ``.txt`` prompt templates
    snapshot_dir    : Root of the content-addressed snapshot tree
    topics_path     : Topics JSON file
    standards_path  : Content standards JSON file (optional on disk)
    seo_path        : SEO guidelines JSON file (optional on disk)
    log_level       : Structlog log level
    log_format      : ``console`` or ``json``
    """

    model_config = SettingsConfigDict(
        env_prefix="PROMPTSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Locations ────────────────────────────────────────────────
    prompts_dir: Path = Path("prompts")
    snapshot_dir: Path = Field(
        default=Path("snapshots/prompts"),
        description="Root of the content-addressed snapshot tree",
    )
    topics_path: Path = Path("topics/sample-topics.json")
    standards_path: Path = Path("config/content-standards.json")
    seo_path: Path = Path("config/seo-guidelines.json")

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"


_settings_cache: dict[str, PromptSpineSettings] = {}


def get_settings(*, _force_reload: bool = False) -> PromptSpineSettings:
    """Load, validate, and cache a :class:`PromptSpineSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = PromptSpineSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
