"""Prompt-spine core -- errors, hashing, logging, settings, and git metadata.

Architecture::

    errors.py       Structured error hierarchy (PromptSpineError and friends)
    hashing.py      Deterministic 12-char SHA-256 content hashing
    timestamps.py   UTC helpers + run id generation (stdlib-only)
    logging.py      structlog configuration and context binding
    settings.py     pydantic-settings configuration (PROMPTSPINE_*)
    git.py          Commit/branch capture for snapshot provenance
"""

from promptspine.core.errors import (
    ConditionalParseError,
    ConfigError,
    DomainLoadError,
    ErrorCategory,
    ErrorContext,
    MissingVariableError,
    PromptRenderError,
    PromptSpineError,
    RenderError,
    SnapshotError,
    SnapshotFormatError,
    SnapshotNotFoundError,
    TemplateError,
    TemplateLoadError,
    TemplateParseError,
    UnusedVariableError,
)
from promptspine.core.hashing import HASH_LENGTH, compute_hash
from promptspine.core.timestamps import generate_run_id, to_iso8601, utc_now

__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "PromptSpineError",
    "TemplateError",
    "TemplateParseError",
    "ConditionalParseError",
    "TemplateLoadError",
    "RenderError",
    "MissingVariableError",
    "PromptRenderError",
    "UnusedVariableError",
    "SnapshotError",
    "SnapshotNotFoundError",
    "SnapshotFormatError",
    "DomainLoadError",
    "ConfigError",
    "HASH_LENGTH",
    "compute_hash",
    "generate_run_id",
    "to_iso8601",
    "utc_now",
]
