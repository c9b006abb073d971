"""
Structured error types for prompt-spine.

Every failure the prompt core can surface is a typed error carrying a
category, structured context, and the complete list of offending names.
Template authors fix a file in one pass, so nothing here is fail-fast:
parse and render errors always enumerate every issue found.

Manifesto:
    - **Typed hierarchy:** Parse, render, snapshot, and domain errors are
      distinct classes with distinct payloads
    - **Exhaustive payloads:** Errors carry full lists, never just the first
      offending variable
    - **Recoverable:** Nothing here is fatal to the host process; callers
      catch, display the issue list, and retry
    - **Results for routine checks:** Snapshot integrity mismatch is a
      ``SnapshotVerifyResult``, not an exception

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     PromptSpineError                         │
        │              (category, context, cause)                      │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  TemplateError        RenderError         SnapshotError      │
        │  (TEMPLATE)           (RENDER)            (SNAPSHOT)         │
        │     │                    │                    │              │
        │  TemplateParseError   MissingVariableError SnapshotNotFound  │
        │  ConditionalParseError UnusedVariableError SnapshotFormat    │
        │  TemplateLoadError                                           │
        │                                                              │
        │  DomainLoadError (DOMAIN)      ConfigError (CONFIG)          │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> err = TemplateParseError("deep-research", invalid_variables=["topic.nope"])
    >>> err.invalid_variables
    ['topic.nope']
    >>> err.category
    <ErrorCategory.TEMPLATE: 'TEMPLATE'>

Tags:
    error-handling, exception-hierarchy, error-context, prompt-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and reporting.

    Attributes:
        TEMPLATE: Template parsing or loading failures
        RENDER: Render-time variable discipline failures
        SNAPSHOT: Snapshot storage and retrieval failures
        DOMAIN: Domain object (topic, standards) loading failures
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state
    """

    TEMPLATE = "TEMPLATE"
    RENDER = "RENDER"
    SNAPSHOT = "SNAPSHOT"
    DOMAIN = "DOMAIN"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Typed fields cover what the prompt core knows at failure time (which
    template, which topic, which snapshot, which file). Anything else goes in
    ``metadata``. ``to_dict()`` emits only the fields that are set, so the
    result can be passed straight to a structlog call.
    """

    template: str | None = None
    topic_id: str | None = None
    snapshot_hash: str | None = None
    path: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["template", "topic_id", "snapshot_hash", "path"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class PromptSpineError(Exception):
    """
    Base exception for all prompt-spine errors.

    Subclasses set ``default_category``. The ``cause`` argument chains the
    underlying exception through ``__cause__`` so tracebacks keep the root
    failure.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> PromptSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise SnapshotError("Failed").with_context(
                template="deep-research.md",
                topic_id="dairy_harms_acne",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# TEMPLATE ERRORS
# =============================================================================


class TemplateError(PromptSpineError):
    """Template-related error."""

    default_category = ErrorCategory.TEMPLATE


class TemplateParseError(TemplateError):
    """
    A template failed parse-time validation.

    Raised once per template with the complete set of problems:
    ``invalid_variables`` holds every unknown name (placeholders and
    conditionals, sorted and deduplicated) and ``issues`` holds every
    human-readable problem, including conditional structure issues.
    """

    def __init__(
        self,
        template_name: str,
        invalid_variables: list[str] | None = None,
        issues: list[str] | None = None,
        message: str | None = None,
        **kwargs: Any,
    ):
        self.template_name = template_name
        self.invalid_variables = sorted(set(invalid_variables or []))
        self.issues = list(issues or [])
        if not self.issues and self.invalid_variables:
            self.issues = [f'Unknown variable "{name}"' for name in self.invalid_variables]
        if message is None:
            if self.invalid_variables and len(self.issues) == len(self.invalid_variables):
                message = (
                    f'Template "{template_name}" references unknown variable(s): '
                    f"{', '.join(self.invalid_variables)}"
                )
            else:
                message = f'Template "{template_name}" is invalid:\n  - ' + "\n  - ".join(self.issues)
        super().__init__(message, **kwargs)
        self.context.template = template_name

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["invalid_variables"] = self.invalid_variables
        result["issues"] = self.issues
        return result


class ConditionalParseError(TemplateParseError):
    """Template has malformed, nested, unbalanced, or mistyped conditionals."""


class TemplateLoadError(TemplateError):
    """Template file could not be found or read."""

    def __init__(self, file_path: str, message: str | None = None, **kwargs: Any):
        self.file_path = file_path
        super().__init__(message or f"Failed to load template: {file_path}", **kwargs)
        self.context.path = file_path


# =============================================================================
# RENDER ERRORS
# =============================================================================


class RenderError(PromptSpineError):
    """Render-time variable discipline failure."""

    default_category = ErrorCategory.RENDER


class MissingVariableError(RenderError):
    """
    Live placeholders resolved to the UNSET sentinel.

    Only placeholders that survive conditional resolution count; a variable
    inside an untaken branch is never reported as missing.
    """

    def __init__(
        self,
        template_name: str,
        missing_variables: list[str],
        message: str | None = None,
        **kwargs: Any,
    ):
        self.template_name = template_name
        self.missing_variables = list(missing_variables)
        super().__init__(
            message
            or (
                f'Cannot render template "{template_name}": context is missing '
                f"value(s) for: {', '.join(self.missing_variables)}"
            ),
            **kwargs,
        )
        self.context.template = template_name

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["missing_variables"] = self.missing_variables
        return result


PromptRenderError = MissingVariableError


class UnusedVariableError(RenderError):
    """Strict mode: context variables the template never references."""

    def __init__(
        self,
        template_name: str,
        unused_variables: list[str],
        message: str | None = None,
        **kwargs: Any,
    ):
        self.template_name = template_name
        self.unused_variables = list(unused_variables)
        super().__init__(
            message
            or (
                f'Template "{template_name}" does not use context variable(s): '
                f"{', '.join(self.unused_variables)}. Render with strict=False to allow unused variables."
            ),
            **kwargs,
        )
        self.context.template = template_name

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["unused_variables"] = self.unused_variables
        return result


# =============================================================================
# SNAPSHOT ERRORS
# =============================================================================


class SnapshotError(PromptSpineError):
    """Snapshot storage or retrieval error."""

    default_category = ErrorCategory.SNAPSHOT


class SnapshotNotFoundError(SnapshotError):
    """Requested hash is absent for the given template/topic."""

    def __init__(self, path: str, message: str | None = None, **kwargs: Any):
        self.path = path
        super().__init__(message or f"Snapshot not found: {path}", **kwargs)
        self.context.path = path


class SnapshotFormatError(SnapshotError):
    """Snapshot file exists but cannot be parsed."""


# =============================================================================
# DOMAIN / CONFIG ERRORS
# =============================================================================


class DomainLoadError(PromptSpineError):
    """Topic, standards, or SEO file failed to load or validate."""

    default_category = ErrorCategory.DOMAIN


class ConfigError(PromptSpineError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG


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
]
