"""Tests for promptspine.core.errors module."""

import pytest

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
    TemplateLoadError,
    TemplateParseError,
    UnusedVariableError,
)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_empty_context_serializes_to_empty_dict(self):
        assert ErrorContext().to_dict() == {}

    def test_only_set_fields_are_emitted(self):
        ctx = ErrorContext(template="deep-research.md", snapshot_hash="a1b2c3d4e5f6")
        assert ctx.to_dict() == {"template": "deep-research.md", "snapshot_hash": "a1b2c3d4e5f6"}

    def test_metadata_is_flattened(self):
        ctx = ErrorContext(path="/tmp/x", metadata={"issues": ["a"]})
        assert ctx.to_dict() == {"path": "/tmp/x", "issues": ["a"]}


class TestPromptSpineError:
    """Test the base error."""

    def test_default_category_is_internal(self):
        err = PromptSpineError("boom")
        assert err.category == ErrorCategory.INTERNAL
        assert err.message == "boom"
        assert str(err) == "boom"

    def test_cause_is_chained(self):
        cause = ValueError("root")
        err = PromptSpineError("wrapped", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == "root"

    def test_with_context_sets_known_fields_and_metadata(self):
        err = SnapshotError("failed").with_context(topic_id="dairy_harms_acne", attempt=2)
        assert err.context.topic_id == "dairy_harms_acne"
        assert err.context.metadata == {"attempt": 2}

    def test_to_dict(self):
        err = ConfigError("bad path", context=ErrorContext(path="prompts"))
        assert err.to_dict() == {
            "error_type": "ConfigError",
            "message": "bad path",
            "category": "CONFIG",
            "context": {"path": "prompts"},
        }

    @pytest.mark.parametrize(
        "error,category",
        [
            (TemplateLoadError("x.md"), ErrorCategory.TEMPLATE),
            (RenderError("x"), ErrorCategory.RENDER),
            (SnapshotFormatError("x"), ErrorCategory.SNAPSHOT),
            (DomainLoadError("x"), ErrorCategory.DOMAIN),
            (ConfigError("x"), ErrorCategory.CONFIG),
        ],
    )
    def test_subclass_categories(self, error, category):
        assert error.category == category
        assert isinstance(error, PromptSpineError)


class TestTemplateParseError:
    """Test TemplateParseError and ConditionalParseError."""

    def test_invalid_variables_sorted_and_deduplicated(self):
        err = TemplateParseError("t", invalid_variables=["b.x", "a.x", "b.x"])
        assert err.invalid_variables == ["a.x", "b.x"]
        assert err.issues == ['Unknown variable "a.x"', 'Unknown variable "b.x"']
        assert "a.x, b.x" in err.message
        assert err.context.template == "t"

    def test_mixed_issues_are_listed(self):
        err = ConditionalParseError(
            "t",
            invalid_variables=["foo.bar"],
            issues=['Unknown variable "foo.bar"', "Mismatched conditional tags: 1 opening {{#if}}, 0 closing {{/if}}"],
        )
        assert isinstance(err, TemplateParseError)
        assert "Mismatched conditional tags" in err.message
        assert err.to_dict()["issues"][1].startswith("Mismatched")


class TestRenderErrors:
    """Test missing/unused variable errors."""

    def test_missing_variable_error(self):
        err = MissingVariableError("t", ["seo.name", "research.runId"])
        assert err.missing_variables == ["seo.name", "research.runId"]
        assert "seo.name, research.runId" in err.message
        assert err.to_dict()["missing_variables"] == ["seo.name", "research.runId"]

    def test_prompt_render_error_alias(self):
        assert PromptRenderError is MissingVariableError

    def test_unused_variable_error(self):
        err = UnusedVariableError("t", ["topic.status"])
        assert err.unused_variables == ["topic.status"]
        assert "strict=False" in err.message


class TestSnapshotErrors:
    """Test snapshot errors."""

    def test_not_found_carries_path(self):
        err = SnapshotNotFoundError("/snap/x.md")
        assert err.path == "/snap/x.md"
        assert err.context.path == "/snap/x.md"
        assert isinstance(err, SnapshotError)
