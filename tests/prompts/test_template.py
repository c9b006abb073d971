"""
Tests for promptspine.prompts.template.

Tests cover:
- Placeholder extraction (deduplicated, sorted, whitespace tolerant)
- Parse-time validation that reports every problem at once
"""

import pytest

from promptspine.core.errors import ConditionalParseError, TemplateParseError
from promptspine.prompts.conditional import ConditionalOperator
from promptspine.prompts.template import extract_variables, parse_template


class TestExtractVariables:
    """Test extract_variables()."""

    def test_sorted_and_deduplicated(self):
        source = "{{topic.name}} {{topic.entity}} {{topic.name}}"
        assert extract_variables(source) == ["topic.entity", "topic.name"]

    def test_whitespace_inside_braces(self):
        assert extract_variables("{{ topic.id }} and {{topic.name  }}") == ["topic.id", "topic.name"]

    def test_conditional_tags_are_not_placeholders(self):
        source = '{{#if topic.claim.direction == "helps"}}{{topic.entity}}{{/if}}'
        assert extract_variables(source) == ["topic.entity"]


class TestParseTemplate:
    """Test parse_template()."""

    def test_valid_template(self):
        source = 'Study {{topic.entity}}.{{#if topic.claim.mechanism}} Via {{topic.claim.mechanism}}.{{/if}}'
        template = parse_template(source, "study")
        assert template.name == "study"
        assert template.source == source
        assert template.variables == ("topic.claim.mechanism", "topic.entity")
        assert len(template.conditionals) == 1
        assert template.conditionals[0].operator is ConditionalOperator.TRUTHY

    def test_anonymous_display_name(self):
        assert parse_template("{{topic.id}}").display_name == "(anonymous)"

    def test_all_variables_includes_conditionals(self):
        template = parse_template('{{#if seo.name}}x{{/if}}{{topic.id}}')
        assert set(template.all_variables) == {"seo.name", "topic.id"}

    def test_malformed_conditional_does_not_parse(self):
        with pytest.raises(ConditionalParseError) as exc_info:
            parse_template('{{#if bogus.var > "x"}}HIDDEN{{/if}}', "gt")
        assert exc_info.value.invalid_variables == ["bogus.var"]

    def test_two_unknown_names_both_reported(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("{{topic.nope}} {{foo.bar}} {{topic.id}}", "bad")
        err = exc_info.value
        assert type(err) is TemplateParseError
        assert err.invalid_variables == ["foo.bar", "topic.nope"]
        assert err.template_name == "bad"
        assert 'Template "bad" references unknown variable(s): foo.bar, topic.nope' == err.message

    def test_conditional_problems_raise_conditional_error_with_placeholders(self):
        source = "{{bogus.one}} {{#if bogus.two}}x{{/if}} {{#if topic.id}}"
        with pytest.raises(ConditionalParseError) as exc_info:
            parse_template(source, "mixed")
        err = exc_info.value
        assert err.invalid_variables == ["bogus.one", "bogus.two"]
        assert 'Unknown variable "bogus.one"' in err.issues
        assert 'Unknown variable "bogus.two" in conditional' in err.issues
        assert any(issue.startswith("Mismatched conditional tags: 2 opening") for issue in err.issues)

    def test_empty_template(self):
        template = parse_template("")
        assert template.variables == ()
        assert template.conditionals == ()
