"""
Template parsing.

A template is plain text with ``{{variable.path}}`` placeholders (inner
whitespace tolerated) and ``{{#if ...}}...{{/if}}`` conditional blocks.
Parsing validates everything up front so rendering never meets an unknown
name:

    - every placeholder and conditional variable is a schema member
    - no conditional body opens another conditional
    - ``{{#if`` openers and ``{{/if}}`` closers balance
    - ``==`` / ``!=`` literals on enumerated variables are legal values

Validation is exhaustive. All problems are collected and raised together
in one :class:`TemplateParseError` (or :class:`ConditionalParseError` when
any of them concerns conditional structure).

Examples:
    >>> tpl = parse_template("Study {{topic.entity}} for {{ topic.condition }}.", "inline")
    >>> tpl.variables
    ('topic.condition', 'topic.entity')

Tags:
    prompts, templates, parsing, validation
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from promptspine.core.errors import ConditionalParseError, TemplateParseError
from promptspine.core.logging import get_logger
from promptspine.prompts.conditional import ConditionalBlock, scan_conditionals
from promptspine.prompts.context import is_valid_variable

logger = get_logger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{\s*([a-zA-Z][a-zA-Z0-9_.]*)\s*\}\}")

ANONYMOUS = "(anonymous)"


@dataclass(frozen=True, slots=True)
class ParsedTemplate:
    """A validated template, safe to cache and render many times."""

    source: str
    variables: tuple[str, ...]
    conditionals: tuple[ConditionalBlock, ...] = ()
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or ANONYMOUS

    @property
    def all_variables(self) -> tuple[str, ...]:
        """Placeholder and conditional variables, including untaken branches."""
        names = set(self.variables)
        names.update(block.variable for block in self.conditionals)
        return tuple(sorted(names))


def extract_variables(source: str) -> list[str]:
    """Deduplicated, sorted placeholder names (conditional bodies included)."""
    return sorted({m.group(1) for m in PLACEHOLDER_RE.finditer(source)})


def parse_template(source: str, name: str | None = None) -> ParsedTemplate:
    """Parse and validate ``source``.

    Raises:
        TemplateParseError: unknown placeholder names only
        ConditionalParseError: any conditional problem (unknown variable,
            malformed tag, nesting, unbalanced tags, illegal literal), together with any
            unknown placeholders
    """
    template_name = name or ANONYMOUS
    scan = scan_conditionals(source)
    variables = extract_variables(source)

    unknown = [v for v in variables if not is_valid_variable(v)]
    issues = [f'Unknown variable "{v}"' for v in unknown]
    issues.extend(scan.issues)

    if issues:
        error_cls = ConditionalParseError if scan.issues else TemplateParseError
        logger.debug("template_parse_failed", template=template_name, issues=len(issues))
        raise error_cls(
            template_name,
            invalid_variables=unknown + list(scan.unknown_variables),
            issues=issues,
        )

    logger.debug(
        "template_parsed",
        template=template_name,
        variables=len(variables),
        conditionals=len(scan.blocks),
    )
    return ParsedTemplate(
        source=source,
        variables=tuple(variables),
        conditionals=scan.blocks,
        name=name,
    )


__all__ = ["PLACEHOLDER_RE", "ParsedTemplate", "extract_variables", "parse_template"]
