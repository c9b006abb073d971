"""
Conditional blocks for prompt templates.

Three forms are supported::

    {{#if topic.claim.mechanism}}Mechanism: {{topic.claim.mechanism}}{{/if}}
    {{#if topic.claim.direction == "helps"}}...{{/if}}
    {{#if topic.category != "habits_that_harm_skin"}}...{{/if}}

No nesting, no ``else``, no loops, no expressions; any other ``{{#if``
form (single quotes, other operators) is a parse error. Conditionals are
resolved in a dedicated pass *before* placeholder substitution: each span
is replaced by its body (still containing placeholders) or by ``""``.

Evaluation rules:

    ========  ==============================================
    truthy    value is neither UNSET nor ""
    ==        value is not UNSET and equals the literal
    !=        value is UNSET, or differs from the literal
    ========  ==============================================

``!=`` is deliberately not the negation of ``==``: an absent variable
satisfies every inequality, so ``{{#if topic.category != "x"}}`` holds
when category information was never supplied.

Tags:
    prompts, templates, conditionals, parsing
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from promptspine.core.errors import ConditionalParseError
from promptspine.domain.enums import (
    ClaimConfidence,
    ClaimDirection,
    ContentCategory,
    EntityType,
    SkinCondition,
    TopicPriority,
    TopicStatus,
)
from promptspine.prompts.context import UNSET, is_valid_variable

CONDITIONAL_RE = re.compile(
    r'\{\{#if\s+([a-zA-Z][a-zA-Z0-9_.]*)\s*(?:(==|!=)\s*"([^"]*)")?\s*\}\}([\s\S]*?)\{\{/if\}\}'
)
OPEN_TAG_RE = re.compile(r"\{\{#if\s")
CLOSE_TAG_RE = re.compile(r"\{\{/if\}\}")
# A well-formed opening tag; every OPEN_TAG_RE hit must start one.
OPEN_HEAD_RE = re.compile(r'\{\{#if\s+[a-zA-Z][a-zA-Z0-9_.]*\s*(?:(?:==|!=)\s*"[^"]*")?\s*\}\}')
# Best-effort read of a malformed tag, for the error message.
LOOSE_TAG_RE = re.compile(r"\{\{#if\s+([a-zA-Z][a-zA-Z0-9_.]*)?[^}\n]*(?:\}\})?")


class ConditionalOperator(str, Enum):
    TRUTHY = "truthy"
    EQUALS = "=="
    NOT_EQUALS = "!="


@dataclass(frozen=True, slots=True)
class ConditionalBlock:
    """One parsed ``{{#if}}...{{/if}}`` span."""

    variable: str
    operator: ConditionalOperator
    value: str | None
    body: str
    raw: str


# Closed value sets; literals compared against these variables must be members.
ENUM_VALUES: Mapping[str, frozenset[str]] = {
    "topic.condition": frozenset(c.value for c in SkinCondition),
    "topic.category": frozenset(c.value for c in ContentCategory),
    "topic.claim.direction": frozenset(d.value for d in ClaimDirection),
    "topic.entityType": frozenset(e.value for e in EntityType),
    "topic.priority": frozenset(p.value for p in TopicPriority),
    "topic.status": frozenset(s.value for s in TopicStatus),
    "topic.claim.confidence": frozenset(c.value for c in ClaimConfidence),
}


def get_enum_values(variable: str) -> frozenset[str] | None:
    """Allowed literals for ``variable``, or ``None`` when it is open-ended."""
    return ENUM_VALUES.get(variable)


def _block_from_match(match: re.Match[str]) -> ConditionalBlock:
    variable, operator, value, body = match.groups()
    op = ConditionalOperator(operator) if operator else ConditionalOperator.TRUTHY
    return ConditionalBlock(
        variable=variable,
        operator=op,
        value=value if op is not ConditionalOperator.TRUTHY else None,
        body=body,
        raw=match.group(0),
    )


@dataclass(frozen=True, slots=True)
class ConditionalScan:
    """Everything found while scanning a source for conditionals."""

    blocks: tuple[ConditionalBlock, ...]
    issues: tuple[str, ...]
    unknown_variables: tuple[str, ...]
    variables: tuple[str, ...]


def scan_conditionals(source: str) -> ConditionalScan:
    """Collect blocks and every conditional problem without raising.

    ``variables`` holds every name used in a conditional tag, valid or not.
    """
    blocks: list[ConditionalBlock] = []
    issues: list[str] = []
    unknown: list[str] = []
    variables: list[str] = []

    for match in CONDITIONAL_RE.finditer(source):
        block = _block_from_match(match)
        variables.append(block.variable)

        if not is_valid_variable(block.variable):
            issues.append(f'Unknown variable "{block.variable}" in conditional')
            unknown.append(block.variable)
            continue

        if OPEN_TAG_RE.search(block.body):
            issues.append(
                "Nested conditionals are not supported "
                f"(found {{{{#if inside {{{{#if {block.variable}...}}}})"
            )
            continue

        if block.operator is not ConditionalOperator.TRUTHY:
            allowed = ENUM_VALUES.get(block.variable)
            if allowed is not None and block.value not in allowed:
                issues.append(
                    f'Invalid value "{block.value}" for "{block.variable}" '
                    f"(allowed: {', '.join(sorted(allowed))})"
                )
                continue

        blocks.append(block)

    # Every opening tag must be well-formed, even when no block matched it.
    for open_match in OPEN_TAG_RE.finditer(source):
        start = open_match.start()
        if OPEN_HEAD_RE.match(source, start):
            continue
        loose = LOOSE_TAG_RE.match(source, start)
        issues.append(f'Malformed conditional tag "{loose.group(0)}"')
        variable = loose.group(1)
        if variable:
            variables.append(variable)
            if not is_valid_variable(variable):
                unknown.append(variable)

    opening = len(OPEN_TAG_RE.findall(source))
    closing = len(CLOSE_TAG_RE.findall(source))
    if opening != closing:
        issues.append(
            f"Mismatched conditional tags: {opening} opening {{{{#if}}}}, "
            f"{closing} closing {{{{/if}}}}"
        )

    return ConditionalScan(
        blocks=tuple(blocks),
        issues=tuple(issues),
        unknown_variables=tuple(unknown),
        variables=tuple(variables),
    )


def parse_conditional_blocks(source: str, template_name: str = "(anonymous)") -> list[ConditionalBlock]:
    """Parse every conditional in ``source``.

    Raises:
        ConditionalParseError: listing every problem found
    """
    scan = scan_conditionals(source)
    if scan.issues:
        raise ConditionalParseError(
            template_name,
            invalid_variables=list(scan.unknown_variables),
            issues=list(scan.issues),
            message=(
                f'Template "{template_name}" has invalid conditional(s):\n  - '
                + "\n  - ".join(scan.issues)
            ),
        )
    return list(scan.blocks)


def evaluate_condition(block: ConditionalBlock, value: str) -> bool:
    unset = value == UNSET
    if block.operator is ConditionalOperator.TRUTHY:
        return not unset and value != ""
    if block.operator is ConditionalOperator.EQUALS:
        return not unset and value == block.value
    return unset or value != block.value


def resolve_conditionals(source: str, context: Mapping[str, str]) -> str:
    """Replace each conditional span with its body or ``""``.

    Bodies are returned unexpanded; placeholder substitution happens later.
    A variable absent from ``context`` evaluates as ``""``.
    """

    def _replace(match: re.Match[str]) -> str:
        block = _block_from_match(match)
        return block.body if evaluate_condition(block, context.get(block.variable, "")) else ""

    return CONDITIONAL_RE.sub(_replace, source)


__all__ = [
    "CONDITIONAL_RE",
    "ConditionalOperator",
    "ConditionalBlock",
    "ConditionalScan",
    "ENUM_VALUES",
    "get_enum_values",
    "scan_conditionals",
    "parse_conditional_blocks",
    "evaluate_condition",
    "resolve_conditionals",
]
