"""
Prompt rendering.

Rendering is pure text-to-text over an already validated template:

    1. resolve conditionals (bodies kept unexpanded, or dropped)
    2. check that every placeholder still live after step 1 has a value
    3. in strict mode, check that the template references every context key
    4. substitute placeholders
    5. append the formatted constraints block, when supplied

Parse errors never surface here; :func:`parse_template` already rejected
unknown names. Both render checks report the complete list of offending
variables.

Examples:
    >>> tpl = parse_template("Study {{topic.entity}} for {{topic.condition}}.", "inline")
    >>> render_prompt(tpl, build_prompt_context(topic))
    'Study turmeric for redness_hyperpigmentation.'

Tags:
    prompts, rendering, templates
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from promptspine.core.errors import MissingVariableError, UnusedVariableError
from promptspine.core.logging import get_logger
from promptspine.prompts.conditional import resolve_conditionals
from promptspine.prompts.constraints import PromptConstraints, format_constraints
from promptspine.prompts.context import UNSET
from promptspine.prompts.template import PLACEHOLDER_RE, ParsedTemplate, extract_variables

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Options for :func:`render_prompt`.

    Attributes:
        strict: Fail when context keys are never referenced by the template
        constraints: Guardrail rules appended after the rendered body
    """

    strict: bool = False
    constraints: PromptConstraints | None = None


def find_missing_variables(text: str, context: Mapping[str, str]) -> list[str]:
    """Placeholders in ``text`` whose value is UNSET or absent, sorted."""
    return [v for v in extract_variables(text) if context.get(v, UNSET) == UNSET]


def find_unused_variables(template: ParsedTemplate, context: Mapping[str, str]) -> list[str]:
    """Context keys the template never references anywhere, sorted."""
    used = set(template.all_variables)
    return sorted(key for key in context if key not in used)


def render_prompt(
    template: ParsedTemplate,
    context: Mapping[str, str],
    options: RenderOptions | None = None,
    *,
    strict: bool | None = None,
    constraints: PromptConstraints | None = None,
) -> str:
    """Render ``template`` against ``context``.

    Keyword arguments override the matching ``options`` fields.

    Raises:
        MissingVariableError: live placeholders resolved to UNSET
        UnusedVariableError: strict mode and the template skips context keys
    """
    options = options or RenderOptions()
    if strict is None:
        strict = options.strict
    if constraints is None:
        constraints = options.constraints

    name = template.display_name
    resolved = resolve_conditionals(template.source, context)

    missing = find_missing_variables(resolved, context)
    if missing:
        raise MissingVariableError(name, missing)

    if strict:
        unused = find_unused_variables(template, context)
        if unused:
            raise UnusedVariableError(name, unused)

    rendered = PLACEHOLDER_RE.sub(lambda m: context.get(m.group(1), ""), resolved)

    if constraints is not None:
        rendered = f"{rendered}\n\n{format_constraints(constraints)}"

    logger.debug(
        "prompt_rendered",
        template=name,
        strict=strict,
        constraints=constraints is not None,
        chars=len(rendered),
    )
    return rendered


__all__ = ["RenderOptions", "render_prompt", "find_missing_variables", "find_unused_variables"]
