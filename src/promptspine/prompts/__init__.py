"""
Prompt core: context, templates, conditionals, rendering, constraints,
snapshots and diffing.

Architecture::

    Topic ─┬─► build_prompt_context ──► PromptContext ─┐
           │                                           ├─► render_prompt ─► text
           └─► build_prompt_constraints ─► Constraints ┘        │
                                                                 ▼
    template file ─► PromptTemplateLoader ─► ParsedTemplate   create_snapshot
                                                               store/load/verify
                                                               compute_diff

Examples:
    >>> loader = PromptTemplateLoader("prompts")
    >>> template = loader.load("deep-research.md")
    >>> ctx = build_prompt_context(topic, specification)
    >>> text = render_prompt(template, ctx, constraints=build_prompt_constraints(topic, specification))
"""

from promptspine.prompts.conditional import (
    ENUM_VALUES,
    ConditionalBlock,
    ConditionalOperator,
    evaluate_condition,
    get_enum_values,
    parse_conditional_blocks,
    resolve_conditionals,
)
from promptspine.prompts.constraints import (
    ConstraintRule,
    PromptConstraints,
    build_prompt_constraints,
    count_constraints,
    format_constraints,
)
from promptspine.prompts.context import (
    UNSET,
    VALID_VARIABLES,
    PromptContext,
    PromptVariable,
    build_prompt_context,
    get_valid_variables,
    is_unset,
    is_valid_variable,
)
from promptspine.prompts.diff import (
    DiffLine,
    DiffLineType,
    DiffResult,
    compute_diff,
    format_diff,
    normalize_for_diff,
)
from promptspine.prompts.loader import PromptTemplateLoader
from promptspine.prompts.renderer import RenderOptions, render_prompt
from promptspine.prompts.snapshot import (
    DEFAULT_SNAPSHOT_DIR,
    PromptSnapshot,
    SnapshotMetadata,
    SnapshotVerifyResult,
    compute_prompt_hash,
    compute_template_version,
    create_snapshot,
    get_snapshot_path,
    list_snapshots,
    load_snapshot,
    store_snapshot,
    verify_snapshot,
)
from promptspine.prompts.template import ParsedTemplate, extract_variables, parse_template

__all__ = [
    # context
    "UNSET",
    "VALID_VARIABLES",
    "PromptContext",
    "PromptVariable",
    "build_prompt_context",
    "get_valid_variables",
    "is_unset",
    "is_valid_variable",
    # templates
    "ParsedTemplate",
    "extract_variables",
    "parse_template",
    "PromptTemplateLoader",
    # conditionals
    "ENUM_VALUES",
    "ConditionalBlock",
    "ConditionalOperator",
    "evaluate_condition",
    "get_enum_values",
    "parse_conditional_blocks",
    "resolve_conditionals",
    # rendering
    "RenderOptions",
    "render_prompt",
    # constraints
    "ConstraintRule",
    "PromptConstraints",
    "build_prompt_constraints",
    "count_constraints",
    "format_constraints",
    # snapshots
    "DEFAULT_SNAPSHOT_DIR",
    "PromptSnapshot",
    "SnapshotMetadata",
    "SnapshotVerifyResult",
    "compute_prompt_hash",
    "compute_template_version",
    "create_snapshot",
    "get_snapshot_path",
    "list_snapshots",
    "load_snapshot",
    "store_snapshot",
    "verify_snapshot",
    # diff
    "DiffLine",
    "DiffLineType",
    "DiffResult",
    "compute_diff",
    "format_diff",
    "normalize_for_diff",
]
