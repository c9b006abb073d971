"""
prompt-spine: deterministic, auditable prompt rendering for topic research.

Packages:
    core      errors, hashing, timestamps, logging, settings, git metadata
    domain    topics, research specifications, content standards, SEO guidelines
    prompts   context, templates, conditionals, rendering, constraints, snapshots, diff
    cli       ``prompt-spine`` command line (typer + rich)
"""

__version__ = "0.1.0"
