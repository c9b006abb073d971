"""Git metadata capture for snapshot provenance.

Reads the current commit and branch via ``subprocess`` calls. Outside a
repository, or without a ``git`` binary, ``capture_git_state`` returns
``None`` and callers fall back to the ``"unknown"`` sentinel.

Usage::

    from promptspine.core.git import capture_git_state

    state = capture_git_state()
    commit = state.commit if state else None
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from promptspine.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GitInfo:
    """Commit and branch of the working tree."""

    commit: str
    branch: str


def _git(args: list[str], repo_dir: Path | None) -> str:
    result = subprocess.run(
        ["git", *args],
        capture_output=True,
        cwd=str(repo_dir) if repo_dir else None,
        check=True,
        timeout=10,
    )
    return result.stdout.decode("utf-8", errors="replace").strip()


def capture_git_state(repo_dir: Path | None = None) -> GitInfo | None:
    """Return the current commit/branch, or ``None`` when git is unavailable."""
    try:
        commit = _git(["rev-parse", "HEAD"], repo_dir)
        branch = _git(["rev-parse", "--abbrev-ref", "HEAD"], repo_dir)
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("git_state_unavailable", error=str(e))
        return None
    return GitInfo(commit=commit, branch=branch)
