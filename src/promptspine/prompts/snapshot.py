"""
Content-addressed prompt snapshots.

A snapshot is a rendered prompt stored under the hash of its own text::

    <base_dir>/<template name without extension>/<topic id>/<hash>.md

The file holds a ``key: value`` metadata header, a ``---`` line, and the
rendered text verbatim::

    hash: 3f2a9c0d11be
    templateName: deep-research.md
    templateVersion: 8d1e44a0b7c2
    topicId: turmeric_helps_redness
    gitCommit: 1a2b3c...
    gitBranch: main
    createdAt: 2025-01-01T00:00:00.000Z
    ---
    <rendered text>

Manifesto:
    - **Hash the text only:** metadata never participates in the hash, so
      the same prompt rendered on two machines gets the same address.
    - **Idempotent stores:** an existing hash file is never rewritten;
      concurrent writers of the same hash are indistinguishable.
    - **Tamper evidence without a reference:** :func:`verify_snapshot`
      recomputes the hash from the stored text. A mismatch is a result,
      not an exception.

The template version uses the same 12-character SHA-256 over the raw
template source. It is a separate identifier and never interchangeable
with a rendered-text hash.

Tags:
    snapshots, content-addressing, hashing, auditing, prompts
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from promptspine.core.errors import ErrorContext, SnapshotFormatError, SnapshotNotFoundError
from promptspine.core.hashing import compute_hash
from promptspine.core.logging import get_logger
from promptspine.core.timestamps import to_iso8601, utc_now

logger = get_logger(__name__)

DEFAULT_SNAPSHOT_DIR = "snapshots/prompts"
UNKNOWN = "unknown"
METADATA_SEPARATOR = "---"

_EXTENSION_RE = re.compile(r"\.[^.]+$")

_FIELDS = (
    ("hash", "hash"),
    ("template_name", "templateName"),
    ("template_version", "templateVersion"),
    ("topic_id", "topicId"),
    ("git_commit", "gitCommit"),
    ("git_branch", "gitBranch"),
    ("created_at", "createdAt"),
)


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class SnapshotMetadata:
    template_name: str
    template_version: str
    topic_id: str
    git_commit: str = UNKNOWN
    git_branch: str = UNKNOWN
    created_at: str = ""

    def to_dict(self) -> dict[str, str]:
        """camelCase keys, matching the on-disk header."""
        return {
            "templateName": self.template_name,
            "templateVersion": self.template_version,
            "topicId": self.topic_id,
            "gitCommit": self.git_commit,
            "gitBranch": self.git_branch,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True, slots=True)
class PromptSnapshot:
    hash: str
    rendered_text: str
    metadata: SnapshotMetadata


@dataclass(frozen=True, slots=True)
class SnapshotVerifyResult:
    valid: bool
    stored_hash: str
    computed_hash: str


# =============================================================================
# Hashing
# =============================================================================


def compute_prompt_hash(rendered_text: str) -> str:
    """12-char SHA-256 prefix of the rendered text."""
    return compute_hash(rendered_text)


def compute_template_version(template_source: str) -> str:
    """12-char SHA-256 prefix of the raw template source."""
    return compute_hash(template_source)


# =============================================================================
# Construction and serialization
# =============================================================================


def create_snapshot(
    rendered_text: str,
    template_name: str,
    template_version: str,
    topic_id: str,
    git_commit: str | None = None,
    git_branch: str | None = None,
    created_at: str | None = None,
) -> PromptSnapshot:
    """Hash ``rendered_text`` and attach metadata.

    Commit and branch default to ``"unknown"``; ``created_at`` defaults to
    the current UTC time in ISO-8601.
    """
    return PromptSnapshot(
        hash=compute_prompt_hash(rendered_text),
        rendered_text=rendered_text,
        metadata=SnapshotMetadata(
            template_name=template_name,
            template_version=template_version,
            topic_id=topic_id,
            git_commit=git_commit or UNKNOWN,
            git_branch=git_branch or UNKNOWN,
            created_at=created_at or to_iso8601(utc_now()),
        ),
    )


def serialize_snapshot(snapshot: PromptSnapshot) -> str:
    meta = snapshot.metadata
    values = {"hash": snapshot.hash, **{attr: getattr(meta, attr) for attr, _ in _FIELDS[1:]}}
    lines = [f"{key}: {values[attr]}" for attr, key in _FIELDS]
    lines.append(METADATA_SEPARATOR)
    lines.append(snapshot.rendered_text)
    return "\n".join(lines)


def deserialize_snapshot(content: str, path: str | None = None) -> PromptSnapshot:
    """Parse a snapshot file.

    Raises:
        SnapshotFormatError: missing separator or missing metadata field
    """
    separator = f"\n{METADATA_SEPARATOR}\n"
    index = content.find(separator)
    if index == -1:
        raise SnapshotFormatError(
            "Invalid snapshot file: missing metadata separator (---)",
            context=ErrorContext(path=path),
        )

    header = content[:index]
    rendered_text = content[index + len(separator) :]

    meta: dict[str, str] = {}
    for line in header.split("\n"):
        key, sep, value = line.partition(": ")
        if sep:
            meta[key.strip()] = value.strip()

    for _, key in _FIELDS:
        if not meta.get(key):
            raise SnapshotFormatError(
                f'Invalid snapshot file: missing metadata field "{key}"',
                context=ErrorContext(path=path),
            )

    return PromptSnapshot(
        hash=meta["hash"],
        rendered_text=rendered_text,
        metadata=SnapshotMetadata(
            template_name=meta["templateName"],
            template_version=meta["templateVersion"],
            topic_id=meta["topicId"],
            git_commit=meta["gitCommit"],
            git_branch=meta["gitBranch"],
            created_at=meta["createdAt"],
        ),
    )


# =============================================================================
# Store
# =============================================================================


def _template_dir(template_name: str) -> str:
    return _EXTENSION_RE.sub("", template_name)


def get_snapshot_path(
    template_name: str,
    topic_id: str,
    hash: str,
    base_dir: Path | str = DEFAULT_SNAPSHOT_DIR,
) -> Path:
    return Path(base_dir) / _template_dir(template_name) / topic_id / f"{hash}.md"


def store_snapshot(snapshot: PromptSnapshot, base_dir: Path | str = DEFAULT_SNAPSHOT_DIR) -> Path:
    """Write ``snapshot`` unless its hash file already exists. Returns the path."""
    path = get_snapshot_path(
        snapshot.metadata.template_name,
        snapshot.metadata.topic_id,
        snapshot.hash,
        base_dir,
    )
    if path.exists():
        logger.debug("snapshot_exists", hash=snapshot.hash, path=str(path))
        return path

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_snapshot(snapshot), encoding="utf-8", newline="")
    logger.debug("snapshot_stored", hash=snapshot.hash, path=str(path))
    return path


def load_snapshot(
    hash: str,
    template_name: str,
    topic_id: str,
    base_dir: Path | str = DEFAULT_SNAPSHOT_DIR,
) -> PromptSnapshot:
    """Load a stored snapshot by hash.

    Raises:
        SnapshotNotFoundError: no file for this (template, topic, hash)
        SnapshotFormatError: the file exists but cannot be decoded or parsed
    """
    path = get_snapshot_path(template_name, topic_id, hash, base_dir)
    if not path.exists():
        raise SnapshotNotFoundError(str(path)).with_context(
            template=template_name, topic_id=topic_id, snapshot_hash=hash
        )

    try:
        content = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise SnapshotFormatError(
            f"Invalid snapshot file: not valid UTF-8 ({e.reason} at byte {e.start})",
            context=ErrorContext(
                template=template_name, topic_id=topic_id, snapshot_hash=hash, path=str(path)
            ),
            cause=e,
        ) from e
    snapshot = deserialize_snapshot(content, path=str(path))
    logger.debug("snapshot_loaded", hash=hash, path=str(path))
    return snapshot


def list_snapshots(
    template_name: str,
    topic_id: str,
    base_dir: Path | str = DEFAULT_SNAPSHOT_DIR,
) -> list[str]:
    """Stored hashes for a (template, topic) pair, sorted. Empty if none."""
    directory = Path(base_dir) / _template_dir(template_name) / topic_id
    if not directory.is_dir():
        return []
    return sorted(p.stem for p in directory.iterdir() if p.suffix == ".md")


def verify_snapshot(snapshot: PromptSnapshot) -> SnapshotVerifyResult:
    """Recompute the hash from the stored text and compare."""
    computed = compute_prompt_hash(snapshot.rendered_text)
    return SnapshotVerifyResult(
        valid=computed == snapshot.hash,
        stored_hash=snapshot.hash,
        computed_hash=computed,
    )


__all__ = [
    "DEFAULT_SNAPSHOT_DIR",
    "SnapshotMetadata",
    "PromptSnapshot",
    "SnapshotVerifyResult",
    "compute_prompt_hash",
    "compute_template_version",
    "create_snapshot",
    "serialize_snapshot",
    "deserialize_snapshot",
    "get_snapshot_path",
    "store_snapshot",
    "load_snapshot",
    "list_snapshots",
    "verify_snapshot",
]
