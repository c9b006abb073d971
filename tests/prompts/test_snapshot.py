"""
Tests for promptspine.prompts.snapshot.

Tests cover:
- Hash depends on rendered text only
- Integrity verification detects tampering
- Store layout, idempotence, load and list
- On-disk format parsing errors
"""

import pytest

from promptspine.core.errors import SnapshotFormatError, SnapshotNotFoundError
from promptspine.prompts.snapshot import (
    PromptSnapshot,
    compute_prompt_hash,
    compute_template_version,
    create_snapshot,
    deserialize_snapshot,
    get_snapshot_path,
    list_snapshots,
    load_snapshot,
    serialize_snapshot,
    store_snapshot,
    verify_snapshot,
)

CREATED_AT = "2025-01-01T12:00:00.000Z"


def _snapshot(text="Rendered prompt\n", **kwargs):
    defaults = dict(
        template_name="deep-research.md",
        template_version="0123456789ab",
        topic_id="dairy_harms_acne",
        created_at=CREATED_AT,
    )
    defaults.update(kwargs)
    return create_snapshot(text, **defaults)


class TestHashing:
    """Test content addressing."""

    def test_hash_is_twelve_hex_chars(self):
        assert len(compute_prompt_hash("x")) == 12

    def test_metadata_never_changes_hash(self):
        a = _snapshot(git_commit="aaa", git_branch="main")
        b = _snapshot(template_name="other.md", topic_id="other", created_at="2030-01-01T00:00:00.000Z")
        assert a.hash == b.hash == compute_prompt_hash("Rendered prompt\n")

    def test_trailing_newline_changes_hash(self):
        assert _snapshot("text").hash != _snapshot("text\n").hash

    def test_template_version_is_independent(self):
        assert compute_template_version("{{topic.id}}") == compute_prompt_hash("{{topic.id}}")
        assert compute_template_version("{{topic.id}}") != compute_template_version("{{topic.name}}")


class TestCreateSnapshot:
    """Test create_snapshot()."""

    def test_git_defaults_to_unknown(self):
        meta = _snapshot().metadata
        assert meta.git_commit == "unknown"
        assert meta.git_branch == "unknown"

    def test_created_at_defaults_to_now(self):
        snap = create_snapshot("x", "t.md", "v", "topic")
        assert snap.metadata.created_at.endswith("Z")

    def test_metadata_to_dict(self):
        assert _snapshot().metadata.to_dict()["topicId"] == "dairy_harms_acne"


class TestVerifySnapshot:
    """Test integrity verification."""

    def test_fresh_snapshot_valid(self):
        result = verify_snapshot(_snapshot())
        assert result.valid
        assert result.stored_hash == result.computed_hash

    def test_tampered_text_detected(self):
        snap = _snapshot()
        tampered = PromptSnapshot(hash=snap.hash, rendered_text=snap.rendered_text + "!", metadata=snap.metadata)
        result = verify_snapshot(tampered)
        assert not result.valid
        assert result.stored_hash == snap.hash
        assert result.computed_hash != snap.hash


class TestSerialization:
    """Test the on-disk format."""

    def test_header_then_verbatim_text(self):
        snap = _snapshot("line one\r\nline two\n---\nstill text")
        content = serialize_snapshot(snap)
        assert content.startswith(f"hash: {snap.hash}\ntemplateName: deep-research.md\n")
        assert deserialize_snapshot(content) == snap

    def test_missing_separator(self):
        with pytest.raises(SnapshotFormatError, match="missing metadata separator"):
            deserialize_snapshot("hash: abc\nno separator here")

    def test_missing_field(self):
        content = serialize_snapshot(_snapshot()).replace("gitBranch: unknown\n", "")
        with pytest.raises(SnapshotFormatError, match='missing metadata field "gitBranch"'):
            deserialize_snapshot(content)


class TestStore:
    """Test store/load/list against a temporary directory."""

    def test_layout(self, tmp_path):
        snap = _snapshot()
        path = store_snapshot(snap, tmp_path)
        assert path == tmp_path / "deep-research" / "dairy_harms_acne" / f"{snap.hash}.md"
        assert path == get_snapshot_path("deep-research.md", "dairy_harms_acne", snap.hash, tmp_path)
        assert path.exists()

    def test_idempotent(self, tmp_path):
        snap = _snapshot()
        path = store_snapshot(snap, tmp_path)
        before = path.read_bytes()
        again = store_snapshot(_snapshot(git_commit="different"), tmp_path)
        assert again == path
        assert path.read_bytes() == before

    def test_load_round_trip_preserves_line_endings(self, tmp_path):
        snap = _snapshot("windows\r\nline endings\r\n")
        store_snapshot(snap, tmp_path)
        loaded = load_snapshot(snap.hash, "deep-research.md", "dairy_harms_acne", tmp_path)
        assert loaded == snap
        assert verify_snapshot(loaded).valid

    def test_load_missing(self, tmp_path):
        with pytest.raises(SnapshotNotFoundError) as exc_info:
            load_snapshot("000000000000", "deep-research.md", "dairy_harms_acne", tmp_path)
        assert exc_info.value.context.snapshot_hash == "000000000000"
        assert exc_info.value.context.topic_id == "dairy_harms_acne"

    def test_load_detects_on_disk_tampering(self, tmp_path):
        snap = _snapshot()
        path = store_snapshot(snap, tmp_path)
        path.write_text(path.read_text(encoding="utf-8") + "edited", encoding="utf-8")
        loaded = load_snapshot(snap.hash, "deep-research.md", "dairy_harms_acne", tmp_path)
        assert not verify_snapshot(loaded).valid

    def test_load_invalid_utf8_is_format_error(self, tmp_path):
        snap = _snapshot()
        path = store_snapshot(snap, tmp_path)
        path.write_bytes(path.read_bytes().replace(b"Rendered", b"Render\xff"))
        with pytest.raises(SnapshotFormatError, match="not valid UTF-8") as exc_info:
            load_snapshot(snap.hash, "deep-research.md", "dairy_harms_acne", tmp_path)
        assert exc_info.value.context.path == str(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_list(self, tmp_path):
        hashes = sorted(store_snapshot(_snapshot(t), tmp_path).stem for t in ("a", "b", "c"))
        assert list_snapshots("deep-research.md", "dairy_harms_acne", tmp_path) == hashes

    def test_list_missing_directory_is_empty(self, tmp_path):
        assert list_snapshots("deep-research.md", "nobody", tmp_path) == []
