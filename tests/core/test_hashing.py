"""
Tests for promptspine.core.hashing module.

Tests cover:
- Deterministic hash computation
- Hash length options
- Sensitivity to single-character and trailing-newline changes
"""

import hashlib

from promptspine.core.hashing import HASH_LENGTH, compute_hash


class TestComputeHash:
    """Tests for compute_hash function."""

    def test_default_length(self):
        result = compute_hash("hello")
        assert len(result) == HASH_LENGTH == 12
        assert all(c in "0123456789abcdef" for c in result)

    def test_matches_sha256_prefix(self):
        assert compute_hash("hello") == hashlib.sha256(b"hello").hexdigest()[:12]

    def test_deterministic(self):
        assert compute_hash("same text") == compute_hash("same text")

    def test_single_character_changes_hash(self):
        assert compute_hash("abc") != compute_hash("abd")

    def test_trailing_newline_changes_hash(self):
        assert compute_hash("text") != compute_hash("text\n")

    def test_unicode_is_utf8_encoded(self):
        text = "café ☕"
        assert compute_hash(text) == hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]

    def test_custom_length(self):
        assert len(compute_hash("value", length=32)) == 32
