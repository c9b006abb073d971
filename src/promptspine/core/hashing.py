"""
Deterministic content hashing for rendered prompts and template sources.

Provides a single stable hash function used for two independent identifiers:
the rendered-prompt hash (snapshot identity) and the template version (hash of
raw template source). The two share an algorithm but are never
interchangeable.

Manifesto:
    A prompt snapshot is only trustworthy if its identifier is a pure
    function of its content:
    - **Deterministic:** Same text always produces the same hash
    - **Sensitive:** Any single-character change, including a trailing
      newline, produces a different hash
    - **Content-only:** Metadata (timestamps, commits, run ids) never
      participates
    - **Readable:** 12 hex characters (48 bits) fit in filenames and logs

Examples:
    >>> compute_hash("Study turmeric.") == compute_hash("Study turmeric.")
    True
    >>> compute_hash("Study turmeric.") == compute_hash("Study turmeric.\\n")
    False
    >>> len(compute_hash("anything"))
    12

Tags:
    hashing, content-addressing, determinism, prompt-spine

Doc-Types:
    - API Reference
"""

import hashlib

HASH_LENGTH = 12


def compute_hash(text: str, length: int = HASH_LENGTH) -> str:
    """
    Compute a SHA-256 hex digest of ``text`` truncated to ``length`` chars.

    The text is encoded as UTF-8 verbatim; no normalization (whitespace,
    line endings) is applied.

    Args:
        text: Content to hash
        length: Hex digest length (default 12 = 48 bits)

    Returns:
        Lowercase hex string of the requested length
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:length]
