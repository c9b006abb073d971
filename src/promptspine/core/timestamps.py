"""
UTC timestamp helpers and run identifiers (stdlib-only).

Run ids use the ``YYYYMMDD-xxxxxx`` shape (date prefix plus six random hex
characters). They are generated once by the caller and threaded through as
data; nothing here keeps a process-wide "current run".

STDLIB ONLY - NO PYDANTIC.
"""

import secrets
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso8601(dt: datetime | None) -> str | None:
    """Convert datetime to ISO 8601 string with a ``Z`` suffix for UTC."""
    if dt is None:
        return None
    text = dt.isoformat(timespec="milliseconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def from_iso8601(s: str | None) -> datetime | None:
    """Parse ISO 8601 string to datetime."""
    if s is None:
        return None
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def generate_run_id(now: datetime | None = None) -> str:
    """
    Generate a short, unique run id, e.g. ``20240115-a1b2c3``.

    Args:
        now: Timestamp for the date prefix (defaults to current UTC time)
    """
    moment = now or utc_now()
    return f"{moment.strftime('%Y%m%d')}-{secrets.token_hex(3)}"
