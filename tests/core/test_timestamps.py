"""Tests for promptspine.core.timestamps module."""

import re
from datetime import UTC, datetime

from promptspine.core.timestamps import from_iso8601, generate_run_id, to_iso8601, utc_now


class TestIso8601:
    """Test ISO-8601 helpers."""

    def test_utc_now_is_aware(self):
        assert utc_now().tzinfo is not None

    def test_to_iso8601_uses_z_suffix_and_milliseconds(self):
        dt = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=UTC)
        assert to_iso8601(dt) == "2024-01-15T10:30:00.123Z"

    def test_none_passthrough(self):
        assert to_iso8601(None) is None
        assert from_iso8601(None) is None

    def test_round_trip(self):
        dt = datetime(2024, 1, 15, 10, 30, 0, tzinfo=UTC)
        assert from_iso8601(to_iso8601(dt)) == dt


class TestGenerateRunId:
    """Test run id generation."""

    def test_format(self):
        assert re.fullmatch(r"\d{8}-[0-9a-f]{6}", generate_run_id())

    def test_date_prefix_from_now(self):
        run_id = generate_run_id(datetime(2024, 1, 15, tzinfo=UTC))
        assert run_id.startswith("20240115-")

    def test_unique(self):
        assert len({generate_run_id() for _ in range(50)}) > 1
