"""Unit tests for age formatting."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from mergeq.domain.age import UNKNOWN_AGE, format_age, parse_timestamp

pytestmark = pytest.mark.unit

NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


def _ago(seconds: int) -> str:
    return (NOW - timedelta(seconds=seconds)).strftime("%Y-%m-%dT%H:%M:%SZ")


class TestFormatAge:
    """Tests for format_age bucketing."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0s"),
            (42, "42s"),
            (59, "59s"),
            (60, "1m"),
            (3599, "59m"),
            (3600, "1h"),
            (86399, "23h"),
            (86400, "1d"),
            (3 * 86400 + 7200, "3d"),
        ],
    )
    def test_bucket_boundaries(self, seconds: int, expected: str) -> None:
        assert format_age(_ago(seconds), NOW) == expected

    def test_truncates_instead_of_rounding(self) -> None:
        # 119 seconds is 1.98 minutes
        assert format_age(_ago(119), NOW) == "1m"

    def test_five_minutes(self) -> None:
        assert format_age(_ago(300), NOW) == "5m"

    def test_rfc3339_with_offset(self) -> None:
        created = "2025-01-15T06:00:00-05:00"  # 11:00 UTC
        assert format_age(created, NOW) == "1h"

    def test_fractional_seconds(self) -> None:
        assert format_age("2025-01-15T11:59:30.123456Z", NOW) == "29s"

    def test_naive_timestamp_is_utc(self) -> None:
        assert format_age("2025-01-15T11:00:00", NOW) == "1h"

    def test_go_time_string_format(self) -> None:
        assert format_age("2025-01-15 11:30:00 +0000", NOW) == "30m"

    def test_naive_now_is_utc(self) -> None:
        assert format_age(_ago(90), NOW.replace(tzinfo=None)) == "1m"

    def test_future_timestamp_is_zero(self) -> None:
        future = (NOW + timedelta(minutes=5)).isoformat()
        assert format_age(future, NOW) == "0s"

    @pytest.mark.parametrize("value", ["", "yesterday", "2025-13-45T99:00:00Z"])
    def test_unparseable_returns_marker(self, value: str) -> None:
        assert format_age(value, NOW) == UNKNOWN_AGE


class TestParseTimestamp:
    def test_returns_aware_datetime(self) -> None:
        parsed = parse_timestamp("2025-01-15T10:00:00+02:00")
        assert parsed == datetime(2025, 1, 15, 10, tzinfo=timezone(timedelta(hours=2)))

    def test_invalid_returns_none(self) -> None:
        assert parse_timestamp("not a time") is None
