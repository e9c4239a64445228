"""Coarse human-readable ages for queue listings."""

from __future__ import annotations

from datetime import UTC, datetime

# Returned when a timestamp cannot be parsed
UNKNOWN_AGE = "?"

# Explicit formats tried after ISO 8601 parsing fails
_FALLBACK_FORMATS = (
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%d %H:%M:%S %z",
)


def parse_timestamp(value: str) -> datetime | None:
    """Parse a store timestamp, returning an aware datetime or None.

    Accepts RFC 3339 / ISO 8601 (with ``Z`` or an offset) and the fallback
    formats above. Naive values are taken as UTC.
    """
    if not value:
        return None
    text = value.strip()
    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _FALLBACK_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_duration(seconds: int) -> str:
    """Bucket a duration in whole seconds into s/m/h/d, truncating."""
    seconds = max(seconds, 0)
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def format_age(timestamp: str, now: datetime) -> str:
    """Format the time elapsed between ``timestamp`` and ``now``.

    Returns UNKNOWN_AGE when the timestamp does not parse. Timestamps in
    the future are reported as ``0s``.
    """
    created = parse_timestamp(timestamp)
    if created is None:
        return UNKNOWN_AGE
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    elapsed = now - created
    return format_duration(int(elapsed.total_seconds()))
