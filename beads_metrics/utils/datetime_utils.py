#!/usr/bin/env python3
"""
Datetime Utility Functions

Centralized datetime parsing and bucket arithmetic for the metrics engine.

Instants are carried internally as integer epoch milliseconds so that
day/hour math is exact and never depends on DST or the local timezone:
- ISO 8601 parsing (with or without 'Z', date-only accepted)
- Naive datetimes are treated as UTC
- Fixed-length 24h days
- Bucket alignment and sortable bucket labels
"""

from datetime import UTC, datetime, timedelta

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


def ensure_utc(value: datetime) -> datetime:
    """
    Return a timezone-aware datetime, treating naive values as UTC.

    Examples:
        >>> ensure_utc(datetime(2024, 1, 1))
        datetime.datetime(2024, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def parse_iso_timestamp(timestamp_str: str | None) -> datetime | None:
    """
    Parse an ISO 8601 timestamp into a timezone-aware datetime.

    Handles the formats beads writes and a few common variants:
    - "2026-02-10T10:00:00Z" (UTC with Z)
    - "2026-02-10T10:00:00.123456789-08:00" (nanosecond fractions are truncated)
    - "2026-02-10T10:00:00" (naive, treated as UTC)
    - "2026-02-10" (date only, midnight UTC)

    Args:
        timestamp_str: ISO 8601 timestamp string, or None

    Returns:
        Timezone-aware datetime, or None if input is None or empty

    Raises:
        ValueError: If timestamp format is invalid

    Examples:
        >>> parse_iso_timestamp("2026-02-10T10:00:00Z")
        datetime.datetime(2026, 2, 10, 10, 0, tzinfo=datetime.timezone.utc)

        >>> parse_iso_timestamp(None)
    """
    if not timestamp_str:
        return None

    if not isinstance(timestamp_str, str):
        raise ValueError(f"Timestamp must be a string, got {type(timestamp_str)}")

    normalized = timestamp_str.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    normalized = _truncate_fraction(normalized)

    try:
        return ensure_utc(datetime.fromisoformat(normalized))
    except ValueError as e:
        raise ValueError(f"Invalid ISO timestamp format: {timestamp_str}") from e


def _truncate_fraction(value: str) -> str:
    # fromisoformat rejects more than 6 fractional digits
    if "." not in value:
        return value

    head, _, rest = value.partition(".")
    digits = len(rest) - len(rest.lstrip("0123456789"))
    if digits <= 6:
        return value
    return f"{head}.{rest[:6]}{rest[digits:]}"


def to_epoch_ms(value: datetime) -> int:
    """
    Convert a datetime to integer epoch milliseconds (naive values are UTC).

    Examples:
        >>> to_epoch_ms(datetime(1970, 1, 2, tzinfo=UTC))
        86400000
    """
    return (ensure_utc(value) - _EPOCH) // _ONE_MS


def from_epoch_ms(epoch_ms: int) -> datetime:
    """Convert epoch milliseconds back to a UTC datetime."""
    return _EPOCH + timedelta(milliseconds=epoch_ms)


def floor_units(duration_ms: int, unit_ms: int) -> int:
    """
    Whole units elapsed, rounded down.

    Examples:
        >>> floor_units(36 * 3600 * 1000, 24 * 3600 * 1000)
        1
    """
    return duration_ms // unit_ms


def ceil_units(duration_ms: int, unit_ms: int) -> int:
    """
    Whole units elapsed, rounded up.

    Examples:
        >>> ceil_units(36 * 3600 * 1000, 24 * 3600 * 1000)
        2
    """
    return -(-duration_ms // unit_ms)


def bucket_start(epoch_ms: int, bucket_ms: int) -> int:
    """
    Start of the bucket containing an instant.

    Buckets are aligned to multiples of the bucket width since the epoch,
    so daily buckets start at midnight UTC and 4-hour buckets at 00, 04, 08...
    """
    return (epoch_ms // bucket_ms) * bucket_ms


def format_bucket_label(epoch_ms: int, daily: bool) -> str:
    """
    Sortable label for a bucket start.

    Args:
        epoch_ms: Bucket start in epoch milliseconds
        daily: True for day buckets ("YYYY-MM-DD"), False for sub-day buckets ("YYYY-MM-DD HH:00")

    Examples:
        >>> format_bucket_label(0, daily=True)
        '1970-01-01'
        >>> format_bucket_label(4 * 3600 * 1000, daily=False)
        '1970-01-01 04:00'
    """
    moment = from_epoch_ms(epoch_ms)
    if daily:
        return moment.strftime("%Y-%m-%d")
    return moment.strftime("%Y-%m-%d %H:00")
