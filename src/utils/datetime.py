# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for the enrollment service.

All timestamps handled by the service are timezone-aware UTC datetimes.
Naive values coming from clients are assumed to already be in UTC.

Usage:
------
    from src.utils.datetime import utc_now, start_of_hour, add_months

    start = start_of_hour(parse_iso("2024-03-15T10:47:33Z"))
    end = add_months(start, 3)
"""

from datetime import datetime, timezone

from dateutil.relativedelta import relativedelta


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_iso(iso_string: str | None) -> datetime | None:
    """Parse an ISO 8601 date or datetime string.

    Date-only strings ("2024-01-31") resolve to midnight UTC.

    Args:
        iso_string: ISO 8601 formatted string.

    Returns:
        Timezone-aware UTC datetime or None.

    Raises:
        ValueError: If the string is not valid ISO 8601.
    """
    if iso_string is None:
        return None

    dt = datetime.fromisoformat(iso_string.strip().replace("Z", "+00:00"))
    return ensure_utc(dt)


def start_of_hour(dt: datetime) -> datetime:
    """Truncate a datetime to the start of its hour.

    Args:
        dt: Datetime to truncate.

    Returns:
        Same datetime with minutes, seconds and microseconds zeroed.
    """
    return dt.replace(minute=0, second=0, microsecond=0)


def add_months(dt: datetime, months: int) -> datetime:
    """Add calendar months to a datetime.

    The day of month is preserved where possible and clamped to the last
    valid day otherwise (Jan 31 + 1 month => Feb 28/29).

    Args:
        dt: Starting datetime.
        months: Number of months to add.

    Returns:
        Shifted datetime with the same time of day and tzinfo.
    """
    return dt + relativedelta(months=months)
