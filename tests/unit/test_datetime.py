# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for datetime helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from src.utils.datetime import (
    add_months,
    ensure_utc,
    parse_iso,
    start_of_hour,
    utc_now,
)

UTC = timezone.utc


def test_utc_now_is_aware():
    assert utc_now().tzinfo == UTC


class TestEnsureUtc:
    def test_none(self):
        assert ensure_utc(None) is None

    def test_naive_assumed_utc(self):
        assert ensure_utc(datetime(2024, 1, 1, 12)) == datetime(2024, 1, 1, 12, tzinfo=UTC)

    def test_aware_converted(self):
        value = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=-3)))

        assert ensure_utc(value) == datetime(2024, 1, 1, 15, tzinfo=UTC)


class TestParseIso:
    def test_zulu_suffix(self):
        assert parse_iso("2024-01-10T09:00:00Z") == datetime(2024, 1, 10, 9, tzinfo=UTC)

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_iso("10/01/2024")


def test_start_of_hour():
    value = datetime(2024, 1, 10, 9, 59, 59, 999999, tzinfo=UTC)

    assert start_of_hour(value) == datetime(2024, 1, 10, 9, tzinfo=UTC)


class TestAddMonths:
    @pytest.mark.parametrize(
        ("start", "months", "expected"),
        [
            (datetime(2024, 1, 10, 9), 3, datetime(2024, 4, 10, 9)),
            (datetime(2024, 1, 31), 1, datetime(2024, 2, 29)),
            (datetime(2023, 1, 31), 1, datetime(2023, 2, 28)),
            (datetime(2024, 3, 31), 1, datetime(2024, 4, 30)),
            (datetime(2024, 11, 15), 3, datetime(2025, 2, 15)),
        ],
    )
    def test_calendar_months(self, start, months, expected):
        assert add_months(start, months) == expected

    def test_preserves_tzinfo(self):
        value = datetime(2024, 1, 10, 9, tzinfo=UTC)

        assert add_months(value, 1).tzinfo == UTC
