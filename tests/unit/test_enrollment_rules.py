# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for enrollment validation and pricing rules."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from src.domains.enrollment.exceptions import ErrorKind, InvalidInputError, PastDateError
from src.domains.enrollment.rules import derive_enrollment, parse_start_date
from src.infrastructure.database.models import Plan

UTC = timezone.utc


def make_plan(price, duration: int) -> Plan:
    return Plan(id=1, title="Plan", price=price, duration=duration)


class TestParseStartDate:
    """Tests for start date parsing."""

    def test_truncates_to_start_of_hour(self):
        """Minutes, seconds and microseconds are zeroed."""
        result = parse_start_date("2024-03-15T10:47:33Z")

        assert result == datetime(2024, 3, 15, 10, 0, 0, tzinfo=UTC)

    def test_truncates_fractional_seconds(self):
        result = parse_start_date("2024-03-15T10:47:33.123Z")

        assert result == datetime(2024, 3, 15, 10, 0, tzinfo=UTC)

    def test_naive_value_is_utc(self):
        result = parse_start_date("2024-03-15T10:47:33")

        assert result.tzinfo == UTC
        assert result.hour == 10

    def test_offset_is_converted_to_utc(self):
        result = parse_start_date("2024-03-15T10:47:00+03:00")

        assert result == datetime(2024, 3, 15, 7, 0, tzinfo=UTC)

    def test_date_only_is_midnight(self):
        result = parse_start_date("2024-01-31")

        assert result == datetime(2024, 1, 31, 0, 0, tzinfo=UTC)

    @pytest.mark.parametrize("raw", ["not-a-date", "2024-13-01", "", "   ", None, 20240101])
    def test_invalid_values_raise_invalid_input(self, raw):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_start_date(raw)

        assert exc_info.value.kind == ErrorKind.INVALID_INPUT


class TestDeriveEnrollment:
    """Tests for derive_enrollment."""

    def test_quarterly_plan_example(self):
        """129.90 x 3 months from 2024-01-10 09:00 UTC."""
        plan = make_plan(Decimal("129.90"), 3)
        now = datetime(2024, 1, 1, tzinfo=UTC)

        result = derive_enrollment("2024-01-10T09:00:00Z", plan, now)

        assert result.price == Decimal("389.70")
        assert result.start_date == datetime(2024, 1, 10, 9, 0, tzinfo=UTC)
        assert result.end_date == datetime(2024, 4, 10, 9, 0, tzinfo=UTC)

    def test_price_is_exact_decimal(self):
        plan = make_plan(Decimal("0.10"), 3)
        now = datetime(2024, 1, 1, tzinfo=UTC)

        result = derive_enrollment("2024-02-01T00:00:00Z", plan, now)

        assert isinstance(result.price, Decimal)
        assert result.price == Decimal("0.30")

    def test_float_price_does_not_drift(self):
        plan = make_plan(129.9, 3)
        now = datetime(2024, 1, 1, tzinfo=UTC)

        result = derive_enrollment("2024-02-01T00:00:00Z", plan, now)

        assert result.price == Decimal("389.7")

    def test_month_overflow_clamps_in_leap_year(self):
        plan = make_plan(Decimal("100"), 1)
        now = datetime(2024, 1, 1, tzinfo=UTC)

        result = derive_enrollment("2024-01-31", plan, now)

        assert result.end_date == datetime(2024, 2, 29, tzinfo=UTC)

    def test_month_overflow_clamps_in_common_year(self):
        plan = make_plan(Decimal("100"), 1)
        now = datetime(2022, 12, 1, tzinfo=UTC)

        result = derive_enrollment("2023-01-31", plan, now)

        assert result.end_date == datetime(2023, 2, 28, tzinfo=UTC)

    def test_end_date_crosses_year(self):
        plan = make_plan(Decimal("89.90"), 12)
        now = datetime(2024, 1, 1, tzinfo=UTC)

        result = derive_enrollment("2024-05-15T18:20:00Z", plan, now)

        assert result.end_date == datetime(2025, 5, 15, 18, 0, tzinfo=UTC)
        assert result.price == Decimal("1078.80")

    def test_past_date_rejected(self):
        plan = make_plan(Decimal("100"), 1)
        now = datetime(2024, 1, 10, 9, 0, tzinfo=UTC)

        with pytest.raises(PastDateError) as exc_info:
            derive_enrollment("2024-01-09T23:00:00Z", plan, now)

        assert exc_info.value.kind == ErrorKind.PAST_DATE

    def test_truncated_start_compared_to_now(self):
        """09:45 truncates to 09:00, which is before 09:30."""
        plan = make_plan(Decimal("100"), 1)
        now = datetime(2024, 1, 10, 9, 30, tzinfo=UTC)

        with pytest.raises(PastDateError):
            derive_enrollment("2024-01-10T09:45:00Z", plan, now)

    def test_start_equal_to_now_accepted(self):
        plan = make_plan(Decimal("100"), 1)
        now = datetime(2024, 1, 10, 9, 0, tzinfo=UTC)

        result = derive_enrollment("2024-01-10T09:59:59Z", plan, now)

        assert result.start_date == now

    def test_naive_now_is_utc(self):
        plan = make_plan(Decimal("100"), 1)

        result = derive_enrollment("2024-01-10T10:00:00Z", plan, datetime(2024, 1, 10, 9, 0))

        assert result.start_date == datetime(2024, 1, 10, 10, 0, tzinfo=UTC)

    def test_invalid_start_date_raises_before_past_check(self):
        plan = make_plan(Decimal("100"), 1)

        with pytest.raises(InvalidInputError):
            derive_enrollment("yesterday", plan, datetime(2024, 1, 1, tzinfo=UTC))

    @pytest.mark.parametrize("duration", [0, -1])
    def test_non_positive_duration_rejected(self, duration):
        plan = make_plan(Decimal("100"), duration)

        with pytest.raises(InvalidInputError):
            derive_enrollment("2024-02-01", plan, datetime(2024, 1, 1, tzinfo=UTC))

    def test_end_date_beyond_calendar_range_rejected(self):
        """A start in the last supported month cannot run past year 9999."""
        plan = make_plan(Decimal("10"), 1)

        with pytest.raises(InvalidInputError) as exc_info:
            derive_enrollment("9999-12-31T23:00:00Z", plan, datetime(2024, 1, 1, tzinfo=UTC))

        assert exc_info.value.details["duration"] == 1

    def test_start_date_overflowing_utc_rejected(self):
        plan = make_plan(Decimal("10"), 1)

        with pytest.raises(InvalidInputError):
            derive_enrollment(
                "9999-12-31T23:59:59-05:00", plan, datetime(2024, 1, 1, tzinfo=UTC)
            )

    def test_negative_price_rejected(self):
        plan = make_plan(Decimal("-1"), 1)

        with pytest.raises(InvalidInputError):
            derive_enrollment("2024-02-01", plan, datetime(2024, 1, 1, tzinfo=UTC))
