# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment validation and pricing rules.

derive_enrollment() turns a raw start date and a plan into the stored
enrollment fields. It performs no I/O; the current instant is passed in.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Protocol

from src.domains.enrollment.exceptions import InvalidInputError, PastDateError
from src.utils.datetime import add_months, ensure_utc, parse_iso, start_of_hour


class PlanTerms(Protocol):
    """Pricing terms of a plan: monthly price and duration in months."""

    price: Decimal
    duration: int


@dataclass(frozen=True)
class DerivedEnrollment:
    """Enrollment fields computed from the start date and plan.

    Attributes:
        start_date: Requested start truncated to the hour (UTC).
        end_date: start_date plus the plan duration in calendar months.
        price: Monthly plan price multiplied by the duration.
    """

    start_date: datetime
    end_date: datetime
    price: Decimal


def parse_start_date(start_date_raw: str) -> datetime:
    """Parse a client-supplied start date and truncate it to the hour.

    Raises:
        InvalidInputError: If the value is not an ISO 8601 date or datetime.
    """
    if not isinstance(start_date_raw, str) or not start_date_raw.strip():
        raise InvalidInputError(
            "Validation fails",
            details={"start_date": "required ISO 8601 date"},
        )

    try:
        parsed = parse_iso(start_date_raw)
    except (ValueError, OverflowError) as e:
        raise InvalidInputError(
            "Validation fails",
            details={"start_date": str(e)},
        ) from e

    return start_of_hour(parsed)


def _plan_price(plan: PlanTerms) -> Decimal:
    price = plan.price
    if isinstance(price, float):
        # str() keeps the shortest repr, e.g. 129.9 -> "129.9"
        price = str(price)
    try:
        value = Decimal(price)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidInputError("Invalid plan price", details={"price": price}) from e

    if not value.is_finite() or value < 0:
        raise InvalidInputError("Invalid plan price", details={"price": str(value)})
    return value


def _plan_duration(plan: PlanTerms) -> int:
    duration = plan.duration
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise InvalidInputError("Invalid plan duration", details={"duration": duration})
    return duration


def derive_enrollment(
    start_date_raw: str,
    plan: PlanTerms,
    now: datetime,
) -> DerivedEnrollment:
    """Validate a start date against a plan and derive enrollment fields.

    Args:
        start_date_raw: ISO 8601 start date as sent by the client.
        plan: Plan providing price and duration.
        now: Current instant; naive values are taken as UTC.

    Returns:
        DerivedEnrollment with start_date, end_date and price.

    Raises:
        InvalidInputError: If the start date or plan terms are malformed,
            or the end date falls outside the supported calendar range.
        PastDateError: If the truncated start date is before now.
    """
    start_date = parse_start_date(start_date_raw)

    if start_date < ensure_utc(now):
        raise PastDateError(
            "Past dates are not permitted",
            details={"start_date": start_date.isoformat()},
        )

    duration = _plan_duration(plan)
    price = _plan_price(plan) * duration

    try:
        end_date = add_months(start_date, duration)
    except (ValueError, OverflowError) as e:
        raise InvalidInputError(
            "Validation fails",
            details={"start_date": start_date_raw, "duration": duration},
        ) from e

    return DerivedEnrollment(
        start_date=start_date,
        end_date=end_date,
        price=price,
    )
