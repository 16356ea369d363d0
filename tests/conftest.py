# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from src.infrastructure.database.models import Enrollment, Plan, Student


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def fixed_now() -> datetime:
    """Current instant used by clock-dependent tests."""
    return datetime(2024, 1, 1, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def sample_student() -> Student:
    """Provide a sample student."""
    return Student(id=1, name="Maria Silva", email="maria@example.com")


@pytest.fixture
def sample_plan() -> Plan:
    """Provide a sample quarterly plan."""
    return Plan(id=3, title="Trimestral", duration=3, price=Decimal("129.90"))


@pytest.fixture
def sample_enrollment(sample_student: Student, sample_plan: Plan) -> Enrollment:
    """Provide a stored enrollment for the sample student and plan."""
    enrollment = Enrollment(
        id=10,
        student_id=sample_student.id,
        plan_id=sample_plan.id,
        start_date=datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc),
        end_date=datetime(2024, 4, 10, 9, 0, tzinfo=timezone.utc),
        price=Decimal("389.70"),
    )
    return enrollment
