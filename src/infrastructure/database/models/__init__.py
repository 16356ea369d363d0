# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models."""

from src.infrastructure.database.models.base import Base, TimestampMixin
from src.infrastructure.database.models.gym import Enrollment, Plan, Student

__all__ = [
    "Base",
    "TimestampMixin",
    "Student",
    "Plan",
    "Enrollment",
]
