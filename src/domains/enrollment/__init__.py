# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides student plan enrollment functionality including:
- Start date validation and pricing rules
- Enrollment create, update, delete and listing
- Enrollment confirmation email
"""

from src.domains.enrollment.exceptions import (
    AlreadyEnrolledError,
    EnrollmentNotificationError,
    EnrollmentServiceError,
    ErrorKind,
    InvalidInputError,
    NotEnrolledError,
    PastDateError,
    PlanNotFoundError,
    StudentNotFoundError,
)
from src.domains.enrollment.notifier import EmailEnrollmentNotifier, EnrollmentNotifier
from src.domains.enrollment.repository import (
    EnrollmentRecord,
    EnrollmentRepository,
    SQLAlchemyEnrollmentRepository,
)
from src.domains.enrollment.rules import DerivedEnrollment, derive_enrollment
from src.domains.enrollment.service import EnrollmentService

__all__ = [
    "EnrollmentService",
    "derive_enrollment",
    "DerivedEnrollment",
    "EnrollmentRecord",
    "EnrollmentRepository",
    "SQLAlchemyEnrollmentRepository",
    "EnrollmentNotifier",
    "EmailEnrollmentNotifier",
    "ErrorKind",
    "EnrollmentServiceError",
    "InvalidInputError",
    "PastDateError",
    "AlreadyEnrolledError",
    "StudentNotFoundError",
    "PlanNotFoundError",
    "NotEnrolledError",
    "EnrollmentNotificationError",
]
