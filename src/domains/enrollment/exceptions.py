# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions for enrollment operations.

This module defines the exception hierarchy for enrollments:
- EnrollmentServiceError: Base exception, carries an ErrorKind
- InvalidInputError: Malformed payload or start date
- PastDateError: Start date before the current instant
- AlreadyEnrolledError: Student already has an enrollment
- StudentNotFoundError / PlanNotFoundError: Unknown references
- NotEnrolledError: Student has no enrollment to update or delete
- EnrollmentNotificationError: Confirmation could not be delivered

The API layer maps ErrorKind values to HTTP status codes; nothing here
knows about HTTP.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Client-facing enrollment failure categories."""

    INVALID_INPUT = "invalid_input"
    PAST_DATE = "past_date"
    ALREADY_ENROLLED = "already_enrolled"
    STUDENT_NOT_FOUND = "student_not_found"
    PLAN_NOT_FOUND = "plan_not_found"
    NOT_ENROLLED = "not_enrolled"


class EnrollmentServiceError(Exception):
    """Base exception for enrollment errors.

    Attributes:
        kind: Failure category of this error class.
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    kind: ErrorKind = ErrorKind.INVALID_INPUT
    default_message = "Validation fails"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        """Initialize enrollment error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class InvalidInputError(EnrollmentServiceError):
    """Raised when the payload or start date is malformed."""

    kind = ErrorKind.INVALID_INPUT
    default_message = "Validation fails"


class PastDateError(EnrollmentServiceError):
    """Raised when the start date is before the current instant."""

    kind = ErrorKind.PAST_DATE
    default_message = "Past dates are not permitted"


class AlreadyEnrolledError(EnrollmentServiceError):
    """Raised when the student already has an enrollment."""

    kind = ErrorKind.ALREADY_ENROLLED
    default_message = "Student already has an enrollment"


class StudentNotFoundError(EnrollmentServiceError):
    """Raised when the student is not found."""

    kind = ErrorKind.STUDENT_NOT_FOUND
    default_message = "Student not found"


class PlanNotFoundError(EnrollmentServiceError):
    """Raised when the plan is not found."""

    kind = ErrorKind.PLAN_NOT_FOUND
    default_message = "Plan not found"


class NotEnrolledError(EnrollmentServiceError):
    """Raised when the student has no enrollment."""

    kind = ErrorKind.NOT_ENROLLED
    default_message = "The student does not have an enrollment"


class EnrollmentNotificationError(Exception):
    """Raised when an enrollment confirmation could not be delivered.

    Not an EnrollmentServiceError: the enrollment itself succeeded.
    """

    pass
