# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment request and response models.

Requests carry only the fields a client may choose. end_date and price
are always derived on the server and appear in responses only.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class EnrollmentRequest(BaseModel):
    """Payload for creating or replacing a student's enrollment."""

    student_id: int = Field(gt=0, description="Student identifier")
    plan_id: int = Field(gt=0, description="Plan identifier")
    start_date: str = Field(min_length=1, description="ISO 8601 start date")


class StudentSummary(BaseModel):
    """Student projection embedded in enrollment listings."""

    id: int
    name: str
    email: str


class PlanSummary(BaseModel):
    """Plan projection embedded in enrollment listings."""

    id: int
    title: str
    duration: int


class EnrollmentResponse(BaseModel):
    """A stored enrollment."""

    id: int
    student_id: int
    plan_id: int
    start_date: datetime
    end_date: datetime
    price: Decimal


class EnrollmentListItem(EnrollmentResponse):
    """A stored enrollment with its student and plan."""

    student: StudentSummary | None = None
    plan: PlanSummary | None = None


class ErrorResponse(BaseModel):
    """Error body returned by enrollment endpoints."""

    detail: str
