# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment API endpoints.

This module provides endpoints for student plan enrollments:
- GET / - List enrollments with student and plan
- POST / - Enroll a student in a plan
- PUT / - Replace a student's enrollment
- DELETE /{student_id} - Remove a student's enrollment

Status codes follow the gym API convention: malformed input and past
dates are 400, enrollment state and reference failures are 401.
"""

import logging

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_enrollment_service
from src.domains.enrollment import EnrollmentService, EnrollmentServiceError, ErrorKind
from src.models.enrollment import (
    EnrollmentListItem,
    EnrollmentRequest,
    EnrollmentResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PAST_DATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ALREADY_ENROLLED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.STUDENT_NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.PLAN_NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_ENROLLED: status.HTTP_401_UNAUTHORIZED,
}

ERROR_RESPONSES: dict[int | str, dict] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
}


def _to_http_exception(error: EnrollmentServiceError) -> HTTPException:
    """Map an enrollment error to its HTTP response."""
    logger.info("Enrollment request rejected: kind=%s, message=%s", error.kind.value, error.message)
    return HTTPException(
        status_code=ERROR_STATUS_CODES.get(error.kind, status.HTTP_400_BAD_REQUEST),
        detail=error.message,
    )


@router.get(
    "",
    response_model=list[EnrollmentListItem],
    summary="List enrollments",
    description="List all enrollments with student and plan details.",
)
async def list_enrollments(
    service: EnrollmentService = Depends(get_enrollment_service),
) -> list[EnrollmentListItem]:
    """List all enrollments."""
    return await service.list_enrollments()


@router.post(
    "",
    response_model=EnrollmentResponse,
    responses=ERROR_RESPONSES,
    summary="Enroll student",
    description="Enroll a student in a plan and send a confirmation email.",
)
async def create_enrollment(
    data: EnrollmentRequest,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> EnrollmentResponse:
    """Enroll a student in a plan.

    Args:
        data: Enrollment request.
        service: Enrollment service.

    Returns:
        The stored enrollment.

    Raises:
        HTTPException: If validation or an enrollment rule fails.
    """
    with structlog.contextvars.bound_contextvars(
        student_id=data.student_id,
        plan_id=data.plan_id,
    ):
        logger.info("Enrolling student")
        try:
            return await service.create_enrollment(
                student_id=data.student_id,
                plan_id=data.plan_id,
                start_date_raw=data.start_date,
            )
        except EnrollmentServiceError as e:
            raise _to_http_exception(e) from e


@router.put(
    "",
    response_model=EnrollmentResponse,
    responses=ERROR_RESPONSES,
    summary="Update enrollment",
    description="Replace the plan and start date of a student's enrollment.",
)
async def update_enrollment(
    data: EnrollmentRequest,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> EnrollmentResponse:
    """Replace a student's enrollment.

    Raises:
        HTTPException: If validation or an enrollment rule fails.
    """
    with structlog.contextvars.bound_contextvars(
        student_id=data.student_id,
        plan_id=data.plan_id,
    ):
        try:
            return await service.update_enrollment(
                student_id=data.student_id,
                plan_id=data.plan_id,
                start_date_raw=data.start_date,
            )
        except EnrollmentServiceError as e:
            raise _to_http_exception(e) from e


@router.delete(
    "/{student_id}",
    response_model=EnrollmentResponse,
    responses=ERROR_RESPONSES,
    summary="Remove enrollment",
    description="Remove a student's enrollment and return it.",
)
async def delete_enrollment(
    student_id: int,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> EnrollmentResponse:
    """Remove a student's enrollment.

    Raises:
        HTTPException: If the student has no enrollment.
    """
    with structlog.contextvars.bound_contextvars(student_id=student_id):
        try:
            return await service.delete_enrollment(student_id)
        except EnrollmentServiceError as e:
            raise _to_http_exception(e) from e
