# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment service for managing student plan enrollments.

This module provides the EnrollmentService class for:
- Enrolling a student in a plan
- Replacing a student's enrollment
- Removing a student's enrollment
- Listing enrollments with student and plan details
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from src.domains.enrollment.exceptions import (
    AlreadyEnrolledError,
    NotEnrolledError,
    PlanNotFoundError,
    StudentNotFoundError,
)
from src.domains.enrollment.notifier import EnrollmentNotifier
from src.domains.enrollment.repository import EnrollmentRecord, EnrollmentRepository
from src.domains.enrollment.rules import derive_enrollment
from src.infrastructure.database.models import Enrollment, Plan, Student
from src.models.enrollment import (
    EnrollmentListItem,
    EnrollmentResponse,
    PlanSummary,
    StudentSummary,
)
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service for managing student enrollments.

    A student has at most one enrollment. end_date and price are derived
    from the plan on every create and update.

    Attributes:
        repository: Storage for students, plans and enrollments.
        notifier: Sends confirmations for new enrollments.
        clock: Returns the current instant.
    """

    def __init__(
        self,
        repository: EnrollmentRepository,
        notifier: EnrollmentNotifier,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize enrollment service.

        Args:
            repository: Enrollment repository.
            notifier: Enrollment confirmation notifier.
            clock: Current time provider, injectable for tests.
        """
        self.repository = repository
        self.notifier = notifier
        self.clock = clock

    async def create_enrollment(
        self,
        student_id: int,
        plan_id: int,
        start_date_raw: str,
    ) -> EnrollmentResponse:
        """Enroll a student in a plan.

        Args:
            student_id: Student identifier.
            plan_id: Plan identifier.
            start_date_raw: ISO 8601 start date.

        Returns:
            The stored enrollment.

        Raises:
            AlreadyEnrolledError: If the student already has an enrollment.
            StudentNotFoundError: If student not found.
            PlanNotFoundError: If plan not found.
            InvalidInputError: If the start date is malformed.
            PastDateError: If the start date is in the past.
        """
        existing = await self.repository.find_enrollment_by_student(student_id)
        if existing:
            raise AlreadyEnrolledError(details={"student_id": student_id})

        student = await self._get_student(student_id)
        plan = await self._get_plan(plan_id)

        derived = derive_enrollment(start_date_raw, plan, self.clock())

        enrollment = await self.repository.create_enrollment(
            EnrollmentRecord(
                student_id=student_id,
                plan_id=plan_id,
                start_date=derived.start_date,
                end_date=derived.end_date,
                price=derived.price,
            )
        )

        logger.info(
            "Enrolled student: student=%s, plan=%s, enrollment=%s",
            student_id,
            plan_id,
            enrollment.id,
        )

        await self._notify_created(student, plan, enrollment)

        return self._to_response(enrollment)

    async def update_enrollment(
        self,
        student_id: int,
        plan_id: int,
        start_date_raw: str,
    ) -> EnrollmentResponse:
        """Replace the plan and dates of a student's enrollment.

        Args:
            student_id: Student identifier.
            plan_id: New plan identifier.
            start_date_raw: New ISO 8601 start date.

        Returns:
            The updated enrollment.

        Raises:
            NotEnrolledError: If the student has no enrollment.
            StudentNotFoundError: If student not found.
            PlanNotFoundError: If plan not found.
            InvalidInputError: If the start date is malformed.
            PastDateError: If the start date is in the past.
        """
        existing = await self.repository.find_enrollment_by_student(student_id)
        if not existing:
            raise NotEnrolledError(details={"student_id": student_id})

        await self._get_student(student_id)
        plan = await self._get_plan(plan_id)

        derived = derive_enrollment(start_date_raw, plan, self.clock())

        enrollment = await self.repository.update_enrollment(
            existing.id,
            EnrollmentRecord(
                student_id=student_id,
                plan_id=plan_id,
                start_date=derived.start_date,
                end_date=derived.end_date,
                price=derived.price,
            ),
        )

        logger.info(
            "Updated enrollment: student=%s, plan=%s, enrollment=%s",
            student_id,
            plan_id,
            enrollment.id,
        )

        return self._to_response(enrollment)

    async def delete_enrollment(self, student_id: int) -> EnrollmentResponse:
        """Remove a student's enrollment.

        Args:
            student_id: Student identifier.

        Returns:
            The removed enrollment.

        Raises:
            NotEnrolledError: If the student has no enrollment.
        """
        existing = await self.repository.find_enrollment_by_student(student_id)
        if not existing:
            raise NotEnrolledError(details={"student_id": student_id})

        removed = self._to_response(existing)
        await self.repository.delete_enrollment(existing.id)

        logger.info(
            "Removed enrollment: student=%s, enrollment=%s",
            student_id,
            removed.id,
        )

        return removed

    async def list_enrollments(self) -> list[EnrollmentListItem]:
        """List all enrollments with student and plan projections."""
        enrollments = await self.repository.list_enrollments()
        return [self._to_list_item(e) for e in enrollments]

    async def _get_student(self, student_id: int) -> Student:
        student = await self.repository.find_student(student_id)
        if not student:
            raise StudentNotFoundError(details={"student_id": student_id})
        return student

    async def _get_plan(self, plan_id: int) -> Plan:
        plan = await self.repository.find_plan(plan_id)
        if not plan:
            raise PlanNotFoundError(details={"plan_id": plan_id})
        return plan

    async def _notify_created(
        self,
        student: Student,
        plan: Plan,
        enrollment: Enrollment,
    ) -> None:
        """Send the creation confirmation.

        Failures are logged and never undo the stored enrollment.
        """
        try:
            await self.notifier.notify_enrollment_created(student, plan, enrollment)
        except Exception as e:
            logger.error(
                "Enrollment confirmation failed: enrollment=%s, student=%s: %s",
                enrollment.id,
                student.id,
                str(e),
                exc_info=True,
            )

    def _to_response(self, enrollment: Enrollment) -> EnrollmentResponse:
        """Convert enrollment to response DTO."""
        return EnrollmentResponse(
            id=enrollment.id,
            student_id=enrollment.student_id,
            plan_id=enrollment.plan_id,
            start_date=enrollment.start_date,
            end_date=enrollment.end_date,
            price=enrollment.price,
        )

    def _to_list_item(self, enrollment: Enrollment) -> EnrollmentListItem:
        """Convert enrollment to list DTO with student and plan."""
        student = enrollment.student
        plan = enrollment.plan

        return EnrollmentListItem(
            id=enrollment.id,
            student_id=enrollment.student_id,
            plan_id=enrollment.plan_id,
            start_date=enrollment.start_date,
            end_date=enrollment.end_date,
            price=enrollment.price,
            student=StudentSummary(
                id=student.id,
                name=student.name,
                email=student.email,
            ) if student else None,
            plan=PlanSummary(
                id=plan.id,
                title=plan.title,
                duration=plan.duration,
            ) if plan else None,
        )
