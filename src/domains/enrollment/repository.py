# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment persistence.

EnrollmentRepository is the storage contract the enrollment service
depends on. SQLAlchemyEnrollmentRepository implements it on an async
SQLAlchemy session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.enrollment.exceptions import AlreadyEnrolledError, NotEnrolledError
from src.infrastructure.database.models import Enrollment, Plan, Student

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnrollmentRecord:
    """Field values written for a new or replaced enrollment."""

    student_id: int
    plan_id: int
    start_date: datetime
    end_date: datetime
    price: Decimal


class EnrollmentRepository(Protocol):
    """Storage operations needed by the enrollment service."""

    async def find_student(self, student_id: int) -> Student | None: ...

    async def find_plan(self, plan_id: int) -> Plan | None: ...

    async def find_enrollment_by_student(self, student_id: int) -> Enrollment | None: ...

    async def create_enrollment(self, record: EnrollmentRecord) -> Enrollment: ...

    async def update_enrollment(self, enrollment_id: int, record: EnrollmentRecord) -> Enrollment: ...

    async def delete_enrollment(self, enrollment_id: int) -> None: ...

    async def list_enrollments(self) -> Sequence[Enrollment]: ...


class SQLAlchemyEnrollmentRepository:
    """Enrollment repository backed by an async SQLAlchemy session.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            db: Async database session.
        """
        self.db = db

    async def find_student(self, student_id: int) -> Student | None:
        return await self.db.get(Student, student_id)

    async def find_plan(self, plan_id: int) -> Plan | None:
        return await self.db.get(Plan, plan_id)

    async def find_enrollment_by_student(self, student_id: int) -> Enrollment | None:
        query = select(Enrollment).where(Enrollment.student_id == student_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def create_enrollment(self, record: EnrollmentRecord) -> Enrollment:
        """Insert a new enrollment.

        Raises:
            AlreadyEnrolledError: If the unique student constraint rejects
                the insert because a concurrent request enrolled first.
        """
        enrollment = Enrollment(
            student_id=record.student_id,
            plan_id=record.plan_id,
            start_date=record.start_date,
            end_date=record.end_date,
            price=record.price,
        )

        self.db.add(enrollment)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if await self.find_enrollment_by_student(record.student_id) is not None:
                logger.warning(
                    "Concurrent enrollment rejected by unique constraint: student=%s",
                    record.student_id,
                )
                raise AlreadyEnrolledError(details={"student_id": record.student_id}) from e
            raise

        await self.db.refresh(enrollment)
        return enrollment

    async def update_enrollment(self, enrollment_id: int, record: EnrollmentRecord) -> Enrollment:
        """Replace plan and derived fields of an existing enrollment.

        Raises:
            NotEnrolledError: If the enrollment no longer exists.
        """
        enrollment = await self.db.get(Enrollment, enrollment_id)
        if enrollment is None:
            raise NotEnrolledError(details={"enrollment_id": enrollment_id})

        enrollment.student_id = record.student_id
        enrollment.plan_id = record.plan_id
        enrollment.start_date = record.start_date
        enrollment.end_date = record.end_date
        enrollment.price = record.price

        await self.db.commit()
        await self.db.refresh(enrollment)
        return enrollment

    async def delete_enrollment(self, enrollment_id: int) -> None:
        await self.db.execute(delete(Enrollment).where(Enrollment.id == enrollment_id))
        await self.db.commit()

    async def list_enrollments(self) -> Sequence[Enrollment]:
        """All enrollments with student and plan loaded."""
        query = (
            select(Enrollment)
            .options(
                selectinload(Enrollment.student),
                selectinload(Enrollment.plan),
            )
            .order_by(Enrollment.id)
        )
        result = await self.db.execute(query)
        return result.scalars().all()
