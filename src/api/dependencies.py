# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependencies.

Provides database lifecycle hooks, request-scoped sessions and the
wiring of EnrollmentService with its repository and notifier.

Example:
    @router.get("/enrollments")
    async def list_enrollments(
        service: EnrollmentService = Depends(get_enrollment_service),
    ):
        return await service.list_enrollments()
"""

import logging
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import get_settings
from src.domains.enrollment import (
    EmailEnrollmentNotifier,
    EnrollmentService,
    SQLAlchemyEnrollmentRepository,
)
from src.infrastructure.database.connection import (
    close_database,
    create_schema,
    get_session,
    init_database,
)
from src.infrastructure.notifications import EmailChannel

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection and create missing tables."""
    settings = get_settings()

    await init_database(settings)

    if settings.database.create_schema:
        await create_schema()
        logger.info("Database schema ensured")


async def close_db() -> None:
    """Close the database connection pool."""
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    Yields:
        AsyncSession committed on success, rolled back on error.
    """
    async with get_session() as session:
        yield session


@lru_cache(maxsize=1)
def get_email_notifier() -> EmailEnrollmentNotifier:
    """Get the shared enrollment email notifier."""
    settings = get_settings()
    return EmailEnrollmentNotifier(
        channel=EmailChannel(settings.smtp),
        settings=settings.mail,
    )


def get_enrollment_service(
    db: AsyncSession = Depends(get_db),
) -> EnrollmentService:
    """Get enrollment service instance.

    Args:
        db: Database session.

    Returns:
        Configured EnrollmentService instance.
    """
    return EnrollmentService(
        repository=SQLAlchemyEnrollmentRepository(db),
        notifier=get_email_notifier(),
    )
