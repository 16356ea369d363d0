# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment confirmation notifications.

EnrollmentNotifier is the contract the enrollment service calls after a
new enrollment is stored. EmailEnrollmentNotifier renders the Portuguese
confirmation message and delivers it through a notification channel.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Protocol

from dateutil import tz

from src.core.config.settings import MailSettings
from src.domains.enrollment.exceptions import EnrollmentNotificationError
from src.infrastructure.database.models import Enrollment, Plan, Student
from src.infrastructure.notifications.channels import (
    BaseChannel,
    ChannelResult,
    DeliveryStatus,
    NotificationPayload,
)
from src.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)

MONTHS_PT = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


class EnrollmentNotifier(Protocol):
    """Sends a confirmation for a newly created enrollment."""

    async def notify_enrollment_created(
        self,
        student: Student,
        plan: Plan,
        enrollment: Enrollment,
    ) -> None: ...


def format_enrollment_date(value: datetime, zone: tzinfo | None = None) -> str:
    """Render a date as "dia 10 de janeiro, às 9:00h", in zone when given."""
    if zone is not None:
        value = ensure_utc(value).astimezone(zone)
    return f"dia {value.day:02d} de {MONTHS_PT[value.month - 1]}, às {value.hour}:{value.minute:02d}h"


def format_price(value: Decimal, currency_symbol: str) -> str:
    """Render a price with two decimals and a decimal comma."""
    amount = f"{Decimal(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{currency_symbol} {amount}"


class EmailEnrollmentNotifier:
    """Delivers enrollment confirmations by email.

    Attributes:
        channel: Channel used for delivery.
        settings: Mail content settings.
        display_zone: Time zone dates are shown in.
    """

    def __init__(self, channel: BaseChannel, settings: MailSettings) -> None:
        self.channel = channel
        self.settings = settings
        self.display_zone = tz.gettz(settings.display_timezone)

    def build_payload(
        self,
        student: Student,
        plan: Plan,
        enrollment: Enrollment,
    ) -> NotificationPayload:
        """Build the confirmation payload for an enrollment."""
        return NotificationPayload(
            notification_type="enrollment_created",
            title=self.settings.enrollment_subject,
            message=f"Olá {student.name}, sua matrícula no plano {plan.title} foi concluída.",
            recipient_email=student.email,
            recipient_name=student.name,
            details=[
                ("Aluno", student.name),
                ("Plano", plan.title),
                ("Início", format_enrollment_date(enrollment.start_date, self.display_zone)),
                ("Término", format_enrollment_date(enrollment.end_date, self.display_zone)),
                ("Valor total", format_price(enrollment.price, self.settings.currency_symbol)),
            ],
            data={
                "enrollment_id": enrollment.id,
                "student_id": student.id,
                "plan_id": plan.id,
            },
        )

    async def notify_enrollment_created(
        self,
        student: Student,
        plan: Plan,
        enrollment: Enrollment,
    ) -> None:
        """Send the confirmation email.

        Raises:
            EnrollmentNotificationError: If the channel reports a failure.
        """
        payload = self.build_payload(student, plan, enrollment)
        result: ChannelResult = await self.channel.send(payload)

        if result.status == DeliveryStatus.FAILED:
            raise EnrollmentNotificationError(
                f"Enrollment confirmation failed for {student.email}: {result.error_message}"
            )

        if result.status == DeliveryStatus.SKIPPED:
            logger.info(
                "Enrollment confirmation skipped: enrollment=%s, reason=%s",
                enrollment.id,
                result.error_message,
            )
