# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for enrollment confirmation emails."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from dateutil import tz

from src.core.config.settings import MailSettings
from src.domains.enrollment.exceptions import EnrollmentNotificationError
from src.domains.enrollment.notifier import (
    EmailEnrollmentNotifier,
    format_enrollment_date,
    format_price,
)
from src.infrastructure.notifications.channels import (
    ChannelResult,
    ChannelType,
    DeliveryStatus,
)


@pytest.fixture
def mock_channel():
    """Create mock channel that reports success."""
    channel = AsyncMock()
    channel.send.return_value = ChannelResult(
        channel=ChannelType.EMAIL,
        status=DeliveryStatus.SENT,
        message_id="<abc@gym>",
    )
    return channel


@pytest.fixture
def notifier(mock_channel):
    return EmailEnrollmentNotifier(mock_channel, MailSettings())


class TestFormatting:
    """Tests for date and price rendering."""

    def test_format_enrollment_date(self):
        value = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)

        assert format_enrollment_date(value) == "dia 10 de janeiro, às 9:00h"

    def test_format_enrollment_date_in_zone(self):
        value = datetime(2024, 1, 10, 2, 0, tzinfo=timezone.utc)

        assert format_enrollment_date(value, tz.gettz("America/Sao_Paulo")) == (
            "dia 09 de janeiro, às 23:00h"
        )

    def test_format_enrollment_date_pads_day(self):
        value = datetime(2024, 3, 5, 18, 0, tzinfo=timezone.utc)

        assert format_enrollment_date(value) == "dia 05 de março, às 18:00h"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("389.70"), "R$ 389,70"),
            (Decimal("1234.5"), "R$ 1.234,50"),
            (Decimal("0"), "R$ 0,00"),
            (Decimal("1000000"), "R$ 1.000.000,00"),
        ],
    )
    def test_format_price(self, value, expected):
        assert format_price(value, "R$") == expected


class TestEmailEnrollmentNotifier:
    """Tests for EmailEnrollmentNotifier."""

    def test_build_payload(self, notifier, sample_student, sample_plan, sample_enrollment):
        payload = notifier.build_payload(sample_student, sample_plan, sample_enrollment)

        assert payload.title == "Matrícula concluída"
        assert payload.recipient_email == "maria@example.com"
        assert payload.recipient_name == "Maria Silva"
        assert "Trimestral" in payload.message
        assert dict(payload.details) == {
            "Aluno": "Maria Silva",
            "Plano": "Trimestral",
            "Início": "dia 10 de janeiro, às 6:00h",
            "Término": "dia 10 de abril, às 6:00h",
            "Valor total": "R$ 389,70",
        }
        assert payload.data == {"enrollment_id": 10, "student_id": 1, "plan_id": 3}

    def test_utc_display_timezone(self, mock_channel, sample_student, sample_plan, sample_enrollment):
        notifier = EmailEnrollmentNotifier(mock_channel, MailSettings(display_timezone="UTC"))

        payload = notifier.build_payload(sample_student, sample_plan, sample_enrollment)

        assert dict(payload.details)["Início"] == "dia 10 de janeiro, às 9:00h"

    def test_subject_from_settings(self, mock_channel, sample_student, sample_plan, sample_enrollment):
        notifier = EmailEnrollmentNotifier(
            mock_channel,
            MailSettings(enrollment_subject="Bem-vindo", currency_symbol="US$"),
        )

        payload = notifier.build_payload(sample_student, sample_plan, sample_enrollment)

        assert payload.title == "Bem-vindo"
        assert dict(payload.details)["Valor total"] == "US$ 389,70"

    @pytest.mark.asyncio
    async def test_notify_sends_through_channel(
        self, notifier, mock_channel, sample_student, sample_plan, sample_enrollment
    ):
        await notifier.notify_enrollment_created(sample_student, sample_plan, sample_enrollment)

        mock_channel.send.assert_awaited_once()
        payload = mock_channel.send.call_args.args[0]
        assert payload.notification_type == "enrollment_created"

    @pytest.mark.asyncio
    async def test_notify_failure_raises(
        self, notifier, mock_channel, sample_student, sample_plan, sample_enrollment
    ):
        mock_channel.send.return_value = ChannelResult(
            channel=ChannelType.EMAIL,
            status=DeliveryStatus.FAILED,
            error_message="SMTP error: connection refused",
        )

        with pytest.raises(EnrollmentNotificationError, match="connection refused"):
            await notifier.notify_enrollment_created(
                sample_student, sample_plan, sample_enrollment
            )

    @pytest.mark.asyncio
    async def test_notify_skipped_does_not_raise(
        self, notifier, mock_channel, sample_student, sample_plan, sample_enrollment
    ):
        mock_channel.send.return_value = ChannelResult(
            channel=ChannelType.EMAIL,
            status=DeliveryStatus.SKIPPED,
            error_message="SMTP configuration incomplete",
        )

        await notifier.notify_enrollment_created(sample_student, sample_plan, sample_enrollment)
