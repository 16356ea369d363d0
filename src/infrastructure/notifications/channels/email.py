# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Email notification channel using async SMTP.

This channel sends email notifications using aiosmtplib. Messages are
multipart with a plain text and an HTML version.

Configuration comes from SMTPSettings (SMTP_* environment variables).
"""

import html
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid

import aiosmtplib

from src.core.config.settings import SMTPSettings
from src.infrastructure.notifications.channels.base import (
    BaseChannel,
    ChannelResult,
    ChannelType,
    NotificationPayload,
)


class EmailChannel(BaseChannel):
    """Email notification channel using async SMTP.

    When SMTP is not fully configured every send is SKIPPED, so local
    development works without a mail server.
    """

    def __init__(self, settings: SMTPSettings) -> None:
        """Initialize the email channel.

        Args:
            settings: SMTP server configuration.
        """
        super().__init__()
        self._settings = settings

    @property
    def channel_type(self) -> ChannelType:
        """Return the channel type."""
        return ChannelType.EMAIL

    async def send(self, payload: NotificationPayload) -> ChannelResult:
        """Send email notification via SMTP.

        Args:
            payload: The notification payload.

        Returns:
            ChannelResult with delivery status.
        """
        if not self._settings.is_configured:
            self.logger.warning(
                "Email notifications disabled: SMTP_HOST, SMTP_USERNAME, "
                "SMTP_PASSWORD, or SMTP_FROM_EMAIL not set"
            )
            return self.create_skipped_result("SMTP configuration incomplete")

        if not payload.recipient_email:
            return self.create_skipped_result("No recipient email address")

        message = self._build_email_message(payload)

        try:
            await aiosmtplib.send(
                message,
                hostname=self._settings.host,
                port=self._settings.port,
                username=self._settings.username,
                password=self._settings.password.get_secret_value(),
                start_tls=self._settings.use_tls,
                timeout=self._settings.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            self.logger.error(
                "Failed to send email to %s: %s",
                payload.recipient_email,
                str(e),
                exc_info=True,
            )
            return self.create_failure_result(
                f"SMTP error: {str(e)}",
                metadata={"recipient": payload.recipient_email},
            )

        self.logger.info(
            "Email sent to %s: %s",
            payload.recipient_email,
            payload.title,
        )

        return self.create_success_result(
            message_id=message["Message-ID"],
            metadata={"recipient": payload.recipient_email},
        )

    def _build_email_message(self, payload: NotificationPayload) -> MIMEMultipart:
        """Build MIME email message.

        Args:
            payload: Notification payload.

        Returns:
            MIMEMultipart message ready to send.
        """
        message = MIMEMultipart("alternative")

        message["From"] = formataddr((self._settings.from_name, self._settings.from_email))
        message["To"] = formataddr((payload.recipient_name or "", payload.recipient_email))
        message["Subject"] = payload.title
        message["Message-ID"] = make_msgid()

        message.attach(MIMEText(self._build_plain_text(payload), "plain", "utf-8"))
        message.attach(MIMEText(self._build_html(payload), "html", "utf-8"))

        return message

    def _build_plain_text(self, payload: NotificationPayload) -> str:
        lines = [
            payload.title,
            "=" * len(payload.title),
            "",
            payload.message,
            "",
        ]

        for label, value in payload.details:
            lines.append(f"{label}: {value}")

        if payload.details:
            lines.append("")

        lines.extend([
            "---",
            f"{self._settings.from_name}",
        ])

        return "\n".join(lines)

    def _build_html(self, payload: NotificationPayload) -> str:
        title = html.escape(payload.title)
        message = html.escape(payload.message).replace("\n", "<br>")

        rows = "".join(
            f"""
                <tr>
                    <td style="padding: 4px 12px 4px 0; color: #6B7280;">{html.escape(label)}</td>
                    <td style="padding: 4px 0;"><strong>{html.escape(value)}</strong></td>
                </tr>"""
            for label, value in payload.details
        )
        details_table = f"<table style=\"margin: 16px 0;\">{rows}</table>" if rows else ""

        body = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto,
             'Helvetica Neue', Arial, sans-serif; line-height: 1.6;
             color: #1F2937; margin: 0; padding: 0; background-color: #F3F4F6;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background-color: white; border-radius: 8px;
                    padding: 32px; box-shadow: 0 1px 3px rgba(0,0,0,0.1);">

            <!-- Header -->
            <div style="border-bottom: 1px solid #E5E7EB; padding-bottom: 16px;
                        margin-bottom: 24px;">
                <h1 style="color: #4F46E5; font-size: 24px; margin: 0;">
                    {title}
                </h1>
            </div>

            <!-- Content -->
            <div style="font-size: 16px; color: #374151;">
                <p style="margin: 0 0 16px 0;">{message}</p>
                {details_table}
            </div>

            <!-- Footer -->
            <div style="border-top: 1px solid #E5E7EB; padding-top: 16px;
                        margin-top: 24px; font-size: 12px; color: #9CA3AF;">
                <p style="margin: 0;">{html.escape(self._settings.from_name)}</p>
            </div>
        </div>
    </div>
</body>
</html>
        """

        return body.strip()
