'''
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Thu Aug 07 2025
# SPDX-License-Identifier: MIT
'''

import logging
from datetime import datetime

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self):
        self.sg = SendGridAPIClient(settings.sendgrid_api_key)
        self.sender_email = settings.mail_sender_email
        self.sender_name = settings.mail_sender_name

    async def send_pickup_otp(
        self,
        to_email: str,
        donation_title: str,
        code: str,
        expires_at: datetime,
    ):
        """
        Sends the pickup confirmation code to the donor. The donor hands it to
        the volunteer team at pickup.
        """
        subject = f"Pickup code for your donation: {donation_title}"
        html_content = f"""
        <html>
        <body>
            <p>Hello,</p>
            <p>A volunteer team is on its way to collect <strong>{donation_title}</strong>.</p>
            <p>Share this code with the team leader once the food has been handed over:</p>
            <h2>{code}</h2>
            <p>The code expires at {expires_at.strftime('%H:%M')} UTC.</p>
            <p>Thank you for sharing your surplus food!</p>
            <p>Best regards,</p>
            <p>{self.sender_name}</p>
        </body>
        </html>
        """
        return await self._send_email(to_email, subject, html_content)

    async def _send_email(self, to_email: str, subject: str, html_content: str) -> bool:
        """
        Internal helper to send an email using SendGrid.
        """
        message = Mail(
            from_email=(self.sender_email, self.sender_name),
            to_emails=to_email,
            subject=subject,
            html_content=html_content
        )
        try:
            response = self.sg.send(message)
            logger.info("Email sent to %s. Status Code: %s", to_email, response.status_code)
            return True
        except Exception:
            # Delivery runs after the response was sent; nobody is left to raise to.
            logger.exception("Error sending email to %s", to_email)
            return False
