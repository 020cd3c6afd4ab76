"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

import logging
from datetime import datetime

from app.services.email_service import EmailService

logger = logging.getLogger(__name__)


async def deliver_pickup_otp(donation_id: int, to_email: str, donation_title: str, code: str, expires_at: datetime):
    """
    Hands a freshly issued pickup code to the email service.
    This function is designed to run as a background task.
    """
    if not to_email:
        logger.warning("Background Task Warning: no email on record for donation %s, OTP not delivered.", donation_id)
        return
    sent = await EmailService().send_pickup_otp(to_email, donation_title, code, expires_at)
    if sent:
        logger.info("Pickup OTP for donation %s delivered", donation_id)
