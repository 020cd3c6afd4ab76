"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, NamedTuple, Optional

from sqlalchemy.orm import Session

from app.crud import crud_donation
from app.db import models
from app.db.models import utcnow
from app.errors import NotFoundError, OTPExpiredError, OTPMismatchError, StateConflictError
from app.utils.security import generate_otp, get_otp_hash, verify_otp_hash

logger = logging.getLogger(__name__)

DonationStatus = models.DonationStatus


class OTPIssue(NamedTuple):
    donation: models.Donation
    code: str
    expires_at: datetime


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class OTPVerifier:
    """
    Issues and checks the pickup confirmation code of a scheduled donation.

    Only a hash of the code is stored. Expiry is checked when a code is
    submitted; nothing runs in the background.
    """

    def __init__(
        self,
        db: Session,
        length: int = 6,
        ttl_minutes: int = 10,
        max_attempts: int = 0,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.length = length
        self.ttl = timedelta(minutes=ttl_minutes)
        self.max_attempts = max_attempts
        self.clock = clock or utcnow

    def _get_donation(self, donation_id: int) -> models.Donation:
        donation = crud_donation.get_donation(self.db, donation_id)
        if donation is None:
            raise NotFoundError("Donation not found")
        return donation

    def issue(self, donation_id: int) -> OTPIssue:
        """
        Generates a fresh code for a Scheduled donation, replacing any earlier one.
        """
        donation = self._get_donation(donation_id)
        if donation.status != DonationStatus.SCHEDULED:
            raise StateConflictError(f"Donation is {donation.status.value}, an OTP needs a Scheduled donation")

        code = generate_otp(self.length)
        expires_at = self.clock() + self.ttl
        if not crud_donation.store_otp(self.db, donation_id, get_otp_hash(code), expires_at):
            raise StateConflictError("Donation left the Scheduled state")
        logger.info("OTP issued for donation %s, expires at %s", donation_id, expires_at.isoformat())
        return OTPIssue(donation=donation, code=code, expires_at=expires_at)

    def verify(self, donation_id: int, submitted_code: str) -> models.Donation:
        donation = self._get_donation(donation_id)
        if donation.otp_hash is None or donation.otp_expires_at is None:
            raise NotFoundError("No OTP has been issued for this donation")
        if self.clock() > _as_utc(donation.otp_expires_at):
            logger.warning("Expired OTP submitted for donation %s", donation_id)
            raise OTPExpiredError("OTP has expired, request a new one")

        if not verify_otp_hash(submitted_code, donation.otp_hash):
            self._record_failure(donation_id)
            raise OTPMismatchError("OTP does not match")

        if not crud_donation.transition_status(
            self.db,
            donation_id,
            DonationStatus.SCHEDULED,
            DonationStatus.PICKED,
            otp_hash=None,
            otp_expires_at=None,
            otp_attempts=0,
        ):
            raise StateConflictError(f"Donation is {donation.status.value}, expected Scheduled")
        logger.info("OTP verified, donation %s picked up", donation_id)
        return donation

    def _record_failure(self, donation_id: int):
        attempts = crud_donation.record_failed_otp_attempt(self.db, donation_id)
        if self.max_attempts and attempts >= self.max_attempts:
            crud_donation.clear_otp(self.db, donation_id)
            logger.warning("OTP for donation %s invalidated after %s failed attempts", donation_id, attempts)
        else:
            logger.warning("OTP mismatch for donation %s (attempt %s)", donation_id, attempts)
        # The failed attempt has to persist even though the operation itself fails.
        self.db.commit()
