"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.db import models
from app.schemas import schemas


def get_donation(db: Session, donation_id: int):
    return db.query(models.Donation).filter(models.Donation.id == donation_id).first()


def get_donations_by_donor(db: Session, donor_id: int, skip: int = 0, limit: int = 100):
    return (
        db.query(models.Donation)
        .filter(models.Donation.donor_id == donor_id)
        .order_by(models.Donation.id)
        .offset(skip)
        .limit(limit)
        .all()
    )


def create_donation(db: Session, donor_id: int, donation: schemas.DonationCreate):
    data = donation.model_dump(mode="json", exclude={"location"})
    db_donation = models.Donation(
        donor_id=donor_id,
        status=models.DonationStatus.NEW,
        latitude=donation.location.latitude if donation.location else None,
        longitude=donation.location.longitude if donation.location else None,
        **data,
    )
    db.add(db_donation)
    db.flush()
    return db_donation


def transition_status(
    db: Session,
    donation_id: int,
    expected: models.DonationStatus,
    new: models.DonationStatus,
    **values,
) -> bool:
    """
    Compare-and-set on the donation status.

    Moves the donation from ``expected`` to ``new`` (writing any extra column
    ``values`` in the same statement) only if it is still in ``expected``.
    Returns False when another caller got there first.
    """
    result = db.execute(
        update(models.Donation)
        .where(models.Donation.id == donation_id, models.Donation.status == expected)
        .values(status=new, **values)
    )
    return result.rowcount == 1


def store_otp(db: Session, donation_id: int, otp_hash: str, expires_at: datetime) -> bool:
    result = db.execute(
        update(models.Donation)
        .where(
            models.Donation.id == donation_id,
            models.Donation.status == models.DonationStatus.SCHEDULED,
        )
        .values(otp_hash=otp_hash, otp_expires_at=expires_at, otp_attempts=0)
    )
    return result.rowcount == 1


def clear_otp(db: Session, donation_id: int):
    db.execute(
        update(models.Donation)
        .where(models.Donation.id == donation_id)
        .values(otp_hash=None, otp_expires_at=None, otp_attempts=0)
    )


def record_failed_otp_attempt(db: Session, donation_id: int) -> Optional[int]:
    db.execute(
        update(models.Donation)
        .where(models.Donation.id == donation_id)
        .values(otp_attempts=models.Donation.otp_attempts + 1)
    )
    return db.query(models.Donation.otp_attempts).filter(models.Donation.id == donation_id).scalar()
