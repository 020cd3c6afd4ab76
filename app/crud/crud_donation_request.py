"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.db import models

Status = models.DonationRequestStatus


def get_donation_request(db: Session, request_id: int):
    return db.query(models.DonationRequest).filter(models.DonationRequest.id == request_id).first()


def get_requests_for_donation(db: Session, donation_id: int):
    return (
        db.query(models.DonationRequest)
        .filter(models.DonationRequest.donation_id == donation_id)
        .order_by(models.DonationRequest.id)
        .all()
    )


def get_pending_request(db: Session, donation_id: int, ngo_id: int):
    return (
        db.query(models.DonationRequest)
        .filter(
            models.DonationRequest.donation_id == donation_id,
            models.DonationRequest.ngo_id == ngo_id,
            models.DonationRequest.status == Status.PENDING,
        )
        .first()
    )


def create_donation_request(db: Session, donation: models.Donation, ngo_id: int, message: str = None):
    db_request = models.DonationRequest(
        donation_id=donation.id,
        donor_id=donation.donor_id,
        ngo_id=ngo_id,
        message=message,
        status=Status.PENDING,
    )
    db.add(db_request)
    db.flush()
    return db_request


def set_request_status(db: Session, request_id: int, new: Status) -> bool:
    """
    Moves a Pending request to ``new``. Returns False if it was no longer Pending.
    """
    result = db.execute(
        update(models.DonationRequest)
        .where(models.DonationRequest.id == request_id, models.DonationRequest.status == Status.PENDING)
        .values(status=new)
    )
    return result.rowcount == 1


def reject_competing_requests(db: Session, donation_id: int, winner_id: int) -> int:
    result = db.execute(
        update(models.DonationRequest)
        .where(
            models.DonationRequest.donation_id == donation_id,
            models.DonationRequest.id != winner_id,
            models.DonationRequest.status == Status.PENDING,
        )
        .values(status=Status.REJECTED)
    )
    return result.rowcount
