"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.db import models

Status = models.NGORequestStatus


def get_ngo_request(db: Session, request_id: int):
    return db.query(models.NGORequest).filter(models.NGORequest.id == request_id).first()


def get_open_request(db: Session, ngo_id: int, volunteer_id: int):
    """
    Returns a Pending or Accepted request for the (NGO, volunteer) pair, if any.
    """
    return (
        db.query(models.NGORequest)
        .filter(
            models.NGORequest.ngo_id == ngo_id,
            models.NGORequest.volunteer_id == volunteer_id,
            models.NGORequest.status.in_([Status.PENDING, Status.ACCEPTED]),
        )
        .first()
    )


def create_ngo_request(db: Session, ngo_id: int, volunteer_id: int):
    db_request = models.NGORequest(ngo_id=ngo_id, volunteer_id=volunteer_id, status=Status.PENDING)
    db.add(db_request)
    db.flush()
    return db_request


def set_request_status(db: Session, request_id: int, new: Status) -> bool:
    result = db.execute(
        update(models.NGORequest)
        .where(models.NGORequest.id == request_id, models.NGORequest.status == Status.PENDING)
        .values(status=new)
    )
    return result.rowcount == 1
