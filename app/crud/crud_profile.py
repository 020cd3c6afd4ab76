"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

from typing import Iterable, Set

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.db import models


def get_user(db: Session, user_id: int):
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_ngo_profile(db: Session, ngo_id: int):
    return db.query(models.NGOProfile).filter(models.NGOProfile.user_id == ngo_id).first()


def get_volunteer_profile(db: Session, volunteer_id: int):
    return db.query(models.VolunteerProfile).filter(models.VolunteerProfile.user_id == volunteer_id).first()


def get_affiliated_volunteer_ids(db: Session, ngo_id: int, volunteer_ids: Iterable[int]) -> Set[int]:
    rows = (
        db.query(models.NGOMembership.volunteer_id)
        .filter(
            models.NGOMembership.ngo_id == ngo_id,
            models.NGOMembership.volunteer_id.in_(list(volunteer_ids)),
        )
        .all()
    )
    return {row.volunteer_id for row in rows}


def add_membership(db: Session, ngo_id: int, volunteer_id: int) -> bool:
    """
    Set-union of the pair into the membership relation. Returns False if the
    pair was already present.
    """
    if db.get(models.NGOMembership, (ngo_id, volunteer_id)) is not None:
        return False
    db.add(models.NGOMembership(ngo_id=ngo_id, volunteer_id=volunteer_id))
    db.flush()
    return True


def add_donation_handled(db: Session, ngo_id: int, donation_id: int) -> bool:
    if db.get(models.NGODonation, (ngo_id, donation_id)) is not None:
        return False
    db.add(models.NGODonation(ngo_id=ngo_id, donation_id=donation_id))
    db.flush()
    return True


def lock_volunteers(db: Session, volunteer_ids: Iterable[int]) -> int:
    """
    Flips ``is_available`` from true to false for the given volunteers and
    returns how many rows actually changed.
    """
    result = db.execute(
        update(models.VolunteerProfile)
        .where(
            models.VolunteerProfile.user_id.in_(list(volunteer_ids)),
            models.VolunteerProfile.is_available == True,  # noqa: E712
        )
        .values(is_available=False)
    )
    return result.rowcount


def unlock_volunteers(db: Session, volunteer_ids: Iterable[int]) -> int:
    result = db.execute(
        update(models.VolunteerProfile)
        .where(models.VolunteerProfile.user_id.in_(list(volunteer_ids)))
        .values(is_available=True)
    )
    return result.rowcount
