"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

from typing import Iterable

from sqlalchemy.orm import Session

from app.db import models
from app.schemas import schemas


def get_team_for_donation(db: Session, donation_id: int):
    return db.query(models.DonationTeam).filter(models.DonationTeam.donation_id == donation_id).first()


def create_team(
    db: Session,
    donation_id: int,
    leader_id: int,
    volunteer_ids: Iterable[int],
    pickup_schedule: schemas.PickupSchedule,
    delivery_schedule: schemas.DeliverySchedule,
):
    db_team = models.DonationTeam(
        donation_id=donation_id,
        leader_id=leader_id,
        pickup_schedule=pickup_schedule.model_dump(mode="json"),
        delivery_schedule=delivery_schedule.model_dump(mode="json"),
        members=[models.DonationTeamMember(volunteer_id=volunteer_id) for volunteer_id in set(volunteer_ids)],
    )
    db.add(db_team)
    db.flush()
    return db_team
