"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from app.crud import crud_donation, crud_profile, crud_team
from app.db import models
from app.db.models import utcnow
from app.errors import (
    AuthorizationError,
    NotFoundError,
    ResourceConflictError,
    StateConflictError,
    ValidationError,
)
from app.schemas import schemas
from app.services.availability_gate import AvailabilityGate

logger = logging.getLogger(__name__)

DonationStatus = models.DonationStatus


class TeamFormation:
    """
    Puts a volunteer team on an assigned donation and releases it on completion.
    """

    def __init__(self, db: Session, availability_gate: AvailabilityGate):
        self.db = db
        self.availability_gate = availability_gate

    def _get_assigned_donation(self, ngo_id: int, donation_id: int, expected: DonationStatus) -> models.Donation:
        donation = crud_donation.get_donation(self.db, donation_id)
        if donation is None:
            raise NotFoundError("Donation not found")
        if donation.status != expected:
            raise StateConflictError(
                f"Donation is {donation.status.value}, expected {expected.value}"
            )
        if donation.assigned_ngo_id != ngo_id:
            raise AuthorizationError("Donation is assigned to another NGO")
        return donation

    def schedule_pickup(
        self, ngo_id: int, donation_id: int, plan: schemas.SchedulePickupRequest
    ) -> Tuple[models.Donation, models.DonationTeam]:
        donation = self._get_assigned_donation(ngo_id, donation_id, DonationStatus.ASSIGNED)

        volunteer_ids = set(plan.volunteers)
        if not volunteer_ids:
            raise ValidationError("At least one volunteer is required")
        if plan.leader_id not in volunteer_ids:
            raise ValidationError("Leader must be one of the team volunteers")

        affiliated = crud_profile.get_affiliated_volunteer_ids(self.db, ngo_id, volunteer_ids)
        if affiliated != volunteer_ids:
            logger.warning(
                "Schedule rejected for donation %s: volunteers %s not affiliated with NGO %s",
                donation_id,
                sorted(volunteer_ids - affiliated),
                ngo_id,
            )
            raise ResourceConflictError("Volunteer unavailable or not affiliated")

        # Claim the donation before touching volunteers or the team row.
        if not crud_donation.transition_status(
            self.db, donation_id, DonationStatus.ASSIGNED, DonationStatus.SCHEDULED
        ):
            raise StateConflictError("Donation was scheduled by a concurrent request")

        self.availability_gate.lock(volunteer_ids)
        team = crud_team.create_team(
            self.db,
            donation_id,
            plan.leader_id,
            volunteer_ids,
            plan.pickup_schedule,
            plan.delivery_schedule,
        )

        logger.info("Donation %s scheduled with team %s (leader %s)", donation_id, team.id, plan.leader_id)
        return donation, team

    def complete(
        self, ngo_id: int, donation_id: int, proof_files: List[str], require_proof: bool = True
    ) -> models.Donation:
        donation = self._get_assigned_donation(ngo_id, donation_id, DonationStatus.PICKED)
        if require_proof and not proof_files:
            raise ValidationError("At least one proof image is required to complete a donation")

        if not crud_donation.transition_status(
            self.db,
            donation_id,
            DonationStatus.PICKED,
            DonationStatus.COMPLETED,
            proof_images=list(proof_files),
            completed_at=utcnow(),
        ):
            raise StateConflictError("Donation was completed by a concurrent request")

        team = crud_team.get_team_for_donation(self.db, donation_id)
        if team is not None:
            self.availability_gate.release(team.volunteers)
        logger.info("Donation %s completed with %s proof files", donation_id, len(proof_files))
        return donation
