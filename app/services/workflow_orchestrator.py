"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.config import Settings, settings as default_settings
from app.crud import crud_donation, crud_profile, crud_team
from app.db import models
from app.db.database import atomic
from app.errors import AuthorizationError, NotFoundError
from app.schemas import schemas
from app.services.availability_gate import AvailabilityGate
from app.services.membership_ledger import MembershipLedger
from app.services.otp_verifier import OTPIssue, OTPVerifier
from app.services.request_ledger import RequestLedger
from app.services.team_formation import TeamFormation

logger = logging.getLogger(__name__)

Role = models.UserRole


class WorkflowOrchestrator:
    """
    Entry point for every donation workflow operation.

    Each public method checks the actor's role, delegates to the ledger or
    service that owns the rule, and runs the whole operation as one database
    transaction. Errors from ``app.errors`` propagate to the caller unchanged.
    """

    def __init__(
        self,
        db: Session,
        settings: Settings = default_settings,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.settings = settings
        self.availability_gate = AvailabilityGate(db)
        self.request_ledger = RequestLedger(db)
        self.team_formation = TeamFormation(db, self.availability_gate)
        self.membership_ledger = MembershipLedger(db)
        self.otp_verifier = OTPVerifier(
            db,
            length=settings.otp_length,
            ttl_minutes=settings.otp_ttl_minutes,
            max_attempts=settings.otp_max_attempts,
            clock=clock,
        )

    @staticmethod
    def _require_role(actor: schemas.Actor, *roles: Role):
        if actor.role not in roles:
            allowed = " or ".join(role.value for role in roles)
            logger.warning("Actor %s with role %s refused, %s required", actor.id, actor.role.value, allowed)
            raise AuthorizationError(f"{allowed} role required")

    # --- Donations ---
    def create_donation(self, actor: schemas.Actor, donation: schemas.DonationCreate) -> models.Donation:
        self._require_role(actor, Role.DONOR)
        with atomic(self.db):
            db_donation = crud_donation.create_donation(self.db, actor.id, donation)
        logger.info("Donor %s posted donation %s", actor.id, db_donation.id)
        return db_donation

    def get_donation(self, donation_id: int) -> models.Donation:
        donation = crud_donation.get_donation(self.db, donation_id)
        if donation is None:
            raise NotFoundError("Donation not found")
        return donation

    def get_donation_team(self, donation_id: int) -> models.DonationTeam:
        team = crud_team.get_team_for_donation(self.db, donation_id)
        if team is None:
            raise NotFoundError("No team scheduled for this donation")
        return team

    # --- Donor <-> NGO requests ---
    def submit_donation_request(
        self, actor: schemas.Actor, donation_id: int, message: Optional[str] = None
    ) -> models.DonationRequest:
        self._require_role(actor, Role.NGO)
        with atomic(self.db):
            return self.request_ledger.submit(actor.id, donation_id, message)

    def list_donation_requests(self, actor: schemas.Actor, donation_id: int) -> List[models.DonationRequest]:
        self._require_role(actor, Role.DONOR)
        return self.request_ledger.list_for_donation(actor.id, donation_id)

    def approve_request(self, actor: schemas.Actor, request_id: int) -> models.Donation:
        self._require_role(actor, Role.DONOR)
        with atomic(self.db):
            return self.request_ledger.approve(actor.id, request_id)

    def reject_request(self, actor: schemas.Actor, request_id: int) -> models.DonationRequest:
        self._require_role(actor, Role.DONOR)
        with atomic(self.db):
            return self.request_ledger.reject(actor.id, request_id)

    # --- Pickup ---
    def schedule_pickup(
        self, actor: schemas.Actor, donation_id: int, plan: schemas.SchedulePickupRequest
    ) -> Tuple[models.Donation, models.DonationTeam]:
        self._require_role(actor, Role.NGO)
        with atomic(self.db):
            return self.team_formation.schedule_pickup(actor.id, donation_id, plan)

    def _require_pickup_party(self, actor: schemas.Actor, donation_id: int, *roles: Role):
        """
        Restricts OTP handling to the assigned NGO and, where allowed, the
        volunteers on the donation's team.
        """
        self._require_role(actor, *roles)
        donation = self.get_donation(donation_id)
        if actor.role == Role.NGO and donation.assigned_ngo_id == actor.id:
            return
        if actor.role == Role.VOLUNTEER:
            team = crud_team.get_team_for_donation(self.db, donation_id)
            if team is not None and actor.id in team.volunteers:
                return
        raise AuthorizationError("Actor is not part of this donation's pickup")

    def send_otp(self, donation_id: int, actor: Optional[schemas.Actor] = None) -> OTPIssue:
        if actor is not None:
            self._require_pickup_party(actor, donation_id, Role.NGO)
        with atomic(self.db):
            return self.otp_verifier.issue(donation_id)

    def verify_otp(self, donation_id: int, code: str, actor: Optional[schemas.Actor] = None) -> models.Donation:
        if actor is not None:
            self._require_pickup_party(actor, donation_id, Role.NGO, Role.VOLUNTEER)
        with atomic(self.db):
            return self.otp_verifier.verify(donation_id, code)

    def mark_donation_completed(
        self, actor: schemas.Actor, donation_id: int, proof_files: List[str]
    ) -> models.Donation:
        self._require_role(actor, Role.NGO)
        with atomic(self.db):
            return self.team_formation.complete(
                actor.id,
                donation_id,
                proof_files,
                require_proof=self.settings.require_completion_proof,
            )

    # --- Volunteer <-> NGO membership ---
    def submit_volunteer_request(self, actor: schemas.Actor, ngo_id: int) -> models.NGORequest:
        self._require_role(actor, Role.VOLUNTEER)
        with atomic(self.db):
            return self.membership_ledger.submit(actor.id, ngo_id)

    def accept_volunteer_request(self, actor: schemas.Actor, request_id: int) -> schemas.Membership:
        self._require_role(actor, Role.NGO)
        with atomic(self.db):
            request = self.membership_ledger.accept(actor.id, request_id)
        ngo_profile = crud_profile.get_ngo_profile(self.db, request.ngo_id)
        volunteer_profile = crud_profile.get_volunteer_profile(self.db, request.volunteer_id)
        return schemas.Membership(
            request=schemas.NGORequest.model_validate(request),
            ngo_volunteers=ngo_profile.volunteers if ngo_profile else [],
            volunteer_joined_ngos=volunteer_profile.joined_ngos if volunteer_profile else [],
        )

    def reject_volunteer_request(self, actor: schemas.Actor, request_id: int) -> models.NGORequest:
        self._require_role(actor, Role.NGO)
        with atomic(self.db):
            return self.membership_ledger.reject(actor.id, request_id)
