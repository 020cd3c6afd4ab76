"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud import crud_donation, crud_donation_request, crud_profile
from app.db import models
from app.errors import AuthorizationError, NotFoundError, StateConflictError, ValidationError

logger = logging.getLogger(__name__)

RequestStatus = models.DonationRequestStatus
DonationStatus = models.DonationStatus


class RequestLedger:
    """
    Donation claims: an NGO asks for a donation, the donor approves one NGO.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_donation(self, donation_id: int) -> models.Donation:
        donation = crud_donation.get_donation(self.db, donation_id)
        if donation is None:
            raise NotFoundError("Donation not found")
        return donation

    def _get_owned_request(self, donor_id: int, request_id: int):
        request = crud_donation_request.get_donation_request(self.db, request_id)
        if request is None:
            raise NotFoundError("Donation request not found")
        donation = self._get_donation(request.donation_id)
        if donation.donor_id != donor_id:
            raise AuthorizationError("Only the donor of this donation can manage its requests")
        return request, donation

    def submit(self, ngo_id: int, donation_id: int, message: Optional[str] = None) -> models.DonationRequest:
        donation = self._get_donation(donation_id)
        if donation.status != DonationStatus.NEW:
            raise StateConflictError(f"Donation is {donation.status.value}, requests are only accepted while New")
        if crud_donation_request.get_pending_request(self.db, donation_id, ngo_id) is not None:
            raise ValidationError("A pending request for this donation already exists")

        try:
            request = crud_donation_request.create_donation_request(self.db, donation, ngo_id, message)
        except IntegrityError as e:
            raise ValidationError("A pending request for this donation already exists") from e
        logger.info("NGO %s requested donation %s (request %s)", ngo_id, donation_id, request.id)
        return request

    def list_for_donation(self, donor_id: int, donation_id: int):
        donation = self._get_donation(donation_id)
        if donation.donor_id != donor_id:
            raise AuthorizationError("Only the donor of this donation can view its requests")
        return crud_donation_request.get_requests_for_donation(self.db, donation_id)

    def approve(self, donor_id: int, request_id: int) -> models.Donation:
        request, donation = self._get_owned_request(donor_id, request_id)
        if donation.status != DonationStatus.NEW:
            raise StateConflictError(f"Donation is already {donation.status.value}")
        if request.status != RequestStatus.PENDING:
            raise StateConflictError(f"Request is already {request.status.value}")

        # The conditional status update picks the single winner among racing approvals.
        if not crud_donation.transition_status(
            self.db,
            donation.id,
            DonationStatus.NEW,
            DonationStatus.ASSIGNED,
            assigned_ngo_id=request.ngo_id,
        ):
            raise StateConflictError("Donation was assigned by a concurrent approval")
        if not crud_donation_request.set_request_status(self.db, request.id, RequestStatus.APPROVED):
            raise StateConflictError("Request is no longer pending")

        rejected = crud_donation_request.reject_competing_requests(self.db, donation.id, request.id)
        crud_profile.add_donation_handled(self.db, request.ngo_id, donation.id)
        logger.info(
            "Donation %s assigned to NGO %s via request %s; %s competing requests rejected",
            donation.id,
            request.ngo_id,
            request.id,
            rejected,
        )
        return donation

    def reject(self, donor_id: int, request_id: int) -> models.DonationRequest:
        request, _ = self._get_owned_request(donor_id, request_id)
        if not crud_donation_request.set_request_status(self.db, request.id, RequestStatus.REJECTED):
            raise StateConflictError(f"Request is already {request.status.value}")
        logger.info("Donation request %s rejected by donor %s", request.id, donor_id)
        return request
