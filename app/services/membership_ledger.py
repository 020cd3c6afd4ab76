"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud import crud_ngo_request, crud_profile
from app.db import models
from app.errors import AuthorizationError, NotFoundError, StateConflictError, ValidationError

logger = logging.getLogger(__name__)

Status = models.NGORequestStatus


class MembershipLedger:
    """
    Volunteer join requests and the NGO <-> volunteer membership relation.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_ngo_request(self, ngo_id: int, request_id: int) -> models.NGORequest:
        request = crud_ngo_request.get_ngo_request(self.db, request_id)
        if request is None:
            raise NotFoundError("Volunteer request not found")
        if request.ngo_id != ngo_id:
            raise AuthorizationError("Request was sent to another NGO")
        return request

    def submit(self, volunteer_id: int, ngo_id: int) -> models.NGORequest:
        if crud_profile.get_ngo_profile(self.db, ngo_id) is None:
            raise NotFoundError("NGO not found")
        if crud_profile.get_volunteer_profile(self.db, volunteer_id) is None:
            raise NotFoundError("Volunteer profile not found")
        if crud_ngo_request.get_open_request(self.db, ngo_id, volunteer_id) is not None:
            raise ValidationError("A pending or accepted request for this NGO already exists")

        try:
            request = crud_ngo_request.create_ngo_request(self.db, ngo_id, volunteer_id)
        except IntegrityError as e:
            raise ValidationError("A pending or accepted request for this NGO already exists") from e
        logger.info("Volunteer %s asked to join NGO %s (request %s)", volunteer_id, ngo_id, request.id)
        return request

    def accept(self, ngo_id: int, request_id: int) -> models.NGORequest:
        request = self._get_ngo_request(ngo_id, request_id)
        if request.status == Status.ACCEPTED:
            logger.info("Volunteer request %s already accepted", request_id)
            return request
        if request.status == Status.REJECTED:
            raise StateConflictError("Request was already rejected")

        if not crud_ngo_request.set_request_status(self.db, request.id, Status.ACCEPTED):
            self.db.refresh(request)
            if request.status == Status.ACCEPTED:
                return request
            raise StateConflictError(f"Request is already {request.status.value}")

        crud_profile.add_membership(self.db, request.ngo_id, request.volunteer_id)
        logger.info("Volunteer %s joined NGO %s", request.volunteer_id, request.ngo_id)
        return request

    def reject(self, ngo_id: int, request_id: int) -> models.NGORequest:
        request = self._get_ngo_request(ngo_id, request_id)
        if not crud_ngo_request.set_request_status(self.db, request.id, Status.REJECTED):
            raise StateConflictError(f"Request is already {request.status.value}")
        logger.info("Volunteer request %s rejected by NGO %s", request.id, ngo_id)
        return request
