"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 20 2025
# SPDX-License-Identifier: MIT
"""

import logging
from typing import Iterable

from sqlalchemy.orm import Session

from app.crud import crud_profile
from app.errors import ResourceConflictError

logger = logging.getLogger(__name__)


class AvailabilityGate:
    """
    Guards ``VolunteerProfile.is_available`` so a volunteer is never on two
    active teams.

    Must run inside the caller's transaction: a failed lock leaves rows that
    were already flipped in this transaction, and only the rollback undoes them.
    """

    def __init__(self, db: Session):
        self.db = db

    def lock(self, volunteer_ids: Iterable[int]):
        wanted = set(volunteer_ids)
        locked = crud_profile.lock_volunteers(self.db, wanted)
        if locked != len(wanted):
            logger.warning("Availability lock failed: %s of %s volunteers locked", locked, len(wanted))
            raise ResourceConflictError("Volunteer unavailable or not affiliated")
        logger.info("Locked volunteers %s", sorted(wanted))

    def release(self, volunteer_ids: Iterable[int]) -> int:
        released = set(volunteer_ids)
        if not released:
            return 0
        count = crud_profile.unlock_volunteers(self.db, released)
        logger.info("Released volunteers %s", sorted(released))
        return count

    def is_available(self, volunteer_id: int) -> bool:
        profile = crud_profile.get_volunteer_profile(self.db, volunteer_id)
        return bool(profile and profile.is_available)
