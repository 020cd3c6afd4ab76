# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import pytest
from sqlalchemy.orm import Session

from app.crud import crud_donation
from app.db import models
from app.errors import AuthorizationError, NotFoundError, OTPExpiredError, OTPMismatchError, StateConflictError
from app.utils.security import generate_otp
from tests.test_helpers import actor_for, create_volunteer, schedule_plan


@pytest.fixture(name="scheduled")
def scheduled_fixture(orchestrator, workflow):
    w = workflow
    request = orchestrator.submit_donation_request(actor_for(w["ngo"]), w["donation"].id, None)
    orchestrator.approve_request(actor_for(w["donor"]), request.id)
    orchestrator.schedule_pickup(
        actor_for(w["ngo"]), w["donation"].id, schedule_plan([w["v1"].id, w["v2"].id], w["v1"].id)
    )
    return w


def wrong_code(code: str) -> str:
    return "0" * len(code) if code != "0" * len(code) else "1" * len(code)


def status_of(db_session: Session, donation_id: int):
    db_session.expire_all()
    return crud_donation.get_donation(db_session, donation_id).status


def test_generate_otp_is_numeric_and_fixed_length():
    for length in (4, 6, 8):
        code = generate_otp(length)
        assert len(code) == length
        assert code.isdigit()


def test_send_otp_requires_scheduled_donation(orchestrator, workflow):
    with pytest.raises(StateConflictError):
        orchestrator.send_otp(workflow["donation"].id)


def test_send_otp_unknown_donation(orchestrator, workflow):
    with pytest.raises(NotFoundError):
        orchestrator.send_otp(4242)


def test_send_otp_stores_only_a_hash(orchestrator, scheduled, db_session: Session, clock):
    issue = orchestrator.send_otp(scheduled["donation"].id)

    donation = crud_donation.get_donation(db_session, scheduled["donation"].id)
    assert len(issue.code) == 6
    assert donation.otp_hash is not None
    assert donation.otp_hash.startswith("$pbkdf2-sha256$")
    assert donation.otp_hash != issue.code
    assert (issue.expires_at - clock.now).total_seconds() == 600


def test_verify_otp_moves_donation_to_picked_and_consumes_code(orchestrator, scheduled, db_session: Session):
    donation_id = scheduled["donation"].id
    issue = orchestrator.send_otp(donation_id)

    donation = orchestrator.verify_otp(donation_id, issue.code)

    assert donation.status == models.DonationStatus.PICKED
    assert donation.otp_hash is None
    assert donation.otp_expires_at is None
    with pytest.raises(NotFoundError):
        orchestrator.verify_otp(donation_id, issue.code)


def test_verify_otp_without_code_issued(orchestrator, scheduled):
    with pytest.raises(NotFoundError):
        orchestrator.verify_otp(scheduled["donation"].id, "123456")


def test_verify_otp_mismatch_leaves_donation_scheduled(orchestrator, scheduled, db_session: Session):
    donation_id = scheduled["donation"].id
    issue = orchestrator.send_otp(donation_id)

    with pytest.raises(OTPMismatchError):
        orchestrator.verify_otp(donation_id, wrong_code(issue.code))

    assert status_of(db_session, donation_id) == models.DonationStatus.SCHEDULED
    assert orchestrator.verify_otp(donation_id, issue.code).status == models.DonationStatus.PICKED


def test_verify_otp_expired(orchestrator, scheduled, db_session: Session, clock):
    donation_id = scheduled["donation"].id
    issue = orchestrator.send_otp(donation_id)
    clock.advance(minutes=10, seconds=1)

    with pytest.raises(OTPExpiredError):
        orchestrator.verify_otp(donation_id, issue.code)

    assert status_of(db_session, donation_id) == models.DonationStatus.SCHEDULED


def test_verify_otp_just_before_expiry(orchestrator, scheduled, clock):
    donation_id = scheduled["donation"].id
    issue = orchestrator.send_otp(donation_id)
    clock.advance(minutes=9, seconds=59)

    assert orchestrator.verify_otp(donation_id, issue.code).status == models.DonationStatus.PICKED


def test_resending_otp_replaces_previous_code(orchestrator, scheduled, clock, mocker):
    mocker.patch("app.services.otp_verifier.generate_otp", side_effect=["111111", "222222"])
    donation_id = scheduled["donation"].id
    first = orchestrator.send_otp(donation_id)
    clock.advance(minutes=5)
    second = orchestrator.send_otp(donation_id)

    assert second.expires_at > first.expires_at
    with pytest.raises(OTPMismatchError):
        orchestrator.verify_otp(donation_id, first.code)
    assert orchestrator.verify_otp(donation_id, second.code).status == models.DonationStatus.PICKED


def test_too_many_wrong_codes_invalidate_the_otp(orchestrator, scheduled, db_session: Session):
    donation_id = scheduled["donation"].id
    issue = orchestrator.send_otp(donation_id)
    bad = wrong_code(issue.code)

    for _ in range(3):
        with pytest.raises(OTPMismatchError):
            orchestrator.verify_otp(donation_id, bad)

    with pytest.raises(NotFoundError):
        orchestrator.verify_otp(donation_id, issue.code)
    assert status_of(db_session, donation_id) == models.DonationStatus.SCHEDULED

    fresh = orchestrator.send_otp(donation_id)
    assert orchestrator.verify_otp(donation_id, fresh.code).status == models.DonationStatus.PICKED


def test_failed_attempts_are_counted(orchestrator, scheduled, db_session: Session):
    donation_id = scheduled["donation"].id
    issue = orchestrator.send_otp(donation_id)

    with pytest.raises(OTPMismatchError):
        orchestrator.verify_otp(donation_id, wrong_code(issue.code))

    db_session.expire_all()
    assert crud_donation.get_donation(db_session, donation_id).otp_attempts == 1


def test_otp_actor_must_be_part_of_pickup(orchestrator, scheduled, db_session: Session):
    donation_id = scheduled["donation"].id
    outsider = create_volunteer(db_session, "outsider@example.com", "Out")

    with pytest.raises(AuthorizationError):
        orchestrator.send_otp(donation_id, actor_for(scheduled["v1"]))
    issue = orchestrator.send_otp(donation_id, actor_for(scheduled["ngo"]))
    with pytest.raises(AuthorizationError):
        orchestrator.verify_otp(donation_id, issue.code, actor_for(outsider))

    donation = orchestrator.verify_otp(donation_id, issue.code, actor_for(scheduled["v2"]))
    assert donation.status == models.DonationStatus.PICKED
