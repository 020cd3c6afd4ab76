# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import pytest
from sqlalchemy.orm import Session

from app.crud import crud_donation, crud_donation_request, crud_profile
from app.db import models
from app.errors import AuthorizationError, NotFoundError, StateConflictError, ValidationError
from app.services.request_ledger import RequestLedger
from tests.test_helpers import actor_for, create_donor, create_ngo


def test_submit_donation_request_creates_pending_request(orchestrator, workflow):
    request = orchestrator.submit_donation_request(
        actor_for(workflow["ngo"]), workflow["donation"].id, "We can handle this"
    )

    assert request.id is not None
    assert request.status == models.DonationRequestStatus.PENDING
    assert request.donor_id == workflow["donor"].id
    assert request.ngo_id == workflow["ngo"].id
    assert request.message == "We can handle this"


def test_submit_donation_request_requires_ngo_role(orchestrator, workflow):
    with pytest.raises(AuthorizationError):
        orchestrator.submit_donation_request(actor_for(workflow["v1"]), workflow["donation"].id, "hi")


def test_submit_donation_request_unknown_donation(orchestrator, workflow):
    with pytest.raises(NotFoundError):
        orchestrator.submit_donation_request(actor_for(workflow["ngo"]), 9999, "hi")


def test_submit_donation_request_twice_is_rejected(orchestrator, workflow):
    ngo = actor_for(workflow["ngo"])
    orchestrator.submit_donation_request(ngo, workflow["donation"].id, "first")

    with pytest.raises(ValidationError):
        orchestrator.submit_donation_request(ngo, workflow["donation"].id, "retry")


def test_submit_donation_request_after_assignment_conflicts(orchestrator, workflow, db_session: Session):
    request = orchestrator.submit_donation_request(actor_for(workflow["ngo"]), workflow["donation"].id, None)
    orchestrator.approve_request(actor_for(workflow["donor"]), request.id)
    other_ngo = create_ngo(db_session, "late@example.com", "Late NGO")

    with pytest.raises(StateConflictError):
        orchestrator.submit_donation_request(actor_for(other_ngo), workflow["donation"].id, "too late")


def test_approve_request_assigns_donation_and_rejects_competitors(orchestrator, workflow, db_session: Session):
    donation_id = workflow["donation"].id
    other_ngo = create_ngo(db_session, "other@example.com", "Other NGO")
    winner = orchestrator.submit_donation_request(actor_for(workflow["ngo"]), donation_id, "ours")
    loser = orchestrator.submit_donation_request(actor_for(other_ngo), donation_id, "theirs")

    donation = orchestrator.approve_request(actor_for(workflow["donor"]), winner.id)

    assert donation.status == models.DonationStatus.ASSIGNED
    assert donation.assigned_ngo_id == workflow["ngo"].id
    assert crud_donation_request.get_donation_request(db_session, winner.id).status == models.DonationRequestStatus.APPROVED
    assert crud_donation_request.get_donation_request(db_session, loser.id).status == models.DonationRequestStatus.REJECTED
    assert crud_profile.get_ngo_profile(db_session, workflow["ngo"].id).donations_handled == [donation_id]
    assert crud_profile.get_ngo_profile(db_session, other_ngo.id).donations_handled == []


def test_approve_request_competing_approvals_have_one_winner(orchestrator, workflow, db_session: Session):
    donation_id = workflow["donation"].id
    donor = actor_for(workflow["donor"])
    ngos = [workflow["ngo"]] + [create_ngo(db_session, f"ngo{i}@example.com", f"NGO {i}") for i in range(3)]
    requests = [orchestrator.submit_donation_request(actor_for(ngo), donation_id, None) for ngo in ngos]

    outcomes = []
    for request in requests:
        try:
            orchestrator.approve_request(donor, request.id)
            outcomes.append("approved")
        except StateConflictError:
            outcomes.append("conflict")

    assert outcomes.count("approved") == 1
    statuses = [r.status for r in crud_donation_request.get_requests_for_donation(db_session, donation_id)]
    assert statuses.count(models.DonationRequestStatus.APPROVED) == 1
    assert statuses.count(models.DonationRequestStatus.REJECTED) == len(requests) - 1
    assert crud_donation.get_donation(db_session, donation_id).status == models.DonationStatus.ASSIGNED
    assert crud_profile.get_ngo_profile(db_session, ngos[0].id).donations_handled == [donation_id]


def test_status_compare_and_set_has_single_winner(workflow, db_session: Session):
    donation_id = workflow["donation"].id

    first = crud_donation.transition_status(
        db_session, donation_id, models.DonationStatus.NEW, models.DonationStatus.ASSIGNED,
        assigned_ngo_id=workflow["ngo"].id,
    )
    second = crud_donation.transition_status(
        db_session, donation_id, models.DonationStatus.NEW, models.DonationStatus.ASSIGNED,
        assigned_ngo_id=999,
    )
    db_session.commit()

    assert first is True
    assert second is False
    assert crud_donation.get_donation(db_session, donation_id).assigned_ngo_id == workflow["ngo"].id


def test_approve_loses_race_after_precheck(workflow, db_session: Session, mocker):
    """A concurrent approval landing between the status read and the write yields a conflict."""
    ledger = RequestLedger(db_session)
    request = ledger.submit(workflow["ngo"].id, workflow["donation"].id, None)
    db_session.commit()
    mocker.patch("app.crud.crud_donation.transition_status", return_value=False)

    with pytest.raises(StateConflictError):
        ledger.approve(workflow["donor"].id, request.id)
    db_session.rollback()

    assert crud_donation.get_donation(db_session, workflow["donation"].id).status == models.DonationStatus.NEW
    assert crud_donation_request.get_donation_request(db_session, request.id).status == models.DonationRequestStatus.PENDING


def test_approve_request_by_other_donor_is_forbidden(orchestrator, workflow, db_session: Session):
    request = orchestrator.submit_donation_request(actor_for(workflow["ngo"]), workflow["donation"].id, None)
    stranger = create_donor(db_session, "stranger@example.com")

    with pytest.raises(AuthorizationError):
        orchestrator.approve_request(actor_for(stranger), request.id)

    assert crud_donation.get_donation(db_session, workflow["donation"].id).status == models.DonationStatus.NEW


def test_approve_request_not_found(orchestrator, workflow):
    with pytest.raises(NotFoundError):
        orchestrator.approve_request(actor_for(workflow["donor"]), 12345)


def test_approve_request_requires_donor_role(orchestrator, workflow):
    request = orchestrator.submit_donation_request(actor_for(workflow["ngo"]), workflow["donation"].id, None)

    with pytest.raises(AuthorizationError):
        orchestrator.approve_request(actor_for(workflow["ngo"]), request.id)


def test_reject_request(orchestrator, workflow, db_session: Session):
    request = orchestrator.submit_donation_request(actor_for(workflow["ngo"]), workflow["donation"].id, None)

    rejected = orchestrator.reject_request(actor_for(workflow["donor"]), request.id)

    assert rejected.status == models.DonationRequestStatus.REJECTED
    with pytest.raises(StateConflictError):
        orchestrator.approve_request(actor_for(workflow["donor"]), request.id)
    assert crud_donation.get_donation(db_session, workflow["donation"].id).status == models.DonationStatus.NEW


def test_list_donation_requests_only_for_owner(orchestrator, workflow, db_session: Session):
    orchestrator.submit_donation_request(actor_for(workflow["ngo"]), workflow["donation"].id, None)
    stranger = create_donor(db_session, "stranger@example.com")

    requests = orchestrator.list_donation_requests(actor_for(workflow["donor"]), workflow["donation"].id)

    assert len(requests) == 1
    with pytest.raises(AuthorizationError):
        orchestrator.list_donation_requests(actor_for(stranger), workflow["donation"].id)
