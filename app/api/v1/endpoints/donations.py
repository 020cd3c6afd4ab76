# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, status

from app.dependencies import get_current_actor, get_orchestrator
from app.events import otp_handlers
from app.schemas import schemas
from app.services.workflow_orchestrator import WorkflowOrchestrator

router = APIRouter(
    prefix="/donations",
    tags=["Donations"],
    responses={404: {"description": "Not found"}},
)


@router.post("/", response_model=schemas.Donation, status_code=status.HTTP_201_CREATED)
def create_donation(
    donation: schemas.DonationCreate,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Posts a new surplus food donation. (Donor access required)
    """
    return orchestrator.create_donation(actor, donation)


@router.get("/{donation_id}", response_model=schemas.Donation)
def read_donation(
    donation_id: int,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.get_donation(donation_id)


@router.post(
    "/{donation_id}/requests", response_model=schemas.DonationRequest, status_code=status.HTTP_201_CREATED
)
def submit_donation_request(
    donation_id: int,
    body: schemas.DonationRequestCreate,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Lets an NGO claim a New donation. (NGO access required)
    """
    return orchestrator.submit_donation_request(actor, donation_id, body.message)


@router.get("/{donation_id}/requests", response_model=List[schemas.DonationRequest])
def read_donation_requests(
    donation_id: int,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Lists the NGO requests on a donation. Only its donor may see them.
    """
    return orchestrator.list_donation_requests(actor, donation_id)


@router.post("/{donation_id}/schedule", response_model=schemas.ScheduledPickup)
def schedule_pickup(
    donation_id: int,
    plan: schemas.SchedulePickupRequest,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Assigns a volunteer team to an Assigned donation. (Assigned NGO only)
    """
    donation, team = orchestrator.schedule_pickup(actor, donation_id, plan)
    return schemas.ScheduledPickup(
        donation=schemas.Donation.model_validate(donation),
        team=schemas.DonationTeam.model_validate(team),
    )


@router.get("/{donation_id}/team", response_model=schemas.DonationTeam)
def read_donation_team(
    donation_id: int,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.get_donation_team(donation_id)


@router.post("/{donation_id}/otp", response_model=schemas.OTPSent, status_code=status.HTTP_202_ACCEPTED)
def send_otp(
    donation_id: int,
    background_tasks: BackgroundTasks,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Issues a pickup code and emails it to the donor. The code itself is never
    part of the response.
    """
    issue = orchestrator.send_otp(donation_id, actor)
    donation = issue.donation
    background_tasks.add_task(
        otp_handlers.deliver_pickup_otp,
        donation.id,
        donation.email or donation.donor.email,
        donation.title,
        issue.code,
        issue.expires_at,
    )
    return schemas.OTPSent(donation_id=donation.id, expires_at=issue.expires_at)


@router.post("/{donation_id}/otp/verify", response_model=schemas.Donation)
def verify_otp(
    donation_id: int,
    body: schemas.OTPVerifyRequest,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Confirms pickup with the code the donor handed over.
    """
    return orchestrator.verify_otp(donation_id, body.otp, actor)


@router.post("/{donation_id}/complete", response_model=schemas.Donation)
def mark_donation_completed(
    donation_id: int,
    body: schemas.CompletionRequest,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Marks a picked-up donation as delivered and releases its volunteers. (Assigned NGO only)
    """
    return orchestrator.mark_donation_completed(actor, donation_id, body.proof_files)
