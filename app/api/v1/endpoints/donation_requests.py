# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from fastapi import APIRouter, Depends

from app.dependencies import get_current_actor, get_orchestrator
from app.schemas import schemas
from app.services.workflow_orchestrator import WorkflowOrchestrator

router = APIRouter(
    prefix="/donation-requests",
    tags=["Donation Requests"],
    responses={404: {"description": "Not found"}},
)


@router.post("/{request_id}/approve", response_model=schemas.Donation)
def approve_request(
    request_id: int,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Approves one NGO's request; every other pending request on the donation is rejected.
    """
    return orchestrator.approve_request(actor, request_id)


@router.post("/{request_id}/reject", response_model=schemas.DonationRequest)
def reject_request(
    request_id: int,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.reject_request(actor, request_id)
