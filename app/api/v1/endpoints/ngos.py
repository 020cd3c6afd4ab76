# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from fastapi import APIRouter, Depends, status

from app.dependencies import get_current_actor, get_orchestrator
from app.schemas import schemas
from app.services.workflow_orchestrator import WorkflowOrchestrator

router = APIRouter(
    tags=["NGO Membership"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/ngos/{ngo_id}/volunteer-requests",
    response_model=schemas.NGORequest,
    status_code=status.HTTP_201_CREATED,
)
def submit_volunteer_request(
    ngo_id: int,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Lets a volunteer ask to join an NGO. (Volunteer access required)
    """
    return orchestrator.submit_volunteer_request(actor, ngo_id)


@router.post("/ngo-requests/{request_id}/accept", response_model=schemas.Membership)
def accept_volunteer_request(
    request_id: int,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Accepts a join request. Accepting twice returns the same membership.
    """
    return orchestrator.accept_volunteer_request(actor, request_id)


@router.post("/ngo-requests/{request_id}/reject", response_model=schemas.NGORequest)
def reject_volunteer_request(
    request_id: int,
    actor: schemas.Actor = Depends(get_current_actor),
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.reject_volunteer_request(actor, request_id)
