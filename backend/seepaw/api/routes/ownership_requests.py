"""Ownership Request Routes — adoption requests and the admin review workflow.

Invariants:
    - POST is open to any identified user; every PUT needs an admin of the animal's shelter
    - Transitions are path-named (analysing / approve / reject); the body never picks the state
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from seepaw.api.deps import get_caller, get_mediator
from seepaw.api.result_mapping import unwrap, unwrap_page
from seepaw.core.domain_types import Caller, OwnershipStatus
from seepaw.schemas.common import PagedResponse
from seepaw.schemas.ownership import (
    OwnershipRequestCreate, OwnershipRejection, OwnershipRequestResponse,
)
from seepaw.services import messages as m
from seepaw.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/ownership-requests", tags=["ownership-requests"])


@router.get("", response_model=PagedResponse[OwnershipRequestResponse])
async def list_shelter_requests(
    page: int = Query(1),
    size: int = Query(10),
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    """Requests for animals of the caller's shelter, newest first."""
    return unwrap_page(await mediator.send(
        m.ListShelterOwnershipRequests(caller, page=page, size=size),
    ))


@router.post(
    "", response_model=OwnershipRequestResponse, status_code=status.HTTP_201_CREATED,
)
async def create_request(
    body: OwnershipRequestCreate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        m.CreateOwnershipRequest(caller, body.animal_id, body.request_info),
    ))


@router.put("/{request_id}/analysing", response_model=OwnershipRequestResponse)
async def mark_analysing(
    request_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.UpdateOwnershipRequestStatus(
        caller, request_id, OwnershipStatus.ANALYSING,
    )))


@router.put("/{request_id}/approve", response_model=OwnershipRequestResponse)
async def approve_request(
    request_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.ApproveOwnershipRequest(caller, request_id)))


@router.put("/{request_id}/reject", response_model=OwnershipRequestResponse)
async def reject_request(
    request_id: UUID,
    body: OwnershipRejection | None = None,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    reason = body.reason if body else None
    return unwrap(await mediator.send(
        m.RejectOwnershipRequest(caller, request_id, reason),
    ))
