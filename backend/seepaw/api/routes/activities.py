"""Activity Routes — ownership pick-ups and fostering visits.

Invariants:
    - Every route acts on behalf of the caller; no admin view of other users' activities
    - Ownership list: status filter is a free string parsed by the handler (400 if unknown)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from seepaw.api.deps import get_caller, get_mediator
from seepaw.api.result_mapping import unwrap, unwrap_page
from seepaw.core.domain_types import Caller
from seepaw.schemas.activity import (
    ActivityCreate, ActivityResponse, FosteringActivityResponse,
)
from seepaw.schemas.common import PagedResponse
from seepaw.services import messages as m
from seepaw.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/activities", tags=["activities"])


# ─── Ownership ───────────────────────────────────────────────────

@router.get("/ownership", response_model=PagedResponse[ActivityResponse])
async def list_ownership_activities(
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(1),
    size: int = Query(20),
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap_page(await mediator.send(m.ListOwnershipActivities(
        caller, status=status_filter, page=page, size=size,
    )))


@router.post(
    "/ownership", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED,
)
async def create_ownership_activity(
    body: ActivityCreate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.CreateOwnershipActivity(
        caller, body.animal_id, body.start_date, body.end_date,
    )))


@router.patch("/ownership/{activity_id}/cancel", response_model=ActivityResponse)
async def cancel_ownership_activity(
    activity_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.CancelOwnershipActivity(caller, activity_id)))


# ─── Fostering ───────────────────────────────────────────────────

@router.get("/fostering", response_model=PagedResponse[FosteringActivityResponse])
async def list_fostering_activities(
    page: int = Query(1),
    size: int = Query(10),
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    """Upcoming visits to animals the caller still fosters."""
    return unwrap_page(await mediator.send(
        m.ListFosteringActivities(caller, page=page, size=size),
    ))


@router.post(
    "/fostering",
    response_model=FosteringActivityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_fostering_activity(
    body: ActivityCreate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.CreateFosteringActivity(
        caller, body.animal_id, body.start_date, body.end_date,
    )))


@router.patch("/fostering/{activity_id}/cancel", response_model=FosteringActivityResponse)
async def cancel_fostering_activity(
    activity_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.CancelFosteringActivity(caller, activity_id)))
