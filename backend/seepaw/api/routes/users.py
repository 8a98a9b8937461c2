"""User Routes — the caller's profile."""

from fastapi import APIRouter, Depends

from seepaw.api.deps import get_caller, get_mediator
from seepaw.api.result_mapping import unwrap
from seepaw.core.domain_types import Caller
from seepaw.schemas.user import UserProfileResponse, UserProfileUpdate
from seepaw.services import messages as m
from seepaw.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/me", response_model=UserProfileResponse)
async def get_profile(
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.GetUserProfile(caller)))


@router.put("/me", response_model=UserProfileResponse)
async def edit_profile(
    body: UserProfileUpdate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.EditUserProfile(caller, body)))
