"""API Dependencies — caller identity, settings, and the per-request Mediator.

Invariants:
    - Identity comes from the X-User-Id header; missing, malformed or unknown → 401
    - The Caller carries shelter_id so admin checks never re-query the user
    - One Mediator per request, bound to that request's session

Design Decisions:
    - Header identity instead of token handling: authentication happens in front of
      the API (gateway / proxy), this service trusts the resolved user id
    - Every collaborator is a dependency so tests override get_db / get_breed_catalog
      instead of patching modules
"""

import uuid

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings, get_settings
from seepaw.core.domain_types import Caller
from seepaw.core.errors import UnauthenticatedError
from seepaw.infrastructure.breed_catalog import BreedCatalogClient
from seepaw.infrastructure.database import get_db
from seepaw.models.user import User
from seepaw.services.mediator import Mediator


async def get_caller(
    x_user_id: str | None = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> Caller:
    """Resolve the authenticated user. Raises UnauthenticatedError (401)."""
    if not x_user_id:
        raise UnauthenticatedError()
    try:
        user_id = uuid.UUID(x_user_id.strip())
    except ValueError:
        raise UnauthenticatedError("Invalid user id")
    user = await db.get(User, user_id)
    if user is None:
        raise UnauthenticatedError("Unknown user")
    return Caller(id=user.id, shelter_id=user.shelter_id)


def get_breed_catalog(
    settings: Settings = Depends(get_settings),
) -> BreedCatalogClient:
    return BreedCatalogClient(
        settings.breed_api_url,
        api_key=settings.breed_api_key,
        timeout_seconds=settings.breed_api_timeout_seconds,
        max_retries=settings.breed_api_max_retries,
        base_delay_ms=settings.breed_api_base_delay_ms,
    )


def get_mediator(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    catalog: BreedCatalogClient = Depends(get_breed_catalog),
) -> Mediator:
    return Mediator(db, settings, catalog)
