"""Lookups — single-row loaders shared by every handler.

Invariants:
    - Return None when the row does not exist; handlers decide the failure code
    - refresh=True reloads attributes and selectin relationships of an object already
      in the session (used after commit to return fresh DTOs)
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.models.activity import Activity
from seepaw.models.animal import Animal
from seepaw.models.breed import Breed
from seepaw.models.ownership_request import OwnershipRequest
from seepaw.models.shelter import Shelter
from seepaw.models.user import User


async def _get(db: AsyncSession, model, row_id: UUID, refresh: bool = False):
    query = select(model).where(model.id == row_id)
    if refresh:
        query = query.execution_options(populate_existing=True)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_animal(db: AsyncSession, animal_id: UUID, refresh: bool = False) -> Animal | None:
    return await _get(db, Animal, animal_id, refresh)


async def get_shelter(db: AsyncSession, shelter_id: UUID, refresh: bool = False) -> Shelter | None:
    return await _get(db, Shelter, shelter_id, refresh)


async def get_breed(db: AsyncSession, breed_id: UUID) -> Breed | None:
    return await _get(db, Breed, breed_id)


async def get_user(db: AsyncSession, user_id: UUID) -> User | None:
    return await _get(db, User, user_id)


async def get_activity(
    db: AsyncSession, activity_id: UUID, refresh: bool = False,
) -> Activity | None:
    return await _get(db, Activity, activity_id, refresh)


async def get_ownership_request(
    db: AsyncSession, request_id: UUID, refresh: bool = False,
) -> OwnershipRequest | None:
    return await _get(db, OwnershipRequest, request_id, refresh)
