"""Shelter Handlers — shelter info, admin edit, and the shelter's public animal list."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.domain_types import VISIBLE_ANIMAL_STATES
from seepaw.core.pagination import check_page_bounds
from seepaw.core.result import Result, forbidden, not_found
from seepaw.models.animal import Animal
from seepaw.services import map_dtos
from seepaw.services.lookups import get_shelter
from seepaw.services.messages import GetShelter, EditShelter, ListShelterAnimals
from seepaw.services.paging import fetch_page

logger = logging.getLogger(__name__)


class ShelterHandlers:
    """Shelter query and edit handlers."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def get_shelter(self, query: GetShelter) -> Result:
        shelter = await get_shelter(self.db, query.shelter_id)
        if shelter is None:
            return not_found("Shelter not found")
        return Result.success(map_dtos.shelter_dto(shelter))

    async def edit_shelter(self, command: EditShelter) -> Result:
        if command.caller.shelter_id != command.shelter_id:
            return forbidden("Only administrators of this shelter can edit it")
        shelter = await get_shelter(self.db, command.shelter_id)
        if shelter is None:
            return not_found("Shelter not found")
        for field, value in command.payload.model_dump().items():
            setattr(shelter, field, value)
        await self.db.commit()
        logger.info("Shelter edited", extra={"shelter_id": shelter.id})
        return Result.success(map_dtos.shelter_dto(shelter))

    async def list_shelter_animals(self, query: ListShelterAnimals) -> Result:
        """Visible animals of one shelter ordered by name; 404 when none."""
        error = check_page_bounds(query.page, query.size, self.settings.max_page_size)
        if error:
            return error
        if await get_shelter(self.db, query.shelter_id) is None:
            return not_found("Shelter not found")

        stmt = (
            select(Animal)
            .where(
                Animal.shelter_id == query.shelter_id,
                Animal.animal_state.in_(VISIBLE_ANIMAL_STATES),
            )
            .order_by(Animal.name, Animal.id)
        )
        paged = await fetch_page(
            self.db, stmt, query.page, query.size, map_dtos.animal_summary,
        )
        if paged.total_count == 0:
            return not_found("No animals found for this shelter")
        return Result.success(paged)
