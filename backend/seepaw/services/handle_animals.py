"""Animal Handlers — public catalogue queries and shelter-admin lifecycle commands.

Invariants:
    - Public queries only return Available / PartiallyFostered animals
    - Admin commands act only on animals of the caller's own shelter
    - Deletion is allowed only for Available animals and removes dependent rows explicitly
      (SQLite test databases do not enforce ON DELETE CASCADE)

Design Decisions:
    - Age filter converted to a birth_date range (core/enforce_animals.py) so filtering
      happens in SQL
    - Empty catalogue is a 404, matching the shelter-animals listing
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.domain_types import AnimalState, VISIBLE_ANIMAL_STATES
from seepaw.core.enforce_animals import (
    birth_date_range_for_age,
    check_animal_in_shelter,
    check_deactivatable,
    check_deletable,
    check_shelter_admin,
    check_visible,
)
from seepaw.core.pagination import check_page_bounds
from seepaw.core.result import Result, not_found
from seepaw.db.types import utc_now
from seepaw.models.activity import Activity
from seepaw.models.animal import Animal
from seepaw.models.breed import Breed
from seepaw.models.favorite import Favorite
from seepaw.models.notification import Notification
from seepaw.models.ownership_request import OwnershipRequest
from seepaw.models.shelter import Shelter
from seepaw.services import map_dtos
from seepaw.services.lookups import get_animal, get_breed, get_shelter
from seepaw.services.messages import (
    ListAnimals, GetAnimalDetails, CreateAnimal, EditAnimal,
    DeactivateAnimal, DeleteAnimal,
)
from seepaw.services.paging import fetch_page

logger = logging.getLogger(__name__)


class AnimalHandlers:
    """Animal catalogue and lifecycle handlers."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def list_animals(self, query: ListAnimals) -> Result:
        """Visible animals, filtered, ordered by name, paged."""
        error = check_page_bounds(query.page, query.size, self.settings.max_page_size)
        if error:
            return error

        stmt = (
            select(Animal)
            .join(Shelter, Animal.shelter_id == Shelter.id)
            .join(Breed, Animal.breed_id == Breed.id)
            .where(Animal.animal_state.in_(VISIBLE_ANIMAL_STATES))
        )
        if query.species:
            stmt = stmt.where(Animal.species == query.species)
        if query.size_type:
            stmt = stmt.where(Animal.size == query.size_type)
        if query.sex:
            stmt = stmt.where(Animal.sex == query.sex)
        if query.breed_id:
            stmt = stmt.where(Animal.breed_id == query.breed_id)
        if query.name:
            stmt = stmt.where(Animal.name.ilike(f"%{query.name.strip()}%"))
        if query.shelter_name:
            stmt = stmt.where(Shelter.name.ilike(f"%{query.shelter_name.strip()}%"))
        if query.age is not None:
            earliest_exclusive, latest = birth_date_range_for_age(
                query.age, utc_now().date(),
            )
            stmt = stmt.where(
                Animal.birth_date > earliest_exclusive,
                Animal.birth_date <= latest,
            )
        stmt = stmt.order_by(Animal.name, Animal.id)

        paged = await fetch_page(
            self.db, stmt, query.page, query.size, map_dtos.animal_summary,
        )
        if paged.total_count == 0:
            return not_found("No animals found")
        return Result.success(paged)

    async def get_animal_details(self, query: GetAnimalDetails) -> Result:
        animal = await get_animal(self.db, query.animal_id)
        error = check_visible(animal)
        if error:
            return error
        return Result.success(map_dtos.animal_details(animal))

    async def create_animal(self, command: CreateAnimal) -> Result:
        """Register an animal in the caller's shelter. New animals start Available."""
        caller = command.caller
        error = check_shelter_admin(caller)
        if error:
            return error
        shelter = await get_shelter(self.db, caller.shelter_id)
        if shelter is None:
            return not_found("Shelter not found")
        payload = command.payload
        if await get_breed(self.db, payload.breed_id) is None:
            return not_found("Breed not found")

        animal = Animal(
            **payload.model_dump(),
            shelter_id=shelter.id,
            animal_state=AnimalState.AVAILABLE,
        )
        self.db.add(animal)
        await self.db.commit()
        animal = await get_animal(self.db, animal.id, refresh=True)
        logger.info(
            f"Animal '{animal.name}' created",
            extra={"animal_id": animal.id, "shelter_id": shelter.id},
        )
        return Result.success(map_dtos.animal_details(animal), 201)

    async def edit_animal(self, command: EditAnimal) -> Result:
        caller = command.caller
        error = check_shelter_admin(caller)
        if error:
            return error
        if await get_shelter(self.db, caller.shelter_id) is None:
            return not_found("Shelter not found")
        animal = await get_animal(self.db, command.animal_id)
        error = check_animal_in_shelter(animal, caller.shelter_id)
        if error:
            return error
        payload = command.payload
        if await get_breed(self.db, payload.breed_id) is None:
            return not_found("Breed not found")

        for field, value in payload.model_dump().items():
            setattr(animal, field, value)
        await self.db.commit()
        animal = await get_animal(self.db, animal.id, refresh=True)
        logger.info("Animal edited", extra={"animal_id": animal.id})
        return Result.success(map_dtos.animal_details(animal))

    async def deactivate_animal(self, command: DeactivateAnimal) -> Result:
        caller = command.caller
        error = check_shelter_admin(caller)
        if error:
            return error
        animal = await get_animal(self.db, command.animal_id)
        error = (
            check_animal_in_shelter(animal, caller.shelter_id)
            or check_deactivatable(animal)
        )
        if error:
            return error

        animal.animal_state = AnimalState.INACTIVE
        await self.db.execute(
            update(Favorite)
            .where(Favorite.animal_id == animal.id, Favorite.is_active.is_(True))
            .values(is_active=False, updated_at=utc_now()),
        )
        await self.db.commit()
        logger.info("Animal deactivated", extra={"animal_id": animal.id})
        return Result.success(map_dtos.animal_details(animal))

    async def delete_animal(self, command: DeleteAnimal) -> Result:
        caller = command.caller
        error = check_shelter_admin(caller)
        if error:
            return error
        animal = await get_animal(self.db, command.animal_id)
        error = (
            check_animal_in_shelter(animal, caller.shelter_id)
            or check_deletable(animal)
        )
        if error:
            return error

        await self.db.execute(
            update(Notification)
            .where(Notification.animal_id == animal.id)
            .values(animal_id=None, ownership_request_id=None, activity_id=None),
        )
        await self.db.execute(delete(Favorite).where(Favorite.animal_id == animal.id))
        await self.db.execute(
            delete(OwnershipRequest).where(OwnershipRequest.animal_id == animal.id),
        )
        activities = (await self.db.execute(
            select(Activity).where(Activity.animal_id == animal.id),
        )).scalars().all()
        for activity in activities:
            await self.db.delete(activity)
        await self.db.delete(animal)
        await self.db.commit()
        logger.info("Animal deleted", extra={"animal_id": command.animal_id})
        return Result.success(None, 204)
