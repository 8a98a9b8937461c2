"""Favorite Handlers — per-user bookmarks of visible animals.

Invariants:
    - One row per (user, animal); deactivating flips is_active, re-adding reactivates
    - Only visible animals can be favorited (409 otherwise)
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.enforce_animals import check_favoritable
from seepaw.core.pagination import check_page_bounds
from seepaw.core.result import Result, conflict, not_found
from seepaw.db.types import utc_now
from seepaw.models.favorite import Favorite
from seepaw.services import map_dtos
from seepaw.services.lookups import get_animal
from seepaw.services.messages import AddFavorite, DeactivateFavorite, ListFavorites
from seepaw.services.paging import fetch_page

logger = logging.getLogger(__name__)


class FavoriteHandlers:

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def _find(self, user_id, animal_id) -> Favorite | None:
        return await self.db.scalar(
            select(Favorite).where(
                Favorite.user_id == user_id,
                Favorite.animal_id == animal_id,
            ),
        )

    async def add_favorite(self, command: AddFavorite) -> Result:
        animal = await get_animal(self.db, command.animal_id)
        if animal is None:
            return not_found("Animal not found")
        error = check_favoritable(animal)
        if error:
            return error

        favorite = await self._find(command.caller.id, animal.id)
        if favorite is not None and favorite.is_active:
            return conflict("Animal is already in favorites")
        if favorite is None:
            favorite = Favorite(user_id=command.caller.id, animal_id=animal.id)
            self.db.add(favorite)
        else:
            favorite.is_active = True
            favorite.updated_at = utc_now()
        await self.db.commit()
        await self.db.refresh(favorite)
        logger.info(
            "Favorite added",
            extra={"animal_id": animal.id, "user_id": command.caller.id},
        )
        return Result.success(map_dtos.favorite_dto(favorite), 201)

    async def deactivate_favorite(self, command: DeactivateFavorite) -> Result:
        favorite = await self._find(command.caller.id, command.animal_id)
        if favorite is None or not favorite.is_active:
            return not_found("Favorite not found")
        favorite.is_active = False
        favorite.updated_at = utc_now()
        await self.db.commit()
        return Result.success(map_dtos.favorite_dto(favorite))

    async def list_favorites(self, query: ListFavorites) -> Result:
        error = check_page_bounds(query.page, query.size, self.settings.max_page_size)
        if error:
            return error
        stmt = (
            select(Favorite)
            .where(Favorite.user_id == query.caller.id, Favorite.is_active.is_(True))
            .order_by(Favorite.created_at.desc(), Favorite.id)
        )
        paged = await fetch_page(
            self.db, stmt, query.page, query.size, map_dtos.favorite_dto,
        )
        return Result.success(paged)
