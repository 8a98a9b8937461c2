"""Breed Handlers — list, create, and sync breeds from the external catalogue.

Invariants:
    - Breed names are unique case-insensitively
    - Sync only inserts names not already present; existing breeds are never modified

Design Decisions:
    - Catalogue client injected (not constructed here): tests replace it with a fake
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.core.result import Result, conflict, forbidden
from seepaw.infrastructure.breed_catalog import BreedCatalogClient
from seepaw.models.breed import Breed
from seepaw.schemas.breed import BreedSyncResponse
from seepaw.services import map_dtos
from seepaw.services.messages import ListBreeds, CreateBreed, SyncBreeds

logger = logging.getLogger(__name__)


class BreedHandlers:
    """Breed reference-data handlers."""

    def __init__(self, db: AsyncSession, catalog: BreedCatalogClient | None = None):
        self.db = db
        self.catalog = catalog

    async def list_breeds(self, query: ListBreeds) -> Result:
        result = await self.db.execute(select(Breed).order_by(Breed.name))
        return Result.success([map_dtos.breed_dto(b) for b in result.scalars().all()])

    async def create_breed(self, command: CreateBreed) -> Result:
        if not command.caller.is_shelter_admin:
            return forbidden("Only shelter administrators can create breeds")
        name = command.payload.name
        existing = await self.db.scalar(
            select(Breed.id).where(func.lower(Breed.name) == name.lower()),
        )
        if existing is not None:
            return conflict(f"Breed '{name}' already exists")
        breed = Breed(name=name, description=command.payload.description)
        self.db.add(breed)
        await self.db.commit()
        return Result.success(map_dtos.breed_dto(breed), 201)

    async def sync_breeds(self, command: SyncBreeds) -> Result:
        """Pull the catalogue and add unknown names. ExternalServiceError propagates (502)."""
        if not command.caller.is_shelter_admin:
            return forbidden("Only shelter administrators can sync breeds")
        if self.catalog is None:
            return Result.failure("Breed catalogue is not configured", 500)

        catalog_breeds = await self.catalog.fetch_breeds()
        result = await self.db.execute(select(Breed.name))
        known = {name.lower() for name in result.scalars().all()}

        added = 0
        for entry in catalog_breeds:
            if entry.name.lower() in known:
                continue
            self.db.add(Breed(name=entry.name, description=entry.description))
            known.add(entry.name.lower())
            added += 1
        await self.db.commit()

        logger.info(f"Breed sync finished: {added} added", extra={"added": added})
        return Result.success(BreedSyncResponse(added=added, total=len(known)))
