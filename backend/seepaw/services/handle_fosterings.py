"""Fostering Handlers — monthly sponsorships and the animal state they drive.

Invariants:
    - Active fostering total never exceeds animal.cost (422 otherwise)
    - Animal state recomputed from the active total on every add and cancel
      (core/enforce_fostering.state_for_total)
    - Only animals in a fostering-driven state are recomputed; Inactive / HasOwner stay put
"""

import logging
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.domain_types import FosteringStatus
from seepaw.core.enforce_fostering import (
    RECOMPUTABLE_STATES, check_month_value, state_for_total, validate_new_fostering,
)
from seepaw.core.result import Result, not_found
from seepaw.db.types import utc_now
from seepaw.models.animal import Animal
from seepaw.models.fostering import Fostering
from seepaw.services import map_dtos
from seepaw.services.lookups import get_animal
from seepaw.services.messages import AddFostering, CancelFostering, ListActiveFosterings

logger = logging.getLogger(__name__)


class FosteringHandlers:
    """Add, cancel and list fosterings."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def _active_total(self, animal_id) -> Decimal:
        total = await self.db.scalar(
            select(func.coalesce(func.sum(Fostering.amount), 0)).where(
                Fostering.animal_id == animal_id,
                Fostering.status == FosteringStatus.ACTIVE,
            ),
        )
        return Decimal(str(total or 0))

    async def _recompute_state(self, animal: Animal) -> None:
        if animal.animal_state not in RECOMPUTABLE_STATES:
            return
        await self.db.flush()
        new_state = state_for_total(await self._active_total(animal.id), animal.cost)
        if new_state is not None:
            animal.animal_state = new_state

    async def add_fostering(self, command: AddFostering) -> Result:
        error = check_month_value(command.month_value, self.settings.min_monthly_value)
        if error:
            return error
        animal = await get_animal(self.db, command.animal_id)
        if animal is None:
            return not_found("Animal not found")

        already = await self.db.scalar(
            select(Fostering.id).where(
                Fostering.animal_id == animal.id,
                Fostering.user_id == command.caller.id,
                Fostering.status == FosteringStatus.ACTIVE,
            ).limit(1),
        )
        error = validate_new_fostering(
            animal,
            command.month_value,
            already_fostering=already is not None,
            current_total=await self._active_total(animal.id),
        )
        if error:
            return error

        fostering = Fostering(
            animal_id=animal.id,
            user_id=command.caller.id,
            amount=command.month_value,
            status=FosteringStatus.ACTIVE,
            start_date=utc_now(),
        )
        self.db.add(fostering)
        await self._recompute_state(animal)
        await self.db.commit()
        await self.db.refresh(fostering)
        logger.info(
            f"Fostering added, animal now {animal.animal_state.value}",
            extra={"animal_id": animal.id, "user_id": command.caller.id},
        )
        return Result.success(map_dtos.fostering_dto(fostering), 201)

    async def cancel_fostering(self, command: CancelFostering) -> Result:
        fostering = await self.db.scalar(
            select(Fostering).where(
                Fostering.id == command.fostering_id,
                Fostering.user_id == command.caller.id,
                Fostering.status == FosteringStatus.ACTIVE,
            ),
        )
        if fostering is None:
            return not_found("Fostering not found")

        now = utc_now()
        fostering.status = FosteringStatus.CANCELLED
        fostering.end_date = now
        fostering.updated_at = now
        await self._recompute_state(fostering.animal)
        await self.db.commit()
        logger.info(
            "Fostering cancelled",
            extra={"animal_id": fostering.animal_id, "user_id": command.caller.id},
        )
        return Result.success(map_dtos.fostering_dto(fostering))

    async def list_active(self, query: ListActiveFosterings) -> Result:
        result = await self.db.execute(
            select(Fostering)
            .where(
                Fostering.user_id == query.caller.id,
                Fostering.status == FosteringStatus.ACTIVE,
            )
            .order_by(Fostering.start_date.desc()),
        )
        fosterings = result.scalars().all()
        if not fosterings:
            return not_found("No active fosterings found")
        return Result.success([map_dtos.fostering_dto(f) for f in fosterings])
