"""User Handlers — the caller's own profile."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.core.result import Result, not_found
from seepaw.services import map_dtos
from seepaw.services.lookups import get_user
from seepaw.services.messages import GetUserProfile, EditUserProfile

logger = logging.getLogger(__name__)


class UserHandlers:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self, query: GetUserProfile) -> Result:
        user = await get_user(self.db, query.caller.id)
        if user is None:
            return not_found("User not found")
        return Result.success(map_dtos.user_profile_dto(user))

    async def edit_profile(self, command: EditUserProfile) -> Result:
        user = await get_user(self.db, command.caller.id)
        if user is None:
            return not_found("User not found")
        for field, value in command.payload.model_dump().items():
            setattr(user, field, value)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info("Profile updated", extra={"user_id": user.id})
        return Result.success(map_dtos.user_profile_dto(user))
