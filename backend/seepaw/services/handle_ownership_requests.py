"""Ownership Request Handlers — the adoption workflow from request to approved owner.

Invariants:
    - Transitions follow core/enforce_ownership.ALLOWED_TRANSITIONS, nothing else
    - Every admin command is scoped to the caller's shelter (403 otherwise)
    - Approval is atomic: request Approved, animal HasOwner, fosterings cancelled, future
      fostering visits cancelled with slots freed, competing requests auto-rejected —
      all in one commit
    - Every transition stages a notification for the affected user(s) in the same commit

Design Decisions:
    - Rejected requests stay visible to the requester for rejected_request_window_days
      so the outcome can be read before it disappears from the list
"""

import logging
from datetime import timedelta

from sqlalchemy import select, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.domain_types import (
    ActivityStatus, ActivityType, AnimalState, FosteringStatus, NotificationType,
    OwnershipStatus, SlotStatus,
)
from seepaw.core.enforce_ownership import (
    AUTO_REJECT_MESSAGE,
    check_admin_for_animal,
    check_animal_adoptable,
    check_eligibility,
    check_no_existing_request,
    check_shelter_admin,
    check_status_update_target,
    check_transition,
    validate_approval,
    validate_rejection,
)
from seepaw.core.pagination import check_page_bounds
from seepaw.core.result import Result, not_found
from seepaw.db.types import utc_now
from seepaw.models.activity import Activity
from seepaw.models.animal import Animal
from seepaw.models.fostering import Fostering
from seepaw.models.ownership_request import OwnershipRequest
from seepaw.schemas.animal import EligibilityResponse
from seepaw.services import map_dtos
from seepaw.services.lookups import get_animal, get_ownership_request, get_shelter
from seepaw.services.messages import (
    CreateOwnershipRequest, UpdateOwnershipRequestStatus, ApproveOwnershipRequest,
    RejectOwnershipRequest, ListShelterOwnershipRequests, ListUserOwnershipRequests,
    ListOwnedAnimals, CheckEligibility,
)
from seepaw.services.notify import notify_user, notify_shelter_admins
from seepaw.services.paging import fetch_page

logger = logging.getLogger(__name__)


class OwnershipRequestHandlers:
    """Adoption request workflow handlers."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    # ─── Commands ────────────────────────────────────────────────

    async def create_request(self, command: CreateOwnershipRequest) -> Result:
        animal = await get_animal(self.db, command.animal_id)
        if animal is None:
            return not_found("Animal not found")
        existing = await self.db.scalar(
            select(OwnershipRequest.id).where(
                OwnershipRequest.animal_id == animal.id,
                OwnershipRequest.user_id == command.caller.id,
            ),
        )
        error = (
            check_animal_adoptable(animal)
            or check_no_existing_request(existing is not None)
        )
        if error:
            return error

        request = OwnershipRequest(
            animal_id=animal.id,
            user_id=command.caller.id,
            amount=animal.cost,
            status=OwnershipStatus.PENDING,
            request_info=command.request_info,
        )
        self.db.add(request)
        await self.db.flush()
        await notify_shelter_admins(
            self.db, animal.shelter_id, NotificationType.NEW_OWNERSHIP_REQUEST,
            f"New ownership request for {animal.name}",
            animal_id=animal.id, ownership_request_id=request.id,
        )
        await self.db.commit()
        request = await get_ownership_request(self.db, request.id, refresh=True)
        logger.info(
            "Ownership request created",
            extra={"request_id": request.id, "animal_id": animal.id, "user_id": command.caller.id},
        )
        return Result.success(map_dtos.ownership_request_dto(request), 201)

    async def update_status(self, command: UpdateOwnershipRequestStatus) -> Result:
        """Move a Pending (or previously Rejected) request into Analysing."""
        error = (
            check_status_update_target(command.new_status)
            or check_shelter_admin(command.caller)
        )
        if error:
            return error
        request = await get_ownership_request(self.db, command.request_id)
        if request is None:
            return not_found("Ownership request not found")
        error = (
            check_admin_for_animal(command.caller, request.animal)
            or check_transition(request.status, OwnershipStatus.ANALYSING)
        )
        if error:
            return error

        request.status = OwnershipStatus.ANALYSING
        request.updated_at = utc_now()
        notify_user(
            self.db, request.user_id, NotificationType.OWNERSHIP_REQUEST_ANALYSING,
            f"Your ownership request for {request.animal.name} is being analysed",
            animal_id=request.animal_id, ownership_request_id=request.id,
        )
        await self.db.commit()
        logger.info("Ownership request analysing", extra={"request_id": request.id})
        return Result.success(map_dtos.ownership_request_dto(request))

    async def approve_request(self, command: ApproveOwnershipRequest) -> Result:
        error = check_shelter_admin(command.caller)
        if error:
            return error
        request = await get_ownership_request(self.db, command.request_id)
        if request is None:
            return not_found("Ownership request not found")
        animal = request.animal
        error = check_admin_for_animal(command.caller, animal)
        if error:
            return error
        other_approved = await self.db.scalar(
            select(OwnershipRequest.id).where(
                OwnershipRequest.animal_id == animal.id,
                OwnershipRequest.id != request.id,
                OwnershipRequest.status == OwnershipStatus.APPROVED,
            ),
        )
        error = validate_approval(
            request, animal, has_other_approved=other_approved is not None,
        )
        if error:
            return error

        now = utc_now()
        request.status = OwnershipStatus.APPROVED
        request.approved_at = now
        request.updated_at = now
        animal.owner_id = request.user_id
        animal.ownership_start_date = now
        animal.animal_state = AnimalState.HAS_OWNER

        await self._end_fosterings(animal, now)
        rejected = await self._reject_competing_requests(request, now)

        notify_user(
            self.db, request.user_id, NotificationType.OWNERSHIP_REQUEST_APPROVED,
            f"Your ownership request for {animal.name} was approved",
            animal_id=animal.id, ownership_request_id=request.id,
        )
        await self.db.commit()
        logger.info(
            f"Ownership request approved, {rejected} competing request(s) rejected",
            extra={"request_id": request.id, "animal_id": animal.id},
        )
        return Result.success(map_dtos.ownership_request_dto(request))

    async def reject_request(self, command: RejectOwnershipRequest) -> Result:
        error = check_shelter_admin(command.caller)
        if error:
            return error
        request = await get_ownership_request(self.db, command.request_id)
        if request is None:
            return not_found("Ownership request not found")
        error = (
            check_admin_for_animal(command.caller, request.animal)
            or validate_rejection(request)
        )
        if error:
            return error

        request.status = OwnershipStatus.REJECTED
        request.updated_at = utc_now()
        if command.reason:
            request.request_info = command.reason
        notify_user(
            self.db, request.user_id, NotificationType.OWNERSHIP_REQUEST_REJECTED,
            f"Your ownership request for {request.animal.name} was rejected",
            animal_id=request.animal_id, ownership_request_id=request.id,
        )
        await self.db.commit()
        logger.info("Ownership request rejected", extra={"request_id": request.id})
        return Result.success(map_dtos.ownership_request_dto(request))

    async def _end_fosterings(self, animal: Animal, now) -> None:
        """Cancel active fosterings and their future visits; notify each fosterer."""
        fosterings = (await self.db.execute(
            select(Fostering).where(
                Fostering.animal_id == animal.id,
                Fostering.status == FosteringStatus.ACTIVE,
            ),
        )).scalars().all()
        for fostering in fosterings:
            fostering.status = FosteringStatus.CANCELLED
            fostering.end_date = now
            fostering.updated_at = now
            notify_user(
                self.db, fostering.user_id, NotificationType.FOSTERED_ANIMAL_ADOPTED,
                f"{animal.name}, whom you were fostering, has been adopted",
                animal_id=animal.id,
            )

        visits = (await self.db.execute(
            select(Activity).where(
                Activity.animal_id == animal.id,
                Activity.type == ActivityType.FOSTERING,
                Activity.status == ActivityStatus.ACTIVE,
                Activity.start_date > now,
            ),
        )).scalars().all()
        for visit in visits:
            visit.status = ActivityStatus.CANCELLED
            if visit.slot is not None:
                visit.slot.status = SlotStatus.AVAILABLE

    async def _reject_competing_requests(self, approved: OwnershipRequest, now) -> int:
        competing = (await self.db.execute(
            select(OwnershipRequest).where(
                OwnershipRequest.animal_id == approved.animal_id,
                OwnershipRequest.id != approved.id,
                OwnershipRequest.status.in_([
                    OwnershipStatus.PENDING, OwnershipStatus.ANALYSING,
                ]),
            ),
        )).scalars().all()
        for other in competing:
            other.status = OwnershipStatus.REJECTED
            other.request_info = AUTO_REJECT_MESSAGE
            other.updated_at = now
            notify_user(
                self.db, other.user_id, NotificationType.OWNERSHIP_REQUEST_REJECTED,
                f"Your ownership request for {approved.animal.name} was rejected",
                animal_id=approved.animal_id, ownership_request_id=other.id,
            )
        return len(competing)

    # ─── Queries ─────────────────────────────────────────────────

    async def list_for_shelter(self, query: ListShelterOwnershipRequests) -> Result:
        error = (
            check_shelter_admin(query.caller)
            or check_page_bounds(query.page, query.size, self.settings.max_page_size)
        )
        if error:
            return error
        if await get_shelter(self.db, query.caller.shelter_id) is None:
            return not_found("Shelter not found")

        stmt = (
            select(OwnershipRequest)
            .join(Animal, OwnershipRequest.animal_id == Animal.id)
            .where(Animal.shelter_id == query.caller.shelter_id)
            .order_by(OwnershipRequest.requested_at.desc(), OwnershipRequest.id)
        )
        paged = await fetch_page(
            self.db, stmt, query.page, query.size, map_dtos.ownership_request_dto,
        )
        return Result.success(paged)

    async def list_for_user(self, query: ListUserOwnershipRequests) -> Result:
        """Open requests first, then recently rejected ones; newest first within each group."""
        cutoff = utc_now() - timedelta(days=self.settings.rejected_request_window_days)
        result = await self.db.execute(
            select(OwnershipRequest)
            .where(
                OwnershipRequest.user_id == query.caller.id,
                or_(
                    OwnershipRequest.status.in_([
                        OwnershipStatus.PENDING, OwnershipStatus.ANALYSING,
                    ]),
                    and_(
                        OwnershipRequest.status == OwnershipStatus.REJECTED,
                        OwnershipRequest.updated_at >= cutoff,
                    ),
                ),
            )
            .order_by(OwnershipRequest.requested_at.desc()),
        )
        requests = sorted(
            result.scalars().all(),
            key=lambda r: r.status == OwnershipStatus.REJECTED,
        )
        return Result.success([map_dtos.ownership_request_dto(r) for r in requests])

    async def list_owned_animals(self, query: ListOwnedAnimals) -> Result:
        result = await self.db.execute(
            select(Animal)
            .where(Animal.owner_id == query.caller.id)
            .order_by(Animal.ownership_start_date.desc()),
        )
        return Result.success([map_dtos.owned_animal(a) for a in result.scalars().all()])

    async def check_eligibility(self, query: CheckEligibility) -> Result:
        animal = await get_animal(self.db, query.animal_id)
        if animal is None:
            return not_found("Animal not found")
        error = check_eligibility(animal)
        if error:
            return error
        return Result.success(EligibilityResponse(
            animal_id=animal.id, eligible=True,
            message="Animal is eligible for an ownership request",
        ))
