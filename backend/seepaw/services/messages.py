"""Commands & Queries — the messages the Mediator routes to handlers.

Invariants:
    - One frozen dataclass per use case; the class itself is the routing key
    - Commands change state, queries never do
    - Every message that acts on behalf of a user carries the Caller, resolved in api/deps.py

Design Decisions:
    - Dataclasses over pydantic here: payload validation already happened at the API
      boundary, messages are plain in-process values
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from seepaw.core.domain_types import (
    ActivityId, AnimalId, BreedId, Caller, FosteringId, ImageId, NotificationId,
    OwnershipRequestId, OwnershipStatus, ShelterId, Species, SizeType, SexType,
)
from seepaw.schemas.animal import AnimalCreate, AnimalUpdate
from seepaw.schemas.breed import BreedCreate
from seepaw.schemas.image import ImageCreate
from seepaw.schemas.shelter import ShelterUpdate
from seepaw.schemas.user import UserProfileUpdate


# ─── Animals ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ListAnimals:
    page: int = 1
    size: int = 10
    species: Species | None = None
    age: int | None = None
    size_type: SizeType | None = None
    sex: SexType | None = None
    name: str | None = None
    shelter_name: str | None = None
    breed_id: BreedId | None = None


@dataclass(frozen=True)
class GetAnimalDetails:
    animal_id: AnimalId


@dataclass(frozen=True)
class CreateAnimal:
    caller: Caller
    payload: AnimalCreate


@dataclass(frozen=True)
class EditAnimal:
    caller: Caller
    animal_id: AnimalId
    payload: AnimalUpdate


@dataclass(frozen=True)
class DeactivateAnimal:
    caller: Caller
    animal_id: AnimalId


@dataclass(frozen=True)
class DeleteAnimal:
    caller: Caller
    animal_id: AnimalId


# ─── Breeds ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class ListBreeds:
    pass


@dataclass(frozen=True)
class CreateBreed:
    caller: Caller
    payload: BreedCreate


@dataclass(frozen=True)
class SyncBreeds:
    caller: Caller


# ─── Shelters ────────────────────────────────────────────────────

@dataclass(frozen=True)
class GetShelter:
    shelter_id: ShelterId


@dataclass(frozen=True)
class EditShelter:
    caller: Caller
    shelter_id: ShelterId
    payload: ShelterUpdate


@dataclass(frozen=True)
class ListShelterAnimals:
    shelter_id: ShelterId
    page: int = 1
    size: int = 10


# ─── Ownership requests ──────────────────────────────────────────

@dataclass(frozen=True)
class CreateOwnershipRequest:
    caller: Caller
    animal_id: AnimalId
    request_info: str | None = None


@dataclass(frozen=True)
class UpdateOwnershipRequestStatus:
    caller: Caller
    request_id: OwnershipRequestId
    new_status: OwnershipStatus


@dataclass(frozen=True)
class ApproveOwnershipRequest:
    caller: Caller
    request_id: OwnershipRequestId


@dataclass(frozen=True)
class RejectOwnershipRequest:
    caller: Caller
    request_id: OwnershipRequestId
    reason: str | None = None


@dataclass(frozen=True)
class ListShelterOwnershipRequests:
    caller: Caller
    page: int = 1
    size: int = 10


@dataclass(frozen=True)
class ListUserOwnershipRequests:
    caller: Caller


@dataclass(frozen=True)
class ListOwnedAnimals:
    caller: Caller


@dataclass(frozen=True)
class CheckEligibility:
    caller: Caller
    animal_id: AnimalId


# ─── Activities ──────────────────────────────────────────────────

@dataclass(frozen=True)
class CreateOwnershipActivity:
    caller: Caller
    animal_id: AnimalId
    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class CancelOwnershipActivity:
    caller: Caller
    activity_id: ActivityId


@dataclass(frozen=True)
class ListOwnershipActivities:
    caller: Caller
    status: str | None = None
    page: int = 1
    size: int = 20


@dataclass(frozen=True)
class CreateFosteringActivity:
    caller: Caller
    animal_id: AnimalId
    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class CancelFosteringActivity:
    caller: Caller
    activity_id: ActivityId


@dataclass(frozen=True)
class ListFosteringActivities:
    caller: Caller
    page: int = 1
    size: int = 10


@dataclass(frozen=True)
class GetAnimalWeeklySchedule:
    caller: Caller
    animal_id: AnimalId
    start_date: date


@dataclass(frozen=True)
class CompleteFinishedActivities:
    pass


@dataclass(frozen=True)
class SendActivityReminders:
    pass


# ─── Fosterings ──────────────────────────────────────────────────

@dataclass(frozen=True)
class AddFostering:
    caller: Caller
    animal_id: AnimalId
    month_value: Decimal


@dataclass(frozen=True)
class CancelFostering:
    caller: Caller
    fostering_id: FosteringId


@dataclass(frozen=True)
class ListActiveFosterings:
    caller: Caller


# ─── Favorites ───────────────────────────────────────────────────

@dataclass(frozen=True)
class AddFavorite:
    caller: Caller
    animal_id: AnimalId


@dataclass(frozen=True)
class DeactivateFavorite:
    caller: Caller
    animal_id: AnimalId


@dataclass(frozen=True)
class ListFavorites:
    caller: Caller
    page: int = 1
    size: int = 10


# ─── Images ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class AddAnimalImages:
    caller: Caller
    animal_id: AnimalId
    images: tuple[ImageCreate, ...]


@dataclass(frozen=True)
class AddShelterImages:
    caller: Caller
    shelter_id: ShelterId
    images: tuple[ImageCreate, ...]


@dataclass(frozen=True)
class DeleteAnimalImage:
    caller: Caller
    animal_id: AnimalId
    image_id: ImageId


@dataclass(frozen=True)
class SetAnimalPrincipalImage:
    caller: Caller
    animal_id: AnimalId
    image_id: ImageId


@dataclass(frozen=True)
class ListAnimalImages:
    animal_id: AnimalId


# ─── Notifications ───────────────────────────────────────────────

@dataclass(frozen=True)
class ListNotifications:
    caller: Caller
    page: int = 1
    size: int = 10


@dataclass(frozen=True)
class ListUnreadNotifications:
    caller: Caller


@dataclass(frozen=True)
class MarkNotificationRead:
    caller: Caller
    notification_id: NotificationId


@dataclass(frozen=True)
class DeleteNotification:
    caller: Caller
    notification_id: NotificationId


# ─── Users ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class GetUserProfile:
    caller: Caller


@dataclass(frozen=True)
class EditUserProfile:
    caller: Caller
    payload: UserProfileUpdate
