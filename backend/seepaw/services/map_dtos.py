"""DTO Mapping — ORM rows → response schemas.

Invariants:
    - Mapping never queries: every relationship read here is loaded with selectin
    - Ages are computed against the `today` passed in, defaulting to the current UTC date

Design Decisions:
    - Explicit field-by-field construction over from_attributes: response shapes add
      derived fields (age, breed_name, principal_image_url) that the ORM doesn't have
"""

from datetime import date

from seepaw.core.enforce_animals import age_in_years
from seepaw.core.weekly_schedule import DaySchedule
from seepaw.db.types import utc_now
from seepaw.models.activity import Activity
from seepaw.models.animal import Animal
from seepaw.models.breed import Breed
from seepaw.models.favorite import Favorite
from seepaw.models.fostering import Fostering
from seepaw.models.image import Image
from seepaw.models.notification import Notification
from seepaw.models.ownership_request import OwnershipRequest
from seepaw.models.shelter import Shelter
from seepaw.models.user import User
from seepaw.schemas.activity import ActivityResponse, FosteringActivityResponse
from seepaw.schemas.animal import AnimalSummary, AnimalDetails
from seepaw.schemas.breed import BreedResponse
from seepaw.schemas.favorite import FavoriteResponse
from seepaw.schemas.fostering import FosteringResponse
from seepaw.schemas.image import ImageResponse
from seepaw.schemas.notification import NotificationResponse
from seepaw.schemas.ownership import OwnershipRequestResponse, OwnedAnimalResponse
from seepaw.schemas.schedule import (
    DayScheduleResponse, FreeRange, ReservedSlotResponse, UnavailableSlotResponse,
    WeeklyScheduleResponse,
)
from seepaw.schemas.shelter import ShelterResponse
from seepaw.schemas.user import UserProfileResponse


def _today() -> date:
    return utc_now().date()


def _principal_url(animal: Animal) -> str | None:
    image = animal.principal_image
    return image.url if image else None


def image_dto(image: Image) -> ImageResponse:
    return ImageResponse(
        id=image.id,
        url=image.url,
        public_id=image.public_id,
        description=image.description,
        is_principal=image.is_principal,
        created_at=image.created_at,
    )


def _summary_fields(animal: Animal, today: date) -> dict:
    return {
        "id": animal.id,
        "name": animal.name,
        "species": animal.species,
        "size": animal.size,
        "sex": animal.sex,
        "age": age_in_years(animal.birth_date, today),
        "animal_state": animal.animal_state,
        "breed_name": animal.breed.name,
        "shelter_id": animal.shelter_id,
        "shelter_name": animal.shelter.name,
        "principal_image_url": _principal_url(animal),
    }


def animal_summary(animal: Animal, today: date | None = None) -> AnimalSummary:
    return AnimalSummary(**_summary_fields(animal, today or _today()))


def animal_details(animal: Animal, today: date | None = None) -> AnimalDetails:
    return AnimalDetails(
        **_summary_fields(animal, today or _today()),
        description=animal.description,
        colour=animal.colour,
        birth_date=animal.birth_date,
        sterilized=animal.sterilized,
        cost=float(animal.cost),
        features=animal.features,
        breed_id=animal.breed_id,
        created_at=animal.created_at,
        images=[image_dto(img) for img in animal.images],
    )


def owned_animal(animal: Animal) -> OwnedAnimalResponse:
    return OwnedAnimalResponse(
        **_summary_fields(animal, _today()),
        ownership_start_date=animal.ownership_start_date,
    )


def breed_dto(breed: Breed) -> BreedResponse:
    return BreedResponse(id=breed.id, name=breed.name, description=breed.description)


def shelter_dto(shelter: Shelter) -> ShelterResponse:
    return ShelterResponse(
        id=shelter.id,
        name=shelter.name,
        street=shelter.street,
        city=shelter.city,
        postal_code=shelter.postal_code,
        phone=shelter.phone,
        nif=shelter.nif,
        opening_time=shelter.opening_time,
        closing_time=shelter.closing_time,
        images=[image_dto(img) for img in shelter.images],
    )


def ownership_request_dto(request: OwnershipRequest) -> OwnershipRequestResponse:
    return OwnershipRequestResponse(
        id=request.id,
        animal_id=request.animal_id,
        animal_name=request.animal.name,
        user_id=request.user_id,
        user_name=request.user.name,
        amount=float(request.amount),
        status=request.status,
        request_info=request.request_info,
        requested_at=request.requested_at,
        approved_at=request.approved_at,
        updated_at=request.updated_at,
    )


def _activity_fields(activity: Activity) -> dict:
    return {
        "id": activity.id,
        "animal_id": activity.animal_id,
        "animal_name": activity.animal.name,
        "user_id": activity.user_id,
        "type": activity.type,
        "status": activity.status,
        "start_date": activity.start_date,
        "end_date": activity.end_date,
        "created_at": activity.created_at,
    }


def activity_dto(activity: Activity) -> ActivityResponse:
    return ActivityResponse(**_activity_fields(activity))


def fostering_activity_dto(activity: Activity) -> FosteringActivityResponse:
    slot = activity.slot
    return FosteringActivityResponse(
        **_activity_fields(activity),
        shelter_name=activity.animal.shelter.name,
        slot_start=slot.start_date if slot else activity.start_date,
        slot_end=slot.end_date if slot else activity.end_date,
        principal_image_url=_principal_url(activity.animal),
    )


def fostering_dto(fostering: Fostering) -> FosteringResponse:
    return FosteringResponse(
        id=fostering.id,
        animal_id=fostering.animal_id,
        animal_name=fostering.animal.name,
        animal_state=fostering.animal.animal_state,
        amount=float(fostering.amount),
        status=fostering.status,
        start_date=fostering.start_date,
        end_date=fostering.end_date,
        principal_image_url=_principal_url(fostering.animal),
    )


def favorite_dto(favorite: Favorite) -> FavoriteResponse:
    return FavoriteResponse(
        **_summary_fields(favorite.animal, _today()),
        favorited_at=favorite.updated_at or favorite.created_at,
    )


def _day_schedule_dto(day: DaySchedule) -> DayScheduleResponse:
    """Reserved segments carry a Reservation ref, unavailable ones the ActivitySlot row."""
    return DayScheduleResponse(
        day=day.day,
        available=[FreeRange(start=block.start, end=block.end) for block in day.available],
        reserved=[
            ReservedSlotResponse(
                id=segment.ref.slot.id,
                start=segment.start,
                end=segment.end,
                status=segment.ref.slot.status,
                activity_type=segment.ref.activity_type,
                reserved_by=segment.ref.reserved_by,
                is_own_reservation=segment.ref.is_own,
            )
            for segment in day.reserved
        ],
        unavailable=[
            UnavailableSlotResponse(
                id=segment.ref.id, start=segment.start, end=segment.end,
                status=segment.ref.status,
            )
            for segment in day.unavailable
        ],
    )


def weekly_schedule_dto(
    animal: Animal, start_date: date, days: list[DaySchedule],
) -> WeeklyScheduleResponse:
    shelter = animal.shelter
    return WeeklyScheduleResponse(
        animal_id=animal.id,
        animal_name=animal.name,
        shelter_id=shelter.id,
        shelter_name=shelter.name,
        opening_time=shelter.opening_time,
        closing_time=shelter.closing_time,
        start_date=start_date,
        days=[_day_schedule_dto(day) for day in days],
    )


def notification_dto(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=notification.id,
        type=notification.type,
        message=notification.message,
        is_read=notification.is_read,
        read_at=notification.read_at,
        animal_id=notification.animal_id,
        ownership_request_id=notification.ownership_request_id,
        activity_id=notification.activity_id,
        created_at=notification.created_at,
    )


def user_profile_dto(user: User) -> UserProfileResponse:
    return UserProfileResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        birth_date=user.birth_date,
        street=user.street,
        city=user.city,
        postal_code=user.postal_code,
        phone_number=user.phone_number,
        shelter_id=user.shelter_id,
        is_shelter_admin=user.is_shelter_admin,
    )
