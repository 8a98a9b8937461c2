"""Mediator — explicit routing from message type to handler method.

Invariants:
    - Every message→handler mapping is visible in one dict; no getattr magic
    - Unknown messages return a 500 Result (never raises)
    - Handlers are instantiated per Mediator with the shared session + settings

Design Decisions:
    - The message class is the routing key: adding a use case means adding a dataclass
      in services/messages.py and one line here
    - Handlers split by area (animals, requests, activities...) so no class grows into
      a god object
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.result import Result
from seepaw.infrastructure.breed_catalog import BreedCatalogClient
from seepaw.services import messages as m
from seepaw.services.handle_animals import AnimalHandlers
from seepaw.services.handle_breeds import BreedHandlers
from seepaw.services.handle_favorites import FavoriteHandlers
from seepaw.services.handle_fostering_activities import FosteringActivityHandlers
from seepaw.services.handle_fosterings import FosteringHandlers
from seepaw.services.handle_images import ImageHandlers
from seepaw.services.handle_maintenance import MaintenanceHandlers
from seepaw.services.handle_notifications import NotificationHandlers
from seepaw.services.handle_ownership_activities import OwnershipActivityHandlers
from seepaw.services.handle_ownership_requests import OwnershipRequestHandlers
from seepaw.services.handle_schedule import ScheduleHandlers
from seepaw.services.handle_shelters import ShelterHandlers
from seepaw.services.handle_users import UserHandlers

logger = logging.getLogger(__name__)


class Mediator:
    """Routes a command or query to its handler. Explicit registration, no auto-discovery."""

    def __init__(
        self, db: AsyncSession, settings: Settings,
        breed_catalog: BreedCatalogClient | None = None,
    ):
        animals = AnimalHandlers(db, settings)
        breeds = BreedHandlers(db, breed_catalog)
        shelters = ShelterHandlers(db, settings)
        requests = OwnershipRequestHandlers(db, settings)
        ownership_visits = OwnershipActivityHandlers(db, settings)
        fostering_visits = FosteringActivityHandlers(db, settings)
        fosterings = FosteringHandlers(db, settings)
        favorites = FavoriteHandlers(db, settings)
        images = ImageHandlers(db)
        notifications = NotificationHandlers(db, settings)
        users = UserHandlers(db)
        schedule = ScheduleHandlers(db, settings)
        maintenance = MaintenanceHandlers(db, settings)

        # ADR: every mapping explicit — adding a use case requires editing this dict
        self._handlers = {
            # Animals (6)
            m.ListAnimals: animals.list_animals,
            m.GetAnimalDetails: animals.get_animal_details,
            m.CreateAnimal: animals.create_animal,
            m.EditAnimal: animals.edit_animal,
            m.DeactivateAnimal: animals.deactivate_animal,
            m.DeleteAnimal: animals.delete_animal,

            # Breeds (3)
            m.ListBreeds: breeds.list_breeds,
            m.CreateBreed: breeds.create_breed,
            m.SyncBreeds: breeds.sync_breeds,

            # Shelters (3)
            m.GetShelter: shelters.get_shelter,
            m.EditShelter: shelters.edit_shelter,
            m.ListShelterAnimals: shelters.list_shelter_animals,

            # Ownership requests (8)
            m.CreateOwnershipRequest: requests.create_request,
            m.UpdateOwnershipRequestStatus: requests.update_status,
            m.ApproveOwnershipRequest: requests.approve_request,
            m.RejectOwnershipRequest: requests.reject_request,
            m.ListShelterOwnershipRequests: requests.list_for_shelter,
            m.ListUserOwnershipRequests: requests.list_for_user,
            m.ListOwnedAnimals: requests.list_owned_animals,
            m.CheckEligibility: requests.check_eligibility,

            # Activities (9)
            m.CreateOwnershipActivity: ownership_visits.create_activity,
            m.CancelOwnershipActivity: ownership_visits.cancel_activity,
            m.ListOwnershipActivities: ownership_visits.list_activities,
            m.CreateFosteringActivity: fostering_visits.create_activity,
            m.CancelFosteringActivity: fostering_visits.cancel_activity,
            m.ListFosteringActivities: fostering_visits.list_activities,
            m.GetAnimalWeeklySchedule: schedule.get_weekly_schedule,
            m.CompleteFinishedActivities: maintenance.complete_finished_activities,
            m.SendActivityReminders: maintenance.send_activity_reminders,

            # Fosterings (3)
            m.AddFostering: fosterings.add_fostering,
            m.CancelFostering: fosterings.cancel_fostering,
            m.ListActiveFosterings: fosterings.list_active,

            # Favorites (3)
            m.AddFavorite: favorites.add_favorite,
            m.DeactivateFavorite: favorites.deactivate_favorite,
            m.ListFavorites: favorites.list_favorites,

            # Images (5)
            m.AddAnimalImages: images.add_animal_images,
            m.AddShelterImages: images.add_shelter_images,
            m.DeleteAnimalImage: images.delete_animal_image,
            m.SetAnimalPrincipalImage: images.set_principal_image,
            m.ListAnimalImages: images.list_animal_images,

            # Notifications (4)
            m.ListNotifications: notifications.list_notifications,
            m.ListUnreadNotifications: notifications.list_unread,
            m.MarkNotificationRead: notifications.mark_read,
            m.DeleteNotification: notifications.delete_notification,

            # Users (2)
            m.GetUserProfile: users.get_profile,
            m.EditUserProfile: users.edit_profile,
        }

    async def send(self, message: object) -> Result:
        """Route `message` to its handler. Returns the handler's Result."""
        handler = self._handlers.get(type(message))
        if handler is None:
            logger.error(f"No handler registered for {type(message).__name__}")
            return Result.failure(
                f"No handler registered for {type(message).__name__}", 500,
            )
        return await handler(message)
