"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AnimalId, UserId, ShelterId, ... wrap UUIDs; message fields use them instead of bare UUID
    - All valid states encoded as Enums — no raw string matching
    - Enum values are the exact strings persisted in the DB and returned by the API

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, compare equal to their DB value
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

AnimalId = NewType("AnimalId", UUID)
UserId = NewType("UserId", UUID)
ShelterId = NewType("ShelterId", UUID)
BreedId = NewType("BreedId", UUID)
ActivityId = NewType("ActivityId", UUID)
OwnershipRequestId = NewType("OwnershipRequestId", UUID)
FosteringId = NewType("FosteringId", UUID)
ImageId = NewType("ImageId", UUID)
NotificationId = NewType("NotificationId", UUID)


# ─── Animal ──────────────────────────────────────────────────────

class AnimalState(str, Enum):
    """Animal lifecycle — HasOwner requires owner_id, fostered states follow monthly totals."""
    AVAILABLE = "Available"
    PARTIALLY_FOSTERED = "PartiallyFostered"
    TOTALLY_FOSTERED = "TotallyFostered"
    HAS_OWNER = "HasOwner"
    INACTIVE = "Inactive"


# States in which an animal is listed publicly and can be favorited
VISIBLE_ANIMAL_STATES = frozenset({
    AnimalState.AVAILABLE, AnimalState.PARTIALLY_FOSTERED,
})

FOSTERED_ANIMAL_STATES = frozenset({
    AnimalState.PARTIALLY_FOSTERED, AnimalState.TOTALLY_FOSTERED,
})


class Species(str, Enum):
    DOG = "Dog"
    CAT = "Cat"


class SizeType(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class SexType(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


# ─── Ownership ───────────────────────────────────────────────────

class OwnershipStatus(str, Enum):
    """Ownership request states — Pending/Rejected → Analysing → Approved | Rejected."""
    PENDING = "Pending"
    ANALYSING = "Analysing"
    APPROVED = "Approved"
    REJECTED = "Rejected"


# ─── Activities ──────────────────────────────────────────────────

class ActivityType(str, Enum):
    FOSTERING = "Fostering"
    OWNERSHIP = "Ownership"


class ActivityStatus(str, Enum):
    """Activity lifecycle — only Active activities can be cancelled or completed."""
    ACTIVE = "Active"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class SlotStatus(str, Enum):
    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"
    RESERVED = "Reserved"


class SlotType(str, Enum):
    """Activity slots belong to a visit; ShelterUnavailable slots block the calendar."""
    ACTIVITY = "Activity"
    SHELTER_UNAVAILABLE = "ShelterUnavailable"


# ─── Fostering ───────────────────────────────────────────────────

class FosteringStatus(str, Enum):
    ACTIVE = "Active"
    CANCELLED = "Cancelled"
    TERMINATED = "Terminated"


# ─── Notifications ───────────────────────────────────────────────

class NotificationType(str, Enum):
    NEW_OWNERSHIP_REQUEST = "NewOwnershipRequest"
    OWNERSHIP_REQUEST_ANALYSING = "OwnershipRequestAnalysing"
    OWNERSHIP_REQUEST_APPROVED = "OwnershipRequestApproved"
    OWNERSHIP_REQUEST_REJECTED = "OwnershipRequestRejected"
    FOSTERED_ANIMAL_ADOPTED = "FosteredAnimalAdopted"
    ACTIVITY_START_REMINDER = "ActivityStartReminder"
    ACTIVITY_END_REMINDER = "ActivityEndReminder"
    SHELTER_ACTIVITY_START_REMINDER = "ShelterActivityStartReminder"
    SHELTER_ACTIVITY_END_REMINDER = "ShelterActivityEndReminder"


# ─── Caller ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Caller:
    """Identity of the user issuing a command, resolved from request headers."""
    id: UserId
    shelter_id: ShelterId | None = None

    @property
    def is_shelter_admin(self) -> bool:
        return self.shelter_id is not None
