"""Ownership Request Enforcement — status transitions and adoption preconditions.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return a failed Result on violation, None on success
    - Legal transitions: Pending → Analysing, Analysing → Approved | Rejected,
      Rejected → Analysing | Approved. Approved is terminal.

Design Decisions:
    - Transition table as data: one place answers "can X become Y", handlers only
      add the messages and authorization around it
"""

from seepaw.core.domain_types import (
    AnimalState, OwnershipStatus, FOSTERED_ANIMAL_STATES,
)
from seepaw.core.result import Result, bad_request, forbidden

ALLOWED_TRANSITIONS: dict[OwnershipStatus, frozenset[OwnershipStatus]] = {
    OwnershipStatus.PENDING: frozenset({OwnershipStatus.ANALYSING}),
    OwnershipStatus.ANALYSING: frozenset({
        OwnershipStatus.APPROVED, OwnershipStatus.REJECTED,
    }),
    OwnershipStatus.REJECTED: frozenset({
        OwnershipStatus.ANALYSING, OwnershipStatus.APPROVED,
    }),
    OwnershipStatus.APPROVED: frozenset(),
}

AUTO_REJECT_MESSAGE = "Automatically rejected - another ownership request was approved"


def can_transition(current: OwnershipStatus, target: OwnershipStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


# ─── Authorization ───────────────────────────────────────────────

def check_shelter_admin(caller) -> Result | None:
    if not caller.is_shelter_admin:
        return forbidden("Only shelter administrators can manage ownership requests")
    return None


def check_animal_in_admin_shelter(caller, animal) -> Result | None:
    if animal.shelter_id != caller.shelter_id:
        return forbidden("This animal does not belong to your shelter")
    return None


def check_admin_for_animal(caller, animal) -> Result | None:
    return check_shelter_admin(caller) or check_animal_in_admin_shelter(caller, animal)


# ─── Creation / eligibility ──────────────────────────────────────

def check_animal_adoptable(animal) -> Result | None:
    if animal.animal_state == AnimalState.HAS_OWNER:
        return bad_request("Animal already has an owner")
    if animal.animal_state == AnimalState.INACTIVE:
        return bad_request("Animal is inactive")
    return None


def check_no_existing_request(has_existing: bool) -> Result | None:
    if has_existing:
        return bad_request("An ownership request for this animal already exists")
    return None


def check_eligibility(animal) -> Result | None:
    """Stricter than creation: fostered animals are not offered for adoption."""
    if animal.animal_state in FOSTERED_ANIMAL_STATES:
        return bad_request("Animal is currently fostered and not eligible for ownership")
    return check_animal_adoptable(animal)


# ─── Transitions ─────────────────────────────────────────────────

def check_status_update_target(target: OwnershipStatus) -> Result | None:
    if target != OwnershipStatus.ANALYSING:
        return bad_request("Status can only be updated to Analysing")
    return None


def check_transition(
    current: OwnershipStatus, target: OwnershipStatus,
) -> Result | None:
    if not can_transition(current, target):
        return bad_request(
            f"Cannot change ownership request status from {current.value} to {target.value}",
        )
    return None


def validate_approval(
    request, animal, *, has_other_approved: bool,
) -> Result | None:
    """Animal-state checks first, then the request's own status."""
    if animal.animal_state == AnimalState.INACTIVE:
        return bad_request("Cannot approve an ownership request for an inactive animal")
    if animal.animal_state == AnimalState.HAS_OWNER or animal.owner_id is not None:
        return bad_request("Animal already has an owner")
    if has_other_approved:
        return bad_request(
            "Another ownership request has already been approved for this animal",
        )
    if not can_transition(request.status, OwnershipStatus.APPROVED):
        return bad_request(
            "Only requests in Analysing or Rejected status can be approved",
        )
    return None


def validate_rejection(request) -> Result | None:
    if not can_transition(request.status, OwnershipStatus.REJECTED):
        return bad_request("Only requests in Analysing status can be rejected")
    return None
