"""Fostering Enforcement — monthly sponsorship limits and animal state recomputation.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Sum of active fostering amounts never exceeds the animal's cost
    - state_for_total is the single mapping from fostering total to AnimalState
"""

from decimal import Decimal

from seepaw.core.domain_types import AnimalState
from seepaw.core.result import Result, bad_request, conflict, unprocessable

# Animals that cannot take a new fostering
_CLOSED_TO_FOSTERING = frozenset({
    AnimalState.INACTIVE, AnimalState.TOTALLY_FOSTERED, AnimalState.HAS_OWNER,
})

# States driven by the fostering total; other states are never recomputed
RECOMPUTABLE_STATES = frozenset({
    AnimalState.AVAILABLE,
    AnimalState.PARTIALLY_FOSTERED,
    AnimalState.TOTALLY_FOSTERED,
})


def check_month_value(value: Decimal, min_value: Decimal) -> Result | None:
    if value <= 0:
        return bad_request("Monthly value must be greater than zero")
    if value < min_value:
        return bad_request(f"Monthly value must be at least {min_value:.2f}")
    return None


def check_fosterable(animal) -> Result | None:
    if animal.animal_state in _CLOSED_TO_FOSTERING:
        return conflict("Animal is not available for fostering")
    return None


def check_not_already_fostering(already_fostering: bool) -> Result | None:
    if already_fostering:
        return conflict("You are already fostering this animal")
    return None


def state_for_total(total: Decimal, cost: Decimal) -> AnimalState | None:
    """Animal state for an active fostering total; None when the total exceeds cost."""
    if total <= 0:
        return AnimalState.AVAILABLE
    if total < cost:
        return AnimalState.PARTIALLY_FOSTERED
    if total == cost:
        return AnimalState.TOTALLY_FOSTERED
    return None


def check_total_within_cost(total: Decimal, cost: Decimal) -> Result | None:
    if state_for_total(total, cost) is None:
        return unprocessable("Monthly value surpasses animal costs")
    return None


def validate_new_fostering(
    animal,
    month_value: Decimal,
    *,
    already_fostering: bool,
    current_total: Decimal,
) -> Result | None:
    return (
        check_fosterable(animal)
        or check_not_already_fostering(already_fostering)
        or check_total_within_cost(current_total + month_value, animal.cost)
    )
