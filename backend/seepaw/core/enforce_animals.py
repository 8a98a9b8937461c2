"""Animal Enforcement — visibility, lifecycle guards, and age arithmetic.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Public listings, details and favorites only ever see VISIBLE_ANIMAL_STATES
    - Age is whole years since birth_date relative to the `today` passed in

Design Decisions:
    - Age filter turned into a birth_date range so the query stays index-friendly
      instead of computing ages row by row
"""

from datetime import date

from seepaw.core.domain_types import (
    AnimalState, VISIBLE_ANIMAL_STATES, FOSTERED_ANIMAL_STATES,
)
from seepaw.core.result import Result, bad_request, forbidden, not_found, conflict


def _shift_years(day: date, years: int) -> date:
    """Same calendar day `years` earlier; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


def age_in_years(birth_date: date, today: date) -> int:
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return max(years, 0)


def birth_date_range_for_age(age: int, today: date) -> tuple[date, date]:
    """(exclusive lower bound, inclusive upper bound) of birth dates giving `age`."""
    latest = _shift_years(today, age)
    earliest_exclusive = _shift_years(today, age + 1)
    return earliest_exclusive, latest


def is_visible(state: AnimalState) -> bool:
    return state in VISIBLE_ANIMAL_STATES


def check_visible(animal) -> Result | None:
    if animal is None or not is_visible(animal.animal_state):
        return not_found("Animal not found or not available")
    return None


def check_favoritable(animal) -> Result | None:
    if not is_visible(animal.animal_state):
        return conflict("Animal is not available to be added to favorites")
    return None


def check_shelter_admin(caller) -> Result | None:
    if not caller.is_shelter_admin:
        return forbidden("Only shelter administrators can manage animals")
    return None


def check_animal_in_shelter(animal, shelter_id) -> Result | None:
    if animal is None or animal.shelter_id != shelter_id:
        return not_found("Animal not found in this shelter")
    return None


def check_deactivatable(animal) -> Result | None:
    if animal.animal_state == AnimalState.HAS_OWNER:
        return bad_request("Cannot deactivate an animal that has an owner")
    if animal.animal_state in FOSTERED_ANIMAL_STATES:
        return bad_request("Cannot deactivate an animal that is being fostered")
    if animal.animal_state == AnimalState.INACTIVE:
        return bad_request("Animal is already inactive")
    return None


def check_deletable(animal) -> Result | None:
    if animal.animal_state != AnimalState.AVAILABLE:
        return bad_request("Only available animals can be deleted")
    return None
