"""Schedule Schemas — a fosterer's weekly view of an animal's calendar.

Invariants:
    - Every time and datetime is on the shelter's clock, not UTC
    - reserved_by is the booking user's name; is_own_reservation marks the caller's visits
"""

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel

from seepaw.core.domain_types import ActivityType, SlotStatus


class FreeRange(BaseModel):
    start: time
    end: time


class ReservedSlotResponse(BaseModel):
    id: UUID
    start: datetime
    end: datetime
    status: SlotStatus
    activity_type: ActivityType
    reserved_by: str
    is_own_reservation: bool


class UnavailableSlotResponse(BaseModel):
    id: UUID
    start: datetime
    end: datetime
    status: SlotStatus


class DayScheduleResponse(BaseModel):
    day: date
    available: list[FreeRange]
    reserved: list[ReservedSlotResponse]
    unavailable: list[UnavailableSlotResponse]


class WeeklyScheduleResponse(BaseModel):
    animal_id: UUID
    animal_name: str
    shelter_id: UUID
    shelter_name: str
    opening_time: time
    closing_time: time
    start_date: date
    days: list[DayScheduleResponse]
