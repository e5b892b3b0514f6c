import uuid
from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, field_validator


class SlotInput(BaseModel):
    day: date
    start_time: time
    end_time: time

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_wall_clock_minute(cls, v: time):
        if v.tzinfo is not None:
            raise ValueError("slot times are wall-clock and must not carry a timezone")
        if v.second or v.microsecond:
            raise ValueError("slot times must be whole minutes")
        return v


class SlotResponse(BaseModel):
    id: uuid.UUID
    mentor_id: uuid.UUID
    day: date
    start_time: time
    end_time: time
    is_booked: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AvailabilitySave(BaseModel):
    slots: list[SlotInput]
    cancel_booked: bool = False


class AvailabilityAdd(BaseModel):
    slots: list[SlotInput]


class AvailabilityChangeResult(BaseModel):
    added: int
    removed: int
    cancelled_sessions: int
    slots: list[SlotResponse]
