import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BookingRequest(BaseModel):
    # Left optional so missing values surface as booking validation errors
    slot_id: uuid.UUID | None = None
    title: str | None = None
    description: str | None = None


class SessionResponse(BaseModel):
    id: uuid.UUID
    mentor_id: uuid.UUID
    mentee_id: uuid.UUID
    availability_id: uuid.UUID | None = None
    title: str
    description: str | None = None
    date_time: datetime
    duration: int
    price: float
    status: str
    payment_status: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class SessionListResponse(BaseModel):
    upcoming: list[SessionResponse]
    past: list[SessionResponse]
