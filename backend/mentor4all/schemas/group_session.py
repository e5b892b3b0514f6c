import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class GroupSessionResponse(BaseModel):
    id: uuid.UUID
    mentor_id: uuid.UUID
    title: str
    description: str | None = None
    category: str
    date_time: datetime
    duration: int
    capacity: int
    enrolled: int | None = None
    price: float
    status: str

    model_config = ConfigDict(from_attributes=True)
