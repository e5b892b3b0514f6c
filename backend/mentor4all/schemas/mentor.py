import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MentorSummary(BaseModel):
    id: uuid.UUID
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    hourly_rate: float
    years_experience: int | None = None
    industry: str | None = None
    expertise: list[str] = []
    company: str | None = None
    job_title: str | None = None
    average_rating: float | None = None
    review_count: int | None = None


class MentorUpdate(BaseModel):
    hourly_rate: float | None = Field(default=None, ge=0)
    years_experience: int | None = Field(default=None, ge=0)
    industry: str | None = None
    expertise: list[str] | None = None
    company: str | None = None
    job_title: str | None = None

    @field_validator("hourly_rate")
    @classmethod
    def rate_not_null(cls, v: float | None):
        # Omit the field to leave the rate unchanged
        if v is None:
            raise ValueError("hourly_rate cannot be null")
        return v


class EnsureMentorRequest(BaseModel):
    userId: uuid.UUID | None = None


class EnsureMentorResponse(BaseModel):
    message: str
    data: dict[str, Any] | None = None


class ReviewResponse(BaseModel):
    id: uuid.UUID
    mentor_id: uuid.UUID
    reviewer_id: uuid.UUID
    session_id: uuid.UUID | None = None
    group_session_id: uuid.UUID | None = None
    rating: int
    comment: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
