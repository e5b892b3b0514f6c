import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator


class ProfileResponse(BaseModel):
    id: uuid.UUID
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    user_type: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None

    @field_validator("avatar_url")
    @classmethod
    def validate_url(cls, v: str | None):
        if v is None or v.strip() == "":
            return None
        if not (v.startswith("http://") or v.startswith("https://")):
            raise ValueError("avatar_url must start with http(s)://")
        return v


class AccountTypeSwitch(BaseModel):
    user_type: Literal["mentor", "mentee"]


class AvatarUploadResponse(BaseModel):
    avatar_url: str
