import uuid
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, constr

from mentor4all.schemas.profile import ProfileResponse


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenPayload(BaseModel):
    sub: Optional[str] = None


class Login(BaseModel):
    email: EmailStr
    password: str


class SignUp(BaseModel):
    email: EmailStr
    password: constr(min_length=6)
    first_name: str | None = None
    last_name: str | None = None
    user_type: Literal["mentor", "mentee"] = "mentee"


class UserMe(BaseModel):
    id: uuid.UUID
    email: EmailStr
    profile: ProfileResponse
