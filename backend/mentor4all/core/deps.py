import uuid
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.orm import Session

from mentor4all.core import security
from mentor4all.core.config import settings
from mentor4all.core.db import get_db
from mentor4all.models.mentor import Mentor
from mentor4all.models.profile import Profile, UserType
from mentor4all.models.user import User
from mentor4all.schemas.auth import TokenPayload

reusable_oauth2 = OAuth2PasswordBearer(tokenUrl="/api/v1/login/access-token")


@dataclass
class CurrentContext:
    """Identity and profile of the caller, resolved once per request."""

    user: User
    profile: Profile

    @property
    def user_id(self) -> uuid.UUID:
        return self.user.id

    @property
    def is_mentor(self) -> bool:
        return self.profile.user_type == UserType.MENTOR.value


def get_current_user(db: Session = Depends(get_db), token: str = Depends(reusable_oauth2)) -> User:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[security.ALGORITHM])
        token_data = TokenPayload(**payload)
        user_id = uuid.UUID(token_data.sub or "")
    except (JWTError, ValidationError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return user


def get_current_context(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CurrentContext:
    profile = db.get(Profile, current_user.id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return CurrentContext(user=current_user, profile=profile)


def get_current_mentor(
    db: Session = Depends(get_db),
    context: CurrentContext = Depends(get_current_context),
) -> Mentor:
    if not context.is_mentor:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Mentor access required")
    mentor = db.get(Mentor, context.user_id)
    if not mentor:
        raise HTTPException(status_code=404, detail="Mentor not found")
    return mentor


def get_current_mentee(
    context: CurrentContext = Depends(get_current_context),
) -> CurrentContext:
    if context.is_mentor:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Mentee access required")
    return context
