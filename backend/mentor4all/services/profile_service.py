import logging
import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from mentor4all.core.errors import ConflictError
from mentor4all.core.security import get_password_hash
from mentor4all.models.profile import Profile, UserType
from mentor4all.models.user import User
from mentor4all.schemas.auth import SignUp
from mentor4all.services.mentor_service import mentor_service

logger = logging.getLogger(__name__)


class ProfileService:
    def sign_up(self, db: Session, data: SignUp) -> tuple[User, Profile]:
        email = data.email.lower()
        if db.execute(select(User).where(User.email == email)).scalar_one_or_none():
            raise ConflictError("An account with this email already exists")

        user = User(
            id=uuid.uuid4(),
            email=email,
            hashed_password=get_password_hash(data.password),
            is_active=True,
        )
        profile = Profile(
            id=user.id,
            first_name=data.first_name,
            last_name=data.last_name,
            user_type=data.user_type,
        )
        db.add(user)
        db.flush()
        db.add(profile)
        db.commit()
        db.refresh(user)
        db.refresh(profile)
        logger.info("Signed up %s as %s", user.id, profile.user_type)

        if profile.user_type == UserType.MENTOR.value:
            mentor_service.ensure_mentor(db, user.id)
        return user, profile

    def update(self, db: Session, profile: Profile, changes: dict) -> Profile:
        for key, value in changes.items():
            setattr(profile, key, value)
        profile.updated_at = datetime.utcnow()
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    def switch_account_type(self, db: Session, profile: Profile, user_type: str) -> Profile:
        profile.user_type = UserType(user_type).value
        profile.updated_at = datetime.utcnow()
        db.add(profile)
        db.commit()
        db.refresh(profile)
        if profile.user_type == UserType.MENTOR.value:
            mentor_service.ensure_mentor(db, profile.id)
        return profile


# Singleton instance
profile_service = ProfileService()
