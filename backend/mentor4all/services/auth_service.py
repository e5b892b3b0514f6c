from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from mentor4all.core.security import verify_password
from mentor4all.models.user import User
from mentor4all.schemas.auth import Login


class AuthService:
    @staticmethod
    def authenticate_user(db: Session, login_data: Login) -> Optional[User]:
        stmt = select(User).where(User.email == login_data.email.lower())
        user = db.execute(stmt).scalar_one_or_none()

        if not user:
            return None

        if not verify_password(login_data.password, user.hashed_password):
            return None

        return user
