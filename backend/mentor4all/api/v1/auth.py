from datetime import timedelta
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from mentor4all.core import security
from mentor4all.core.config import settings
from mentor4all.core.db import get_db
from mentor4all.core.deps import CurrentContext, get_current_context
from mentor4all.core.errors import Mentor4AllError, to_http_exception
from mentor4all.schemas.auth import Login, SignUp, Token, UserMe
from mentor4all.schemas.profile import ProfileResponse
from mentor4all.services.auth_service import AuthService
from mentor4all.services.profile_service import profile_service

router = APIRouter()


def _issue_token(user_id) -> dict:
    access_token_expires = timedelta(seconds=settings.JWT_EXPIRES_SECONDS)
    access_token = security.create_access_token(user_id, expires_delta=access_token_expires)
    return {
        "access_token": access_token,
        "token_type": "bearer",
    }


@router.post("/auth/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def sign_up(
    data: SignUp,
    db: Session = Depends(get_db),
) -> Any:
    """
    Create an account and its profile, returning an access token
    """
    try:
        user, _ = profile_service.sign_up(db, data)
    except Mentor4AllError as exc:
        raise to_http_exception(exc) from exc
    return _issue_token(user.id)


@router.post("/login/access-token", response_model=Token)
def login_access_token(
    login_data: Login,
    db: Session = Depends(get_db),
) -> Any:
    """
    OAuth2 compatible token login, get an access token for future requests
    """
    user = AuthService.authenticate_user(db, login_data)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return _issue_token(user.id)


@router.get("/auth/me", response_model=UserMe)
def get_me(
    context: CurrentContext = Depends(get_current_context),
) -> UserMe:
    return UserMe(
        id=context.user.id,
        email=context.user.email,
        profile=ProfileResponse.model_validate(context.profile),
    )
