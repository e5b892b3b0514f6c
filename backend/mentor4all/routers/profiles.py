import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from mentor4all.core.db import get_db
from mentor4all.core.deps import CurrentContext, get_current_context
from mentor4all.schemas.profile import (
    AccountTypeSwitch,
    AvatarUploadResponse,
    ProfileResponse,
    ProfileUpdate,
)
from mentor4all.services.profile_service import profile_service
from mentor4all.services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
def read_my_profile(context: CurrentContext = Depends(get_current_context)):
    return context.profile


@router.patch("/me", response_model=ProfileResponse)
def update_my_profile(
    payload: ProfileUpdate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    changes = payload.model_dump(exclude_unset=True)
    return profile_service.update(db, context.profile, changes)


@router.post("/me/avatar", response_model=AvatarUploadResponse)
def upload_avatar(
    file: UploadFile = File(...),
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    if file.content_type and not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Avatar must be an image")
    try:
        avatar_url = StorageService.save_avatar(context.user_id, file)
    except OSError as exc:
        logger.exception("Avatar upload failed for %s", context.user_id)
        raise HTTPException(status_code=500, detail="Avatar upload failed") from exc

    profile_service.update(db, context.profile, {"avatar_url": avatar_url})
    return {"avatar_url": avatar_url}


@router.post("/me/account-type", response_model=ProfileResponse)
def switch_account_type(
    payload: AccountTypeSwitch,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    return profile_service.switch_account_type(db, context.profile, payload.user_type)
