from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mentor4all.core.db import get_db
from mentor4all.schemas.group_session import GroupSessionResponse
from mentor4all.services.group_session_service import group_session_service

router = APIRouter(prefix="/group-sessions", tags=["group-sessions"])


@router.get("", response_model=list[GroupSessionResponse])
def list_group_sessions(category: str | None = None, db: Session = Depends(get_db)):
    return group_session_service.list_upcoming(db, category=category)
