import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentor4all.core.db import get_db
from mentor4all.core.deps import CurrentContext, get_current_context, get_current_mentor
from mentor4all.core.errors import Mentor4AllError, to_http_exception
from mentor4all.models.mentor import Mentor
from mentor4all.schemas.availability import SlotResponse
from mentor4all.schemas.mentor import (
    EnsureMentorRequest,
    EnsureMentorResponse,
    MentorSummary,
    MentorUpdate,
    ReviewResponse,
)
from mentor4all.services.availability_service import availability_service
from mentor4all.services.mentor_service import DirectoryFilters, mentor_service, mentor_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mentors", tags=["mentors"])


@router.get("", response_model=list[MentorSummary])
def list_mentors(
    q: str | None = None,
    industry: list[str] = Query(default=[]),
    expertise: list[str] = Query(default=[]),
    experience: list[str] = Query(default=[]),
    price: list[str] = Query(default=[]),
    db: Session = Depends(get_db),
):
    filters = DirectoryFilters(
        q=q, industry=industry, expertise=expertise, experience=experience, price=price
    )
    try:
        mentors = mentor_service.search(db, filters)
    except Mentor4AllError as exc:
        raise to_http_exception(exc) from exc
    return [mentor_to_dict(mentor) for mentor in mentors]


@router.post("/ensure", response_model=EnsureMentorResponse)
def ensure_mentor_profile(
    payload: EnsureMentorRequest,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Idempotently create the caller's mentor row.
    """
    target_id = payload.userId or context.user_id
    if target_id != context.user_id:
        return JSONResponse(status_code=400, content={"error": "Cannot create a mentor profile for another user"})

    try:
        mentor, created = mentor_service.ensure_mentor(db, target_id)
    except (Mentor4AllError, SQLAlchemyError) as exc:
        logger.warning("Ensuring mentor profile for %s failed: %s", target_id, exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})

    if not created:
        return {"message": "Mentor profile already exists"}
    return {"message": "Mentor profile created successfully", "data": mentor_to_dict(mentor)}


@router.patch("/me", response_model=MentorSummary)
def update_my_mentor_profile(
    payload: MentorUpdate,
    mentor: Mentor = Depends(get_current_mentor),
    db: Session = Depends(get_db),
):
    mentor_id = mentor.id
    try:
        mentor = mentor_service.update(db, mentor, payload.model_dump(exclude_unset=True))
    except SQLAlchemyError as exc:
        logger.exception("Updating mentor profile failed for %s", mentor_id)
        raise HTTPException(status_code=500, detail="Could not update mentor profile") from exc
    return mentor_to_dict(mentor)


@router.get("/{mentor_id}", response_model=MentorSummary)
def read_mentor(mentor_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        mentor = mentor_service.get(db, mentor_id)
    except Mentor4AllError as exc:
        raise to_http_exception(exc) from exc
    return mentor_to_dict(mentor)


@router.get("/{mentor_id}/reviews", response_model=list[ReviewResponse])
def read_mentor_reviews(mentor_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        return mentor_service.list_reviews(db, mentor_id)
    except Mentor4AllError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{mentor_id}/availability", response_model=list[SlotResponse])
def read_bookable_slots(mentor_id: uuid.UUID, db: Session = Depends(get_db)):
    """Free slots from today onwards."""
    try:
        mentor_service.get(db, mentor_id)
    except Mentor4AllError as exc:
        raise to_http_exception(exc) from exc
    return availability_service.list_bookable(db, mentor_id)
