import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentor4all.core.db import get_db
from mentor4all.core.deps import get_current_mentor
from mentor4all.core.errors import Mentor4AllError, to_http_exception
from mentor4all.models.mentor import Mentor
from mentor4all.schemas.availability import (
    AvailabilityAdd,
    AvailabilityChangeResult,
    AvailabilitySave,
    SlotResponse,
)
from mentor4all.services.availability_service import (
    AvailabilityChange,
    AvailabilityDraft,
    StagedSlot,
    availability_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/availability", tags=["availability"])

SAVE_FAILED = "Could not save availability"


def _result(db: Session, mentor_id: uuid.UUID, change: AvailabilityChange) -> dict:
    return {
        "added": len(change.added),
        "removed": len(change.removed),
        "cancelled_sessions": change.cancelled_sessions,
        "slots": availability_service.list_for_mentor(db, mentor_id),
    }


@router.get("/me", response_model=list[SlotResponse])
def read_my_availability(
    mentor: Mentor = Depends(get_current_mentor),
    db: Session = Depends(get_db),
):
    return availability_service.list_for_mentor(db, mentor.id)


@router.put("/me", response_model=AvailabilityChangeResult)
def save_my_availability(
    payload: AvailabilitySave,
    mentor: Mentor = Depends(get_current_mentor),
    db: Session = Depends(get_db),
):
    """
    Replace the saved slot set with ``payload.slots``, applied as a diff.
    """
    mentor_id = mentor.id
    try:
        draft = AvailabilityDraft(
            [StagedSlot(slot.day, slot.start_time, slot.end_time) for slot in payload.slots]
        )
        change = availability_service.save_all(
            db, mentor_id, draft, cancel_booked=payload.cancel_booked
        )
    except Mentor4AllError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        logger.exception("Saving availability failed for mentor %s", mentor_id)
        raise HTTPException(status_code=500, detail=SAVE_FAILED) from exc
    return _result(db, mentor_id, change)


@router.post("/me/slots", response_model=AvailabilityChangeResult)
def add_my_slots(
    payload: AvailabilityAdd,
    mentor: Mentor = Depends(get_current_mentor),
    db: Session = Depends(get_db),
):
    mentor_id = mentor.id
    try:
        change = availability_service.apply_changes(
            db,
            mentor_id,
            add=[StagedSlot(slot.day, slot.start_time, slot.end_time) for slot in payload.slots],
        )
    except Mentor4AllError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        logger.exception("Adding availability failed for mentor %s", mentor_id)
        raise HTTPException(status_code=500, detail=SAVE_FAILED) from exc
    return _result(db, mentor_id, change)


@router.delete("/me/slots/{slot_id}", response_model=AvailabilityChangeResult)
def remove_my_slot(
    slot_id: uuid.UUID,
    cancel_booked: bool = False,
    mentor: Mentor = Depends(get_current_mentor),
    db: Session = Depends(get_db),
):
    mentor_id = mentor.id
    try:
        change = availability_service.apply_changes(
            db, mentor_id, remove_ids=[slot_id], cancel_booked=cancel_booked
        )
    except Mentor4AllError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        logger.exception("Removing slot %s failed for mentor %s", slot_id, mentor_id)
        raise HTTPException(status_code=500, detail=SAVE_FAILED) from exc
    return _result(db, mentor_id, change)
