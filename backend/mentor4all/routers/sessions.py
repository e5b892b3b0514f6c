import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentor4all.core.db import get_db
from mentor4all.core.deps import CurrentContext, get_current_context
from mentor4all.core.errors import Mentor4AllError, to_http_exception
from mentor4all.schemas.session import BookingRequest, SessionListResponse, SessionResponse
from mentor4all.services.booking_service import BookingWizard, booking_service
from mentor4all.services.dashboard_service import dashboard_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def book_session(
    payload: BookingRequest,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Book a free slot. The slot is consumed and the session created atomically.
    """
    user_id = context.user_id
    wizard = BookingWizard()
    try:
        wizard.select_slot(payload.slot_id)
        wizard.enter_details(payload.title, payload.description)
        draft = wizard.confirm()
        booking = booking_service.book(db, user_id, draft)
    except Mentor4AllError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        logger.exception("Booking failed for %s", user_id)
        raise HTTPException(status_code=500, detail="Booking failed") from exc
    wizard.mark_booked()
    return booking


@router.get("/me", response_model=SessionListResponse)
def read_my_sessions(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    if context.is_mentor:
        lists = dashboard_service.fetch_sessions(db, mentor_id=context.user_id)
    else:
        lists = dashboard_service.fetch_sessions(db, mentee_id=context.user_id)
    return {"upcoming": lists.upcoming, "past": lists.past}


@router.post("/{session_id}/cancel", response_model=SessionResponse)
def cancel_session(
    session_id: uuid.UUID,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    try:
        return booking_service.cancel(db, session_id, context.user_id)
    except Mentor4AllError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        logger.exception("Cancelling session %s failed", session_id)
        raise HTTPException(status_code=500, detail="Cancellation failed") from exc
