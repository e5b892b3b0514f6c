from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mentor4all.core.db import get_db
from mentor4all.core.deps import CurrentContext, get_current_context, get_current_mentor
from mentor4all.models.mentor import Mentor
from mentor4all.schemas.dashboard import MenteeDashboard, MentorDashboard
from mentor4all.services.dashboard_service import dashboard_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/mentee", response_model=MenteeDashboard)
def read_mentee_dashboard(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    lists = dashboard_service.fetch_sessions(db, mentee_id=context.user_id)
    return {
        "stats": dashboard_service.mentee_stats(lists),
        "upcoming": lists.upcoming,
        "past": lists.past,
    }


@router.get("/mentor", response_model=MentorDashboard)
def read_mentor_dashboard(
    mentor: Mentor = Depends(get_current_mentor),
    db: Session = Depends(get_db),
):
    lists = dashboard_service.fetch_sessions(db, mentor_id=mentor.id)
    return {
        "stats": dashboard_service.mentor_stats(lists),
        "upcoming": lists.upcoming,
        "past": lists.past,
    }
