from pydantic import BaseModel

from mentor4all.schemas.session import SessionResponse


class MenteeStats(BaseModel):
    upcoming_count: int
    past_count: int
    hours_spent: float
    total_spent: float


class MentorStats(BaseModel):
    upcoming_count: int
    session_hours: float
    total_earnings: float
    unique_mentees: int


class MenteeDashboard(BaseModel):
    stats: MenteeStats
    upcoming: list[SessionResponse]
    past: list[SessionResponse]


class MentorDashboard(BaseModel):
    stats: MentorStats
    upcoming: list[SessionResponse]
    past: list[SessionResponse]
