from datetime import datetime

from sqlalchemy.orm import Session

from mentor4all.models.group_session import GroupSession


class GroupSessionService:
    def list_upcoming(
        self, db: Session, category: str | None = None, now: datetime | None = None
    ) -> list[GroupSession]:
        query = db.query(GroupSession).filter(
            GroupSession.status == "scheduled",
            GroupSession.date_time >= (now or datetime.utcnow()),
        )
        if category and category != "all":
            query = query.filter(GroupSession.category == category)
        return query.order_by(GroupSession.date_time).all()


# Singleton instance
group_session_service = GroupSessionService()
