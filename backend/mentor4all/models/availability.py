import uuid
from datetime import date, datetime, time

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Time, Uuid, false, text
from sqlalchemy.orm import Mapped, mapped_column

from mentor4all.core.db import Base


class MentorAvailability(Base):
    __tablename__ = "mentor_availability"
    __table_args__ = (Index("idx_mentor_availability_mentor_day", "mentor_id", "day"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    mentor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("mentors.id", name="mentor_availability_mentor_id_fkey", ondelete="CASCADE"),
        nullable=False,
    )
    day: Mapped[date] = mapped_column(Date, nullable=False)
    # Wall-clock times, no timezone
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    is_booked: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=text("CURRENT_TIMESTAMP"), nullable=True
    )
