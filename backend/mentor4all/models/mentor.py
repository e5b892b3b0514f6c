import uuid
from decimal import Decimal

from sqlalchemy import JSON, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mentor4all.core.db import Base
from mentor4all.models.profile import Profile


class Mentor(Base):
    __tablename__ = "mentors"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", name="mentors_id_fkey", ondelete="CASCADE"),
        primary_key=True,
    )
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)
    years_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    industry: Mapped[str | None] = mapped_column(String(255), nullable=True)
    expertise: Mapped[list[str] | None] = mapped_column(JSON, default=list, nullable=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    average_rating: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)
    review_count: Mapped[int | None] = mapped_column(Integer, default=0, nullable=True)

    profile: Mapped[Profile] = relationship(Profile, lazy="joined")
