import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from mentor4all.core.db import Base


class UserType(str, enum.Enum):
    MENTOR = "mentor"
    MENTEE = "mentee"


class Profile(Base):
    __tablename__ = "profiles"

    # Same id as the identity row it extends
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", name="profiles_id_fkey", ondelete="CASCADE"),
        primary_key=True,
    )
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_type: Mapped[str] = mapped_column(
        String(20), default=UserType.MENTEE.value, nullable=False
    )  # mentor, mentee
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=text("CURRENT_TIMESTAMP"), nullable=True
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=text("CURRENT_TIMESTAMP"), nullable=True
    )

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
