import logging
import sys
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal

# Add current directory to sys.path to resolve 'mentor4all' modules
sys.path.append(".")

from mentor4all.core.db import SessionLocal
from mentor4all.core.security import get_password_hash
from mentor4all.models.availability import MentorAvailability
from mentor4all.models.group_session import GroupSession
from mentor4all.models.mentor import Mentor
from mentor4all.models.profile import Profile, UserType
from mentor4all.models.user import User

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _ensure_user(db, email: str, password: str, first_name: str, last_name: str, user_type: str):
    user = db.query(User).filter_by(email=email).first()
    if not user:
        user = User(
            id=uuid.uuid4(),
            email=email,
            hashed_password=get_password_hash(password),
            is_active=True,
        )
        db.add(user)
        db.flush()
        logger.info(f"Created User: {email}")
    elif not user.hashed_password.startswith("$pbkdf2-sha256$"):
        user.hashed_password = get_password_hash(password)
        logger.info(f"Updated password hash for {email}")

    profile = db.get(Profile, user.id)
    if not profile:
        profile = Profile(
            id=user.id, first_name=first_name, last_name=last_name, user_type=user_type
        )
        db.add(profile)
        db.flush()
    return user, profile


def seed_db():
    default_password = "mentor4all"

    db = SessionLocal()
    try:
        logger.info("Seeding database...")

        # 1. Mentor with a filled-in profile
        mentor_user, _ = _ensure_user(
            db, "mentor@mentor4all.io", default_password, "Ada", "Lovelace", UserType.MENTOR.value
        )
        mentor = db.get(Mentor, mentor_user.id)
        if not mentor:
            mentor = Mentor(
                id=mentor_user.id,
                hourly_rate=Decimal("120.00"),
                years_experience=8,
                industry="Technology",
                expertise=["Career Development", "Software Engineering"],
                company="Analytical Engines",
                job_title="Staff Engineer",
                review_count=0,
            )
            db.add(mentor)
            logger.info("Created Mentor profile")

        # 2. Mentee
        mentee_user, _ = _ensure_user(
            db, "mentee@mentor4all.io", default_password, "Grace", "Hopper", UserType.MENTEE.value
        )
        db.commit()

        # 3. Free slots over the next week
        if not db.query(MentorAvailability).filter_by(mentor_id=mentor.id).first():
            start_day = date.today() + timedelta(days=1)
            for offset in range(5):
                day = start_day + timedelta(days=offset)
                for hour in (9, 11, 15):
                    db.add(
                        MentorAvailability(
                            id=uuid.uuid4(),
                            mentor_id=mentor.id,
                            day=day,
                            start_time=time(hour, 0),
                            end_time=time(hour + 1, 0),
                            is_booked=False,
                        )
                    )
            db.commit()
            logger.info("Created availability slots")

        # 4. One upcoming group session
        if not db.query(GroupSession).filter_by(mentor_id=mentor.id).first():
            db.add(
                GroupSession(
                    id=uuid.uuid4(),
                    mentor_id=mentor.id,
                    title="Breaking into tech",
                    description="Open Q&A for career switchers",
                    category="Career Development",
                    date_time=datetime.combine(date.today() + timedelta(days=7), time(18, 0)),
                    duration=90,
                    capacity=20,
                    enrolled=0,
                    price=Decimal("15.00"),
                    status="scheduled",
                )
            )
            db.commit()
            logger.info("Created group session")

        logger.info("Seeding complete!")
        logger.info(f"Mentor User ID: {mentor_user.id}")
        logger.info(f"Mentee User ID: {mentee_user.id}")

    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_db()
