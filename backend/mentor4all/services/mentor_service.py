import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mentor4all.core.errors import MentorNotFoundError, ValidationError
from mentor4all.models.mentor import Mentor
from mentor4all.models.profile import Profile, UserType
from mentor4all.models.review import Review

logger = logging.getLogger(__name__)

EXPERIENCE_BUCKETS: dict[str, tuple[int, int | None]] = {
    "0-2 years": (0, 2),
    "3-5 years": (3, 5),
    "5-10 years": (5, 10),
    "10+ years": (10, None),
}


def parse_price_range(value: str) -> tuple[Decimal, Decimal | None]:
    """``"50-100"`` -> (50, 100); ``"150+"`` -> (150, None)."""
    raw = value.strip()
    try:
        if raw.endswith("+"):
            return Decimal(raw[:-1]), None
        low, high = raw.split("-", 1)
        return Decimal(low), Decimal(high)
    except (ValueError, ArithmeticError) as exc:
        raise ValidationError(f"Invalid price range: {value}") from exc


@dataclass
class DirectoryFilters:
    q: str | None = None
    industry: list[str] = field(default_factory=list)
    expertise: list[str] = field(default_factory=list)
    experience: list[str] = field(default_factory=list)
    price: list[str] = field(default_factory=list)


def _matches_query(mentor: Mentor, query: str) -> bool:
    query = query.casefold()
    profile = mentor.profile
    haystack = [
        profile.full_name if profile else "",
        mentor.job_title or "",
        mentor.company or "",
    ]
    if any(query in text.casefold() for text in haystack):
        return True
    return any(query in tag.casefold() for tag in (mentor.expertise or []))


def _matches_experience(mentor: Mentor, buckets: list[str]) -> bool:
    years = mentor.years_experience
    if years is None:
        return False
    for bucket in buckets:
        bounds = EXPERIENCE_BUCKETS.get(bucket)
        if bounds is None:
            raise ValidationError(f"Unknown experience bucket: {bucket}")
        low, high = bounds
        if years >= low and (high is None or years <= high):
            return True
    return False


def _matches_price(mentor: Mentor, ranges: list[str]) -> bool:
    rate = Decimal(str(mentor.hourly_rate or 0))
    for value in ranges:
        low, high = parse_price_range(value)
        if rate >= low and (high is None or rate <= high):
            return True
    return False


def matches(mentor: Mentor, filters: DirectoryFilters) -> bool:
    if filters.q and not _matches_query(mentor, filters.q):
        return False
    if filters.industry and mentor.industry not in filters.industry:
        return False
    if filters.expertise and not any(tag in filters.expertise for tag in (mentor.expertise or [])):
        return False
    if filters.experience and not _matches_experience(mentor, filters.experience):
        return False
    if filters.price and not _matches_price(mentor, filters.price):
        return False
    return True


def mentor_to_dict(mentor: Mentor) -> dict:
    profile = mentor.profile
    return {
        "id": mentor.id,
        "first_name": profile.first_name if profile else None,
        "last_name": profile.last_name if profile else None,
        "avatar_url": profile.avatar_url if profile else None,
        "bio": profile.bio if profile else None,
        "hourly_rate": float(mentor.hourly_rate or 0),
        "years_experience": mentor.years_experience,
        "industry": mentor.industry,
        "expertise": list(mentor.expertise or []),
        "company": mentor.company,
        "job_title": mentor.job_title,
        "average_rating": float(mentor.average_rating) if mentor.average_rating is not None else None,
        "review_count": mentor.review_count,
    }


class MentorService:
    def ensure_mentor(self, db: Session, user_id: uuid.UUID) -> tuple[Mentor, bool]:
        """Create the mentor row for ``user_id`` unless it exists. Returns (mentor, created)."""
        existing = db.get(Mentor, user_id)
        if existing:
            return existing, False

        if db.get(Profile, user_id) is None:
            raise ValidationError("Profile does not exist")

        mentor = Mentor(id=user_id, hourly_rate=Decimal("0"), expertise=[], review_count=0)
        db.add(mentor)
        try:
            db.commit()
        except IntegrityError:
            # Created concurrently by another request
            db.rollback()
            existing = db.get(Mentor, user_id)
            if existing is None:
                raise
            return existing, False
        db.refresh(mentor)
        logger.info("Mentor profile created for %s", user_id)
        return mentor, True

    def get(self, db: Session, mentor_id: uuid.UUID) -> Mentor:
        mentor = db.get(Mentor, mentor_id)
        if mentor is None:
            raise MentorNotFoundError()
        return mentor

    def search(self, db: Session, filters: DirectoryFilters) -> list[Mentor]:
        mentors = (
            db.query(Mentor)
            .join(Profile, Profile.id == Mentor.id)
            .filter(Profile.user_type == UserType.MENTOR.value)
            .order_by(Profile.first_name, Profile.last_name)
            .all()
        )
        return [mentor for mentor in mentors if matches(mentor, filters)]

    def update(self, db: Session, mentor: Mentor, changes: dict) -> Mentor:
        for key, value in changes.items():
            if key == "hourly_rate" and value is not None:
                value = Decimal(str(value))
            setattr(mentor, key, value)
        try:
            db.add(mentor)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(mentor)
        return mentor

    def list_reviews(self, db: Session, mentor_id: uuid.UUID) -> list[Review]:
        self.get(db, mentor_id)
        return (
            db.query(Review)
            .filter(Review.mentor_id == mentor_id)
            .order_by(Review.created_at.desc())
            .all()
        )


# Singleton instance
mentor_service = MentorService()
