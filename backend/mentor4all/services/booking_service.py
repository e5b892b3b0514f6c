import enum
import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import update
from sqlalchemy.orm import Session

from mentor4all.core.errors import (
    InvalidWizardStepError,
    MentorNotFoundError,
    MissingSlotError,
    MissingTitleError,
    PermissionDeniedError,
    SelfBookingError,
    SessionNotCancellableError,
    SessionNotFoundError,
    SlotNotFoundError,
    SlotUnavailableError,
)
from mentor4all.models.availability import MentorAvailability
from mentor4all.models.mentor import Mentor
from mentor4all.models.session import MentorshipSession, PaymentStatus, SessionStatus
from mentor4all.services.availability_service import validate_range

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def compute_duration_minutes(start: time, end: time) -> int:
    validate_range(start, end)
    start_minutes = start.hour * 60 + start.minute
    end_minutes = end.hour * 60 + end.minute
    return end_minutes - start_minutes


def compute_price(hourly_rate: Decimal | float | int, duration_minutes: int) -> Decimal:
    """hourly_rate / 60 * duration, rounded half-up to cents."""
    rate = Decimal(str(hourly_rate))
    return (rate * Decimal(duration_minutes) / Decimal(60)).quantize(CENTS, rounding=ROUND_HALF_UP)


class WizardStep(str, enum.Enum):
    SLOT_SELECTION = "slot_selection"
    DETAILS_ENTRY = "details_entry"
    BOOKED = "booked"


@dataclass(frozen=True)
class BookingDraft:
    slot_id: uuid.UUID
    title: str
    description: str | None = None


class BookingWizard:
    """Two-step booking flow: pick a slot, then enter session details.

    Going back to slot selection keeps the entered title and description.
    Nothing is persisted until ``confirm`` hands a draft to the service.
    """

    def __init__(self, slots: list[MentorAvailability] | None = None):
        self.step = WizardStep.SLOT_SELECTION
        self.slots = list(slots or [])
        self.selected_date: date | None = None
        self.selected_slot_id: uuid.UUID | None = None
        self.title: str = ""
        self.description: str | None = None

    def available_dates(self) -> list[date]:
        return sorted({slot.day for slot in self.slots})

    def slots_for_date(self, day: date) -> list[MentorAvailability]:
        return [slot for slot in self.slots if slot.day == day]

    def choose_date(self, day: date) -> None:
        self._require(WizardStep.SLOT_SELECTION)
        if day != self.selected_date:
            self.selected_slot_id = None
        self.selected_date = day

    def select_slot(self, slot_id: uuid.UUID | None) -> None:
        self._require(WizardStep.SLOT_SELECTION)
        if slot_id is None:
            raise MissingSlotError()
        if self.slots and not any(slot.id == slot_id for slot in self.slots):
            raise SlotNotFoundError()
        self.selected_slot_id = slot_id
        self.step = WizardStep.DETAILS_ENTRY

    def enter_details(self, title: str | None, description: str | None = None) -> None:
        self._require(WizardStep.DETAILS_ENTRY)
        self.title = (title or "").strip()
        self.description = (description or "").strip() or None

    def back(self) -> None:
        self._require(WizardStep.DETAILS_ENTRY)
        self.step = WizardStep.SLOT_SELECTION

    def confirm(self) -> BookingDraft:
        if self.selected_slot_id is None:
            raise MissingSlotError()
        self._require(WizardStep.DETAILS_ENTRY)
        if not self.title:
            raise MissingTitleError()
        return BookingDraft(
            slot_id=self.selected_slot_id, title=self.title, description=self.description
        )

    def mark_booked(self) -> None:
        self._require(WizardStep.DETAILS_ENTRY)
        self.step = WizardStep.BOOKED

    def _require(self, step: WizardStep) -> None:
        if self.step != step:
            raise InvalidWizardStepError(f"Expected step {step.value}, currently {self.step.value}")


class BookingService:
    def book(
        self,
        db: Session,
        mentee_id: uuid.UUID,
        draft: BookingDraft,
        *,
        today: date | None = None,
    ) -> MentorshipSession:
        """Consume one free slot and create its session in a single transaction.

        The conditional update on ``is_booked`` is the concurrency gate: only
        the caller whose update affects the row gets to create the session.
        """
        if not draft.title.strip():
            raise MissingTitleError()

        slot = db.get(MentorAvailability, draft.slot_id)
        if slot is None:
            raise SlotNotFoundError()
        if slot.mentor_id == mentee_id:
            raise SelfBookingError()
        if slot.day < (today or date.today()):
            raise SlotUnavailableError("This time slot is in the past")

        mentor = db.get(Mentor, slot.mentor_id)
        if mentor is None:
            raise MentorNotFoundError()

        duration = compute_duration_minutes(slot.start_time, slot.end_time)
        price = compute_price(mentor.hourly_rate, duration)

        try:
            result = db.execute(
                update(MentorAvailability)
                .where(
                    MentorAvailability.id == slot.id,
                    MentorAvailability.is_booked == False,  # noqa: E712
                )
                .values(is_booked=True)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                db.rollback()
                raise SlotUnavailableError()

            booking = MentorshipSession(
                id=uuid.uuid4(),
                mentor_id=slot.mentor_id,
                mentee_id=mentee_id,
                availability_id=slot.id,
                title=draft.title.strip(),
                description=draft.description,
                date_time=datetime.combine(slot.day, slot.start_time),
                duration=duration,
                price=price,
                status=SessionStatus.SCHEDULED.value,
                payment_status=PaymentStatus.PENDING.value,
            )
            db.add(booking)
            db.commit()
        except SlotUnavailableError:
            raise
        except Exception:
            db.rollback()
            raise

        db.refresh(booking)
        logger.info(
            "Session %s booked: mentor=%s mentee=%s slot=%s price=%s",
            booking.id,
            booking.mentor_id,
            mentee_id,
            slot.id,
            price,
        )
        return booking

    def cancel(self, db: Session, session_id: uuid.UUID, actor_id: uuid.UUID) -> MentorshipSession:
        booking = db.get(MentorshipSession, session_id)
        if booking is None:
            raise SessionNotFoundError()
        if actor_id not in (booking.mentor_id, booking.mentee_id):
            raise PermissionDeniedError("Only participants can cancel a session")
        if booking.status != SessionStatus.SCHEDULED.value:
            raise SessionNotCancellableError()

        try:
            booking.status = SessionStatus.CANCELLED.value
            booking.updated_at = datetime.utcnow()
            if booking.availability_id is not None:
                db.execute(
                    update(MentorAvailability)
                    .where(MentorAvailability.id == booking.availability_id)
                    .values(is_booked=False)
                )
            db.add(booking)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(booking)
        logger.info("Session %s cancelled by %s", booking.id, actor_id)
        return booking


# Singleton instance
booking_service = BookingService()
