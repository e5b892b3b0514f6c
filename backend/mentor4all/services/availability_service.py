import logging
import uuid
from dataclasses import dataclass
from datetime import date, time

from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from mentor4all.core.errors import (
    BookedSlotRemovalError,
    InvalidTimeRangeError,
    SlotNotFoundError,
    SlotOverlapError,
)
from mentor4all.models.availability import MentorAvailability
from mentor4all.models.session import MentorshipSession, SessionStatus

logger = logging.getLogger(__name__)


def overlaps(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """Half-open intervals [start, end) conflict if each starts before the other ends."""
    return start_a < end_b and start_b < end_a


def validate_range(start: time, end: time) -> None:
    # Wall-clock minutes only; compute_duration_minutes relies on it
    for value in (start, end):
        if value.tzinfo is not None:
            raise InvalidTimeRangeError("Slot times must not carry a timezone")
        if value.second or value.microsecond:
            raise InvalidTimeRangeError("Slot times must be whole minutes")
    if start >= end:
        raise InvalidTimeRangeError()


@dataclass(frozen=True)
class StagedSlot:
    day: date
    start_time: time
    end_time: time

    @property
    def key(self) -> tuple[date, time, time]:
        return (self.day, self.start_time, self.end_time)


class AvailabilityDraft:
    """A mentor's not-yet-saved set of time windows."""

    def __init__(self, slots: list[StagedSlot] | None = None):
        self._slots: list[StagedSlot] = []
        for slot in slots or []:
            self.add_slot(slot.day, slot.start_time, slot.end_time)

    @property
    def slots(self) -> list[StagedSlot]:
        return list(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def add_slot(self, day: date, start: time, end: time) -> StagedSlot:
        validate_range(start, end)
        for existing in self._slots:
            if existing.day != day:
                continue
            if overlaps(start, end, existing.start_time, existing.end_time):
                raise SlotOverlapError(
                    f"{day.isoformat()} {start:%H:%M}-{end:%H:%M} overlaps "
                    f"{existing.start_time:%H:%M}-{existing.end_time:%H:%M}"
                )
        slot = StagedSlot(day=day, start_time=start, end_time=end)
        self._slots.append(slot)
        return slot

    def remove_slot(self, index: int) -> StagedSlot:
        if index < 0 or index >= len(self._slots):
            raise SlotNotFoundError(f"No staged slot at position {index}")
        return self._slots.pop(index)

    def for_day(self, day: date) -> list[StagedSlot]:
        return [slot for slot in self._slots if slot.day == day]


@dataclass
class AvailabilityChange:
    added: list[MentorAvailability]
    removed: list[MentorAvailability]
    cancelled_sessions: int = 0


class AvailabilityService:
    """Persistence side of a mentor's availability.

    Edits are applied as an explicit diff inside one transaction: rows are
    never deleted and re-inserted wholesale, and a booked slot is only
    removed when the caller confirms cancelling the session booked on it.
    """

    def list_for_mentor(self, db: Session, mentor_id: uuid.UUID) -> list[MentorAvailability]:
        return (
            db.query(MentorAvailability)
            .filter(MentorAvailability.mentor_id == mentor_id)
            .order_by(MentorAvailability.day, MentorAvailability.start_time)
            .all()
        )

    def list_bookable(
        self, db: Session, mentor_id: uuid.UUID, today: date | None = None
    ) -> list[MentorAvailability]:
        today = today or date.today()
        return (
            db.query(MentorAvailability)
            .filter(
                MentorAvailability.mentor_id == mentor_id,
                MentorAvailability.is_booked == False,  # noqa: E712
                MentorAvailability.day >= today,
            )
            .order_by(MentorAvailability.day, MentorAvailability.start_time)
            .all()
        )

    def save_all(
        self,
        db: Session,
        mentor_id: uuid.UUID,
        draft: AvailabilityDraft,
        *,
        cancel_booked: bool = False,
    ) -> AvailabilityChange:
        """Make the persisted slot set equal to ``draft``."""
        persisted = self.list_for_mentor(db, mentor_id)
        persisted_by_key = {
            (row.day, row.start_time, row.end_time): row for row in persisted
        }
        staged_keys = {slot.key for slot in draft.slots}

        to_remove = [row for key, row in persisted_by_key.items() if key not in staged_keys]
        to_add = [slot for slot in draft.slots if slot.key not in persisted_by_key]

        return self._apply(db, mentor_id, to_add, to_remove, cancel_booked=cancel_booked)

    def apply_changes(
        self,
        db: Session,
        mentor_id: uuid.UUID,
        *,
        add: list[StagedSlot] | None = None,
        remove_ids: list[uuid.UUID] | None = None,
        cancel_booked: bool = False,
    ) -> AvailabilityChange:
        """Add and remove individual slots, validating against what is already saved."""
        add = add or []
        remove_ids = remove_ids or []

        persisted = self.list_for_mentor(db, mentor_id)
        by_id = {row.id: row for row in persisted}
        to_remove: list[MentorAvailability] = []
        for slot_id in remove_ids:
            row = by_id.get(slot_id)
            if row is None:
                raise SlotNotFoundError()
            to_remove.append(row)

        removed_ids = {row.id for row in to_remove}
        # Remaining persisted slots seed the draft so additions are checked against them
        draft = AvailabilityDraft(
            [
                StagedSlot(row.day, row.start_time, row.end_time)
                for row in persisted
                if row.id not in removed_ids
            ]
        )
        for slot in add:
            draft.add_slot(slot.day, slot.start_time, slot.end_time)

        return self._apply(db, mentor_id, add, to_remove, cancel_booked=cancel_booked)

    def _apply(
        self,
        db: Session,
        mentor_id: uuid.UUID,
        to_add: list[StagedSlot],
        to_remove: list[MentorAvailability],
        *,
        cancel_booked: bool,
    ) -> AvailabilityChange:
        booked = [row for row in to_remove if row.is_booked]
        if booked and not cancel_booked:
            raise BookedSlotRemovalError(
                f"{len(booked)} booked slot(s) would be removed; confirm with cancel_booked=true"
            )

        try:
            cancelled = 0
            if booked:
                result = db.execute(
                    update(MentorshipSession)
                    .where(
                        MentorshipSession.availability_id.in_([row.id for row in booked]),
                        MentorshipSession.status == SessionStatus.SCHEDULED.value,
                    )
                    .values(status=SessionStatus.CANCELLED.value)
                )
                cancelled = result.rowcount or 0

            if to_remove:
                db.execute(
                    update(MentorshipSession)
                    .where(MentorshipSession.availability_id.in_([row.id for row in to_remove]))
                    .values(availability_id=None)
                )
                db.execute(
                    delete(MentorAvailability).where(
                        MentorAvailability.id.in_([row.id for row in to_remove])
                    )
                )

            added = [
                MentorAvailability(
                    id=uuid.uuid4(),
                    mentor_id=mentor_id,
                    day=slot.day,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                    is_booked=False,
                )
                for slot in to_add
            ]
            db.add_all(added)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            "Availability updated for mentor %s: +%d -%d (cancelled %d sessions)",
            mentor_id,
            len(added),
            len(to_remove),
            cancelled,
        )
        return AvailabilityChange(added=added, removed=to_remove, cancelled_sessions=cancelled)


# Singleton instance
availability_service = AvailabilityService()
