import uuid
from datetime import date, datetime, time
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from conftest import add_slot, future_day, make_person, signup, user_id_for
from mentor4all.core.errors import (
    InvalidTimeRangeError,
    InvalidWizardStepError,
    MissingSlotError,
    MissingTitleError,
    SelfBookingError,
    SlotNotFoundError,
    SlotUnavailableError,
)
from mentor4all.models.availability import MentorAvailability
from mentor4all.models.session import MentorshipSession
from mentor4all.services.booking_service import (
    BookingDraft,
    BookingWizard,
    WizardStep,
    booking_service,
    compute_duration_minutes,
    compute_price,
)

DAY = date(2025, 4, 15)
BEFORE_DAY = date(2025, 4, 14)


def test_price_is_prorated_by_minutes():
    assert compute_price(1000, 60) == Decimal("1000.00")
    assert compute_price(1000, 30) == Decimal("500.00")
    assert compute_price(Decimal("100"), 50) == Decimal("83.33")
    assert compute_price(Decimal("0.05"), 30) == Decimal("0.03")


def test_duration_in_whole_minutes():
    assert compute_duration_minutes(time(9), time(10)) == 60
    assert compute_duration_minutes(time(9, 15), time(10)) == 45


def test_wizard_back_keeps_entered_details():
    slot_id = uuid.uuid4()
    slots = [MentorAvailability(id=slot_id, day=DAY, start_time=time(9), end_time=time(10))]
    wizard = BookingWizard(slots)
    assert wizard.available_dates() == [DAY]

    with pytest.raises(MissingSlotError):
        wizard.select_slot(None)

    wizard.choose_date(DAY)
    wizard.select_slot(slot_id)
    assert wizard.step == WizardStep.DETAILS_ENTRY

    wizard.enter_details("Career chat", "Switching to data")
    wizard.back()
    assert wizard.step == WizardStep.SLOT_SELECTION
    assert wizard.title == "Career chat"

    wizard.select_slot(slot_id)
    draft = wizard.confirm()
    assert draft == BookingDraft(slot_id=slot_id, title="Career chat", description="Switching to data")

    wizard.mark_booked()
    with pytest.raises(InvalidWizardStepError):
        wizard.back()


def test_wizard_rejects_unknown_slot_and_blank_title():
    known = MentorAvailability(id=uuid.uuid4(), day=DAY, start_time=time(9), end_time=time(10))
    wizard = BookingWizard([known])
    with pytest.raises(SlotNotFoundError):
        wizard.select_slot(uuid.uuid4())

    wizard.select_slot(known.id)
    wizard.enter_details("   ")
    with pytest.raises(MissingTitleError):
        wizard.confirm()


def test_wizard_confirm_without_slot_is_rejected():
    with pytest.raises(MissingSlotError):
        BookingWizard().confirm()


def test_book_creates_session_and_consumes_slot(db_session, mentor, mentee):
    slot = add_slot(db_session, mentor.id, DAY, time(9), time(10))

    booking = booking_service.book(
        db_session,
        mentee.id,
        BookingDraft(slot_id=slot.id, title="Career chat"),
        today=BEFORE_DAY,
    )

    assert booking.duration == 60
    assert booking.price == Decimal("1200.00")
    assert booking.status == "scheduled"
    assert booking.payment_status == "pending"
    assert booking.date_time == datetime(2025, 4, 15, 9, 0)
    assert booking.availability_id == slot.id
    db_session.refresh(slot)
    assert slot.is_booked is True


def test_second_booking_of_same_slot_is_rejected(db_session, mentor, mentee):
    slot = add_slot(db_session, mentor.id, DAY, time(9), time(10))
    other, _ = make_person(db_session, "second@mentor4all.io", "mentee")
    db_session.commit()

    booking_service.book(
        db_session, mentee.id, BookingDraft(slot.id, "Career chat"), today=BEFORE_DAY
    )
    with pytest.raises(SlotUnavailableError):
        booking_service.book(
            db_session, other.id, BookingDraft(slot.id, "Me too"), today=BEFORE_DAY
        )

    assert db_session.query(MentorshipSession).count() == 1


def test_book_validations_write_nothing(db_session, mentor, mentee):
    slot = add_slot(db_session, mentor.id, DAY, time(9), time(10))

    with pytest.raises(MissingTitleError):
        booking_service.book(db_session, mentee.id, BookingDraft(slot.id, "  "), today=BEFORE_DAY)
    with pytest.raises(SelfBookingError):
        booking_service.book(db_session, mentor.id, BookingDraft(slot.id, "Own"), today=BEFORE_DAY)
    with pytest.raises(SlotUnavailableError):
        booking_service.book(db_session, mentee.id, BookingDraft(slot.id, "Late"), today=date(2025, 4, 16))

    assert db_session.query(MentorshipSession).count() == 0
    db_session.refresh(slot)
    assert slot.is_booked is False


def test_cancel_frees_the_slot(db_session, mentor, mentee):
    slot = add_slot(db_session, mentor.id, DAY, time(9), time(10))
    booking = booking_service.book(
        db_session, mentee.id, BookingDraft(slot.id, "Career chat"), today=BEFORE_DAY
    )

    cancelled = booking_service.cancel(db_session, booking.id, mentee.id)
    assert cancelled.status == "cancelled"
    db_session.refresh(slot)
    assert slot.is_booked is False


def _mentor_with_slot(client, db_session, day):
    headers = signup(client, "coach@mentor4all.io", "mentor", "Ada", "Lovelace")
    res = client.patch("/api/v1/mentors/me", headers=headers, json={"hourly_rate": 1200})
    assert res.status_code == 200, res.text
    saved = client.put(
        "/api/v1/availability/me",
        headers=headers,
        json={"slots": [{"day": day.isoformat(), "start_time": "09:00", "end_time": "10:00"}]},
    ).json()
    return headers, saved["slots"][0]["id"]


def test_booking_api_end_to_end(client, db_session):
    day = future_day()
    mentor_headers, slot_id = _mentor_with_slot(client, db_session, day)
    first = signup(client, "first.mentee@mentor4all.io")
    second = signup(client, "second.mentee@mentor4all.io")

    res = client.post(
        "/api/v1/sessions", headers=first, json={"slot_id": slot_id, "title": "Career chat"}
    )
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["duration"] == 60
    assert body["price"] == 1200.0
    assert body["status"] == "scheduled"
    assert body["date_time"].startswith(f"{day.isoformat()}T09:00")

    slots = client.get("/api/v1/availability/me", headers=mentor_headers).json()
    assert slots[0]["is_booked"] is True

    again = client.post(
        "/api/v1/sessions", headers=second, json={"slot_id": slot_id, "title": "Career chat"}
    )
    assert again.status_code == 409

    mentor_id = user_id_for(client, mentor_headers)
    assert client.get(f"/api/v1/mentors/{mentor_id}/availability").json() == []


def test_booking_api_without_slot_or_title_writes_nothing(client, db_session):
    _, slot_id = _mentor_with_slot(client, db_session, future_day())
    mentee = signup(client, "picky@mentor4all.io")

    no_slot = client.post("/api/v1/sessions", headers=mentee, json={"title": "Career chat"})
    assert no_slot.status_code == 400
    no_title = client.post("/api/v1/sessions", headers=mentee, json={"slot_id": slot_id})
    assert no_title.status_code == 400

    assert db_session.query(MentorshipSession).count() == 0
    assert db_session.query(MentorAvailability).filter_by(is_booked=True).count() == 0


def test_booking_api_requires_authentication(client):
    res = client.post("/api/v1/sessions", json={"title": "Career chat"})
    assert res.status_code == 401


def test_mentor_cannot_book_own_slot(client, db_session):
    mentor_headers, slot_id = _mentor_with_slot(client, db_session, future_day())
    res = client.post(
        "/api/v1/sessions", headers=mentor_headers, json={"slot_id": slot_id, "title": "Self"}
    )
    assert res.status_code == 400


def test_cancel_session_api(client, db_session):
    mentor_headers, slot_id = _mentor_with_slot(client, db_session, future_day())
    mentee = signup(client, "canceller@mentor4all.io")
    outsider = signup(client, "outsider@mentor4all.io")
    session_id = client.post(
        "/api/v1/sessions", headers=mentee, json={"slot_id": slot_id, "title": "Career chat"}
    ).json()["id"]

    assert client.post(f"/api/v1/sessions/{session_id}/cancel", headers=outsider).status_code == 403

    res = client.post(f"/api/v1/sessions/{session_id}/cancel", headers=mentor_headers)
    assert res.status_code == 200
    assert res.json()["status"] == "cancelled"

    again = client.post(f"/api/v1/sessions/{session_id}/cancel", headers=mentee)
    assert again.status_code == 409


def test_sub_minute_slot_cannot_be_booked(db_session, mentor, mentee):
    slot = add_slot(db_session, mentor.id, DAY, time(9, 0, 10), time(9, 0, 50))

    with pytest.raises(InvalidTimeRangeError):
        booking_service.book(
            db_session, mentee.id, BookingDraft(slot.id, "Quick one"), today=BEFORE_DAY
        )

    assert db_session.query(MentorshipSession).count() == 0
    db_session.refresh(slot)
    assert slot.is_booked is False


def test_duration_rejects_seconds():
    with pytest.raises(InvalidTimeRangeError):
        compute_duration_minutes(time(9, 0, 59), time(10))


def test_cancel_storage_error_is_reported_generically(client, db_session, monkeypatch):
    mentor_headers, slot_id = _mentor_with_slot(client, db_session, future_day())
    mentee = signup(client, "unlucky@mentor4all.io")
    session_id = client.post(
        "/api/v1/sessions", headers=mentee, json={"slot_id": slot_id, "title": "Career chat"}
    ).json()["id"]

    def broken_cancel(db, session_id, actor_id):
        raise OperationalError("UPDATE sessions", {}, Exception("database is locked"))

    monkeypatch.setattr(booking_service, "cancel", broken_cancel)
    res = client.post(f"/api/v1/sessions/{session_id}/cancel", headers=mentee)
    assert res.status_code == 500
    assert res.json() == {"detail": "Cancellation failed"}
