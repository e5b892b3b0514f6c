import uuid
from datetime import datetime, time, timedelta
from decimal import Decimal

from conftest import add_slot, future_day, signup
from mentor4all.models.session import MentorshipSession
from mentor4all.services.dashboard_service import SessionLists, dashboard_service, partition

NOW = datetime(2025, 4, 15, 12, 0)


def _session(mentee_id, date_time, duration=60, price="100.00"):
    return MentorshipSession(
        id=uuid.uuid4(),
        mentor_id=uuid.uuid4(),
        mentee_id=mentee_id,
        title="Chat",
        date_time=date_time,
        duration=duration,
        price=Decimal(price),
        status="scheduled",
        payment_status="pending",
    )


def test_session_starting_now_counts_as_upcoming():
    mentee = uuid.uuid4()
    at_now = _session(mentee, NOW)
    earlier = _session(mentee, NOW - timedelta(minutes=1))

    upcoming, past = partition([earlier, at_now], NOW)
    assert upcoming == [at_now]
    assert past == [earlier]


def test_partition_orders_lists():
    mentee = uuid.uuid4()
    sessions = [
        _session(mentee, NOW + timedelta(days=2)),
        _session(mentee, NOW - timedelta(days=2)),
        _session(mentee, NOW + timedelta(days=1)),
        _session(mentee, NOW - timedelta(days=1)),
    ]
    upcoming, past = partition(sessions, NOW)
    assert [s.date_time for s in upcoming] == [NOW + timedelta(days=1), NOW + timedelta(days=2)]
    assert [s.date_time for s in past] == [NOW - timedelta(days=1), NOW - timedelta(days=2)]


def test_mentee_and_mentor_aggregates_over_past_sessions():
    alice, bob = uuid.uuid4(), uuid.uuid4()
    sessions = [
        _session(alice, NOW - timedelta(days=3), duration=60, price="100.00"),
        _session(alice, NOW - timedelta(days=2), duration=30, price="50.50"),
        _session(bob, NOW - timedelta(days=1), duration=90, price="150.00"),
        _session(bob, NOW + timedelta(days=1), duration=60, price="999.00"),
    ]
    upcoming, past = partition(sessions, NOW)

    lists = SessionLists(upcoming=upcoming, past=past)
    mentee = dashboard_service.mentee_stats(lists)
    assert mentee == {
        "upcoming_count": 1,
        "past_count": 3,
        "hours_spent": 3.0,
        "total_spent": 300.5,
    }

    mentor = dashboard_service.mentor_stats(lists)
    assert mentor == {
        "upcoming_count": 1,
        "session_hours": 3.0,
        "total_earnings": 300.5,
        "unique_mentees": 2,
    }


def test_empty_dashboard_is_zeroed(client, mentee_headers):
    res = client.get("/api/v1/dashboard/mentee", headers=mentee_headers)
    assert res.status_code == 200
    assert res.json() == {
        "stats": {"upcoming_count": 0, "past_count": 0, "hours_spent": 0.0, "total_spent": 0.0},
        "upcoming": [],
        "past": [],
    }


def test_dashboards_reflect_bookings(client, db_session, mentor_headers, mentee_headers):
    client.patch("/api/v1/mentors/me", headers=mentor_headers, json={"hourly_rate": 90})
    saved = client.put(
        "/api/v1/availability/me",
        headers=mentor_headers,
        json={
            "slots": [
                {"day": future_day().isoformat(), "start_time": "09:00", "end_time": "10:00"}
            ]
        },
    ).json()
    client.post(
        "/api/v1/sessions",
        headers=mentee_headers,
        json={"slot_id": saved["slots"][0]["id"], "title": "Portfolio review"},
    )

    # A finished session seeded directly in the past
    mentor_id = uuid.UUID(client.get("/api/v1/auth/me", headers=mentor_headers).json()["id"])
    mentee_id = uuid.UUID(client.get("/api/v1/auth/me", headers=mentee_headers).json()["id"])
    past_slot = add_slot(db_session, mentor_id, future_day(-7), time(9), time(10, 30), is_booked=True)
    db_session.add(
        MentorshipSession(
            id=uuid.uuid4(),
            mentor_id=mentor_id,
            mentee_id=mentee_id,
            availability_id=past_slot.id,
            title="Kickoff",
            date_time=datetime.combine(future_day(-7), time(9)),
            duration=90,
            price=Decimal("135.00"),
            status="completed",
            payment_status="paid",
        )
    )
    db_session.commit()

    mentee = client.get("/api/v1/dashboard/mentee", headers=mentee_headers).json()
    assert mentee["stats"] == {
        "upcoming_count": 1,
        "past_count": 1,
        "hours_spent": 1.5,
        "total_spent": 135.0,
    }
    assert mentee["upcoming"][0]["title"] == "Portfolio review"

    mentor = client.get("/api/v1/dashboard/mentor", headers=mentor_headers).json()
    assert mentor["stats"] == {
        "upcoming_count": 1,
        "session_hours": 1.5,
        "total_earnings": 135.0,
        "unique_mentees": 1,
    }

    assert client.get("/api/v1/dashboard/mentor", headers=mentee_headers).status_code == 403


def test_sessions_me_for_new_user_is_empty(client):
    other = signup(client, "nobody@mentor4all.io")
    res = client.get("/api/v1/sessions/me", headers=other)
    assert res.status_code == 200
    assert res.json() == {"upcoming": [], "past": []}
