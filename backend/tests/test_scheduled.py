import logging
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest
import redis

from conftest import TestingSessionLocal, make_person
from mentor4all import tasks
from mentor4all.core.config import settings
from mentor4all.core.queue import enqueue_session_reminder_scan
from mentor4all.models.group_session import GroupSession
from mentor4all.models.mentor import Mentor
from mentor4all.models.session import MentorshipSession
from mentor4all.services.reminder_service import reminder_service

NOW = datetime(2025, 4, 15, 8, 0)


def _seed_sessions(db):
    mentor_user, _ = make_person(db, "remind.mentor@mentor4all.io", "mentor", "Ada", "Lovelace")
    mentee_user, _ = make_person(db, "remind.mentee@mentor4all.io", "mentee", "Grace", "Hopper")
    db.add(Mentor(id=mentor_user.id, hourly_rate=Decimal("60"), expertise=[], review_count=0))
    db.flush()

    def add(date_time, status="scheduled"):
        db.add(
            MentorshipSession(
                id=uuid.uuid4(),
                mentor_id=mentor_user.id,
                mentee_id=mentee_user.id,
                title="Career chat",
                date_time=date_time,
                duration=60,
                price=Decimal("60.00"),
                status=status,
                payment_status="pending",
            )
        )

    add(NOW)  # starts exactly now
    add(NOW + timedelta(hours=23, minutes=59))
    add(NOW + timedelta(hours=24))  # just outside the window
    add(NOW - timedelta(minutes=1))
    add(NOW + timedelta(hours=2), status="cancelled")
    db.commit()


def test_scan_counts_scheduled_sessions_in_window(db_session, caplog):
    _seed_sessions(db_session)

    with caplog.at_level(logging.INFO, logger="mentor4all.services.reminder_service"):
        count = reminder_service.scan_upcoming_sessions(db_session, now=NOW, window_hours=24)

    assert count == 2
    reminders = [r for r in caplog.records if "Would send reminder" in r.getMessage()]
    assert len(reminders) == 2
    assert "Grace Hopper" in reminders[0].getMessage()
    assert "Ada Lovelace" in reminders[0].getMessage()


def test_reminder_endpoint_requires_cron_secret(client):
    res = client.post("/api/v1/scheduled/session-reminders")
    assert res.status_code == 403
    res = client.post("/api/v1/scheduled/session-reminders", headers={"X-Cron-Secret": "nope"})
    assert res.status_code == 403


def _seed_soon_session(db):
    mentor_user, _ = make_person(db, "soon.mentor@mentor4all.io", "mentor")
    mentee_user, _ = make_person(db, "soon.mentee@mentor4all.io", "mentee")
    db.add(Mentor(id=mentor_user.id, hourly_rate=Decimal("60"), expertise=[], review_count=0))
    db.flush()
    db.add(
        MentorshipSession(
            id=uuid.uuid4(),
            mentor_id=mentor_user.id,
            mentee_id=mentee_user.id,
            title="Soon",
            date_time=datetime.utcnow() + timedelta(hours=1),
            duration=30,
            price=Decimal("30.00"),
            status="scheduled",
            payment_status="pending",
        )
    )
    db.commit()


def test_reminder_endpoint_reports_count(client, db_session):
    _seed_soon_session(db_session)

    res = client.post(
        "/api/v1/scheduled/session-reminders", headers={"X-Cron-Secret": settings.CRON_SECRET}
    )
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Processed 1 upcoming sessions", "count": 1}


def test_group_sessions_listing(client, db_session):
    mentor_user, _ = make_person(db_session, "group.mentor@mentor4all.io", "mentor")
    db_session.add(Mentor(id=mentor_user.id, hourly_rate=Decimal("60"), expertise=[], review_count=0))
    db_session.flush()
    upcoming = datetime.combine(date.today() + timedelta(days=3), time(18))
    for title, category, when in [
        ("Later", "Leadership", upcoming + timedelta(days=1)),
        ("Sooner", "Career Development", upcoming),
        ("Old", "Leadership", upcoming - timedelta(days=30)),
    ]:
        db_session.add(
            GroupSession(
                id=uuid.uuid4(),
                mentor_id=mentor_user.id,
                title=title,
                category=category,
                date_time=when,
                duration=60,
                capacity=10,
                enrolled=2,
                price=Decimal("15.00"),
                status="scheduled",
            )
        )
    db_session.commit()

    titles = [g["title"] for g in client.get("/api/v1/group-sessions").json()]
    assert titles == ["Sooner", "Later"]

    leadership = client.get("/api/v1/group-sessions", params={"category": "Leadership"}).json()
    assert [g["title"] for g in leadership] == ["Later"]
    assert leadership[0]["enrolled"] == 2


def test_health_endpoints(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/health/db").json() == {"status": "ok", "db": "ok"}
    assert client.get("/health/worker").json() == {"status": "skipped", "async_enabled": False}


def test_health_redis_ok(client):
    try:
        redis.from_url(settings.REDIS_URL).ping()
    except redis.exceptions.RedisError:
        pytest.skip("Redis not available")

    response = client.get("/health/redis")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "redis": "ok"}


def test_openapi_contract_basics(client):
    schema = client.app.openapi()
    assert schema["info"]["title"] == "Mentor4All API"

    paths = schema.get("paths", {})
    required = [
        "/health",
        "/api/v1/auth/me",
        "/api/v1/mentors/ensure",
        "/api/v1/availability/me",
        "/api/v1/sessions",
        "/api/v1/dashboard/mentor",
        "/api/v1/scheduled/session-reminders",
    ]
    missing = [path for path in required if path not in paths]
    assert not missing, f"Missing OpenAPI paths: {missing}"


def test_reminder_job_uses_its_own_session(db_session, monkeypatch):
    _seed_soon_session(db_session)
    monkeypatch.setattr(tasks, "SessionLocal", TestingSessionLocal)

    assert tasks.session_reminder_job() == 1


def test_enqueue_session_reminder_scan_returns_job_id():
    try:
        redis.from_url(settings.REDIS_URL).ping()
    except redis.exceptions.RedisError:
        pytest.skip("Redis not available")

    assert enqueue_session_reminder_scan()
