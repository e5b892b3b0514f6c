import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["ASYNC_QUEUE_ENABLED"] = "false"

import uuid  # noqa: E402
from datetime import date, time, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from mentor4all.core.db import Base, get_db  # noqa: E402
from mentor4all.main import app  # noqa: E402
from mentor4all.models.availability import MentorAvailability  # noqa: E402
from mentor4all.models.mentor import Mentor  # noqa: E402
from mentor4all.models.profile import Profile  # noqa: E402
from mentor4all.models.user import User  # noqa: E402

# In-memory SQLite needs a StaticPool so the app's sessions and the
# fixtures' sessions see the same database.
engine = create_engine(
    "sqlite+pysqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def setup_test_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def signup(client, email: str, user_type: str = "mentee", first_name: str = "Test", last_name: str = "User"):
    res = client.post(
        "/api/v1/auth/signup",
        json={
            "email": email,
            "password": PASSWORD,
            "first_name": first_name,
            "last_name": last_name,
            "user_type": user_type,
        },
    )
    assert res.status_code == 201, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


def user_id_for(client, headers) -> uuid.UUID:
    res = client.get("/api/v1/auth/me", headers=headers)
    assert res.status_code == 200, res.text
    return uuid.UUID(res.json()["id"])


@pytest.fixture
def mentor_headers(client):
    return signup(client, "mentor@mentor4all.io", "mentor", "Ada", "Lovelace")


@pytest.fixture
def mentee_headers(client):
    return signup(client, "mentee@mentor4all.io", "mentee", "Grace", "Hopper")


def make_person(db, email: str, user_type: str, first_name: str = "Test", last_name: str = "User"):
    user = User(id=uuid.uuid4(), email=email, hashed_password="x", is_active=True)
    db.add(user)
    db.flush()
    profile = Profile(id=user.id, first_name=first_name, last_name=last_name, user_type=user_type)
    db.add(profile)
    db.flush()
    return user, profile


@pytest.fixture
def mentor(db_session):
    user, _ = make_person(db_session, "rate1200@mentor4all.io", "mentor", "Linus", "Mentor")
    mentor = Mentor(id=user.id, hourly_rate=Decimal("1200"), expertise=[], review_count=0)
    db_session.add(mentor)
    db_session.commit()
    return mentor


@pytest.fixture
def mentee(db_session):
    user, profile = make_person(db_session, "first@mentor4all.io", "mentee", "Mia", "Mentee")
    db_session.commit()
    return profile


def future_day(days: int = 30) -> date:
    return date.today() + timedelta(days=days)


def add_slot(db, mentor_id, day: date, start: time, end: time, is_booked: bool = False):
    slot = MentorAvailability(
        id=uuid.uuid4(),
        mentor_id=mentor_id,
        day=day,
        start_time=start,
        end_time=end,
        is_booked=is_booked,
    )
    db.add(slot)
    db.commit()
    return slot
