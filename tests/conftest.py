"""
Shared fixtures.

Environment is set BEFORE any app import: a throwaway SQLite file database,
logs in a temp dir, no Redis.
"""

import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="padelist-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_tmp_dir}/test.db"
os.environ["LOG_DIR"] = os.path.join(_tmp_dir, "logs")
os.environ["REDIS_URL"] = ""
os.environ["ADMIN_ACCESS_CODE"] = "padelist!!"
os.environ["BOOKING_LOCALE"] = "fr"
os.environ["VENUE_TIMEZONE"] = "Asia/Beirut"

from datetime import date, datetime

import pytest
import pytz
from fastapi.testclient import TestClient

from app.core.clock import FixedClock, get_clock
from app.core.dependencies import booking_snapshot
from app.core.events import ChangeNotifier
from app.db.session import Base, SessionLocal, engine
from app.main import app
from app.models.booking import Booking
from app.schemas.booking import BookingDraftRecord
from app.services.booking_store import BookingStore

BEIRUT = pytz.timezone("Asia/Beirut")

ADMIN_CODE = "padelist!!"


def beirut(year, month, day, hour=0, minute=0):
    return BEIRUT.localize(datetime(year, month, day, hour, minute))


# Wednesday 21 October 2026, 09:00 at the venue
WEDNESDAY_MORNING = beirut(2026, 10, 21, 9, 0)


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_bookings():
    db = SessionLocal()
    try:
        db.query(Booking).delete()
        db.commit()
    finally:
        db.close()
    booking_snapshot.refresh()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def notifier():
    return ChangeNotifier()


@pytest.fixture
def store(db, notifier):
    return BookingStore(db, notifier)


@pytest.fixture
def clock():
    return FixedClock(WEDNESDAY_MORNING)


@pytest.fixture
def client(clock):
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_booking(package_id="thursday-morning", session_date=None, label="jeudi 22 octobre", user_name="Karim"):
    return BookingDraftRecord(
        court_id="achrafieh-1",
        court_name="The Padelist Achrafieh",
        package_id=package_id,
        session_date=session_date or date(2026, 10, 22),
        user_name=user_name,
        user_phone="+961 70 000 000",
        date=label,
        time="10:00 - 11:00",
        total_price=7.5,
    )
