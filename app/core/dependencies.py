from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.core.events import ChangeNotifier, get_notifier
from app.services.booking_store import BookingStore
from app.services.snapshot import BookingSnapshot


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(
    db: Session = Depends(get_db),
    notifier: ChangeNotifier = Depends(get_notifier),
) -> BookingStore:
    return BookingStore(db, notifier)


# ---------- SHARED SNAPSHOT ----------
def _fetch_all_bookings():
    db = SessionLocal()
    try:
        return BookingStore(db, get_notifier()).list_bookings()
    finally:
        db.close()


booking_snapshot = BookingSnapshot(_fetch_all_bookings)


def get_snapshot() -> BookingSnapshot:
    return booking_snapshot
