"""
Two-step booking flow: pick a session, then enter contact details.

The draft works on the sessions resolved for this request (already carrying
their remaining capacity). Capacity is checked when a session is selected;
the store re-checks it atomically when the record is written.
"""

from enum import Enum

from app.core.errors import DraftIncomplete, SessionUnavailable, UnknownSession
from app.core.logging_config import get_logger
from app.models.enums import BookingStatus
from app.schemas.booking import BookingDraftRecord

logger = get_logger()


class DraftStep(str, Enum):
    SELECTING_SESSION = "selecting_session"
    ENTERING_CONTACT_INFO = "entering_contact_info"


class BookingDraft:
    def __init__(self, sessions):
        self.sessions = {s.id: s for s in sessions}
        self.step = DraftStep.SELECTING_SESSION
        self.selected = None
        self.user_name = ""
        self.user_phone = ""

    # ---------- STEP 1 ----------
    def selectable(self):
        return [s for s in self.sessions.values() if (s.remaining or 0) > 0]

    def select(self, package_id: str):
        if self.step != DraftStep.SELECTING_SESSION:
            raise DraftIncomplete("Go back to the session list to change the session")

        session = self.sessions.get(package_id)
        if session is None:
            raise UnknownSession(f"Unknown session: {package_id}")
        if not session.remaining:
            raise SessionUnavailable(f"{session.name} ({session.date_display}) is full")

        self.selected = session
        return session

    def proceed(self):
        if self.selected is None:
            raise DraftIncomplete("Select a session first")
        self.step = DraftStep.ENTERING_CONTACT_INFO

    # ---------- STEP 2 ----------
    def back(self):
        self.step = DraftStep.SELECTING_SESSION

    def set_contact(self, user_name: str, user_phone: str):
        self.user_name = (user_name or "").strip()
        self.user_phone = (user_phone or "").strip()

    @property
    def can_confirm(self) -> bool:
        return (
            self.step == DraftStep.ENTERING_CONTACT_INFO
            and self.selected is not None
            and bool(self.user_name)
            and bool(self.user_phone)
        )

    def build_record(self, court) -> BookingDraftRecord:
        if not self.can_confirm:
            raise DraftIncomplete("Name and phone are required")

        return BookingDraftRecord(
            court_id=court.id,
            court_name=court.name,
            package_id=self.selected.id,
            session_date=self.selected.session_date,
            user_name=self.user_name,
            user_phone=self.user_phone,
            date=self.selected.date_display,
            time=self.selected.time_range,
            total_price=self.selected.price_per_person,
            status=BookingStatus.CONFIRMED,
        )

    def confirm(self, store, court):
        """Write the booking. On failure the draft stays on the contact step."""
        record = self.build_record(court)
        try:
            return store.create_booking(record, self.selected.max_players)
        except Exception as e:
            logger.bind(log_type="booking").warning(
                f"Booking confirm failed | Package={record.package_id} | {e}"
            )
            raise
