from datetime import date

import pytest

from app.core.errors import DraftIncomplete, SessionUnavailable, StoreUnavailable, UnknownSession
from app.services.booking_flow import BookingDraft, DraftStep
from app.services.catalog import COURT, PACKAGES
from app.services.scheduling import resolve_sessions, with_capacity

from conftest import WEDNESDAY_MORNING, make_booking as booking


class RecordingStore:
    def __init__(self, error=None):
        self.created = []
        self.error = error

    def create_booking(self, record, max_players):
        if self.error:
            raise self.error
        self.created.append((record, max_players))
        return record


@pytest.fixture
def draft():
    sessions = with_capacity(
        resolve_sessions(WEDNESDAY_MORNING, PACKAGES),
        [booking() for _ in range(4)],  # Thursday is full
    )
    return BookingDraft(sessions)


def test_starts_selecting_with_only_open_sessions(draft):
    assert draft.step == DraftStep.SELECTING_SESSION
    assert [s.id for s in draft.selectable()] == ["saturday-morning-8p"]
    assert not draft.can_confirm


def test_full_session_cannot_be_selected(draft):
    with pytest.raises(SessionUnavailable):
        draft.select("thursday-morning")
    assert draft.selected is None


def test_unknown_session(draft):
    with pytest.raises(UnknownSession):
        draft.select("sunday-brunch")


def test_cannot_proceed_without_selection(draft):
    with pytest.raises(DraftIncomplete):
        draft.proceed()
    assert draft.step == DraftStep.SELECTING_SESSION


def test_confirm_needs_both_contact_fields(draft):
    draft.select("saturday-morning-8p")
    draft.proceed()

    draft.set_contact("Karim", "")
    assert not draft.can_confirm

    draft.set_contact("   ", "+961 70 000 000")
    assert not draft.can_confirm

    with pytest.raises(DraftIncomplete):
        draft.build_record(COURT)

    draft.set_contact("Karim", "+961 70 000 000")
    assert draft.can_confirm


def test_back_keeps_selected_session(draft):
    draft.select("saturday-morning-8p")
    draft.proceed()
    draft.set_contact("Karim", "+961 70 000 000")

    draft.back()

    assert draft.step == DraftStep.SELECTING_SESSION
    assert draft.selected.id == "saturday-morning-8p"
    assert not draft.can_confirm


def test_record_copies_selected_session(draft):
    session = draft.select("saturday-morning-8p")
    draft.proceed()
    draft.set_contact(" Karim ", "+961 70 000 000")

    record = draft.build_record(COURT)

    assert record.date == session.date_display == "samedi 24 octobre"
    assert record.time == session.time_range
    assert record.total_price == session.price_per_person
    assert record.session_date == date(2026, 10, 24)
    assert record.package_id == "saturday-morning-8p"
    assert record.court_id == COURT.id
    assert record.user_name == "Karim"
    assert record.status == "confirmed"


def test_confirm_hands_record_to_store(draft):
    draft.select("saturday-morning-8p")
    draft.proceed()
    draft.set_contact("Karim", "+961 70 000 000")
    store = RecordingStore()

    draft.confirm(store, COURT)

    record, max_players = store.created[0]
    assert record.user_phone == "+961 70 000 000"
    assert max_players == 8


def test_failed_confirm_keeps_draft_open(draft):
    draft.select("saturday-morning-8p")
    draft.proceed()
    draft.set_contact("Karim", "+961 70 000 000")

    with pytest.raises(StoreUnavailable):
        draft.confirm(RecordingStore(error=StoreUnavailable("offline")), COURT)

    assert draft.step == DraftStep.ENTERING_CONTACT_INFO
    assert draft.can_confirm
