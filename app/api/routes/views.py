from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.routes.admin import compute_revenue
from app.api.routes.sessions import current_sessions, ensure_snapshot
from app.core.admin_gate import require_admin_code
from app.core.clock import get_clock
from app.core.dependencies import get_db, get_snapshot
from app.core.errors import StoreUnavailable
from app.models.enums import View
from app.services.catalog import COURT, NOTICES
from app.services.snapshot import BookingSnapshot

router = APIRouter(prefix="/views", tags=["Views"])


def admin_code_for(view: View, code: str = None):
    # Only the admin console sits behind the code prompt
    if view == View.ADMIN:
        require_admin_code(code)


def snapshot_state(snapshot: BookingSnapshot):
    return {"loading": snapshot.loading, "error": snapshot.error}


@router.get("/{view}")
def render_view(
    view: View,
    _: None = Depends(admin_code_for),
    clock=Depends(get_clock),
    snapshot: BookingSnapshot = Depends(get_snapshot),
    db: Session = Depends(get_db),
):
    if view == View.HOME:
        return {
            "view": view.value,
            **snapshot_state(snapshot),
            "venue": COURT.model_dump(mode="json"),
            "sessions": [s.model_dump(mode="json") for s in current_sessions(clock, snapshot)],
            "notices": NOTICES,
        }

    if view == View.MY_BOOKINGS:
        ensure_snapshot(snapshot)
        return {
            "view": view.value,
            **snapshot_state(snapshot),
            "bookings": [b.model_dump(mode="json") for b in snapshot.bookings],
        }

    if view == View.ADMIN:
        ensure_snapshot(snapshot)
        try:
            revenue = compute_revenue(db)
        except StoreUnavailable as e:
            raise HTTPException(status_code=503, detail=e.message)
        return {
            "view": view.value,
            **snapshot_state(snapshot),
            "bookings": [b.model_dump(mode="json") for b in snapshot.bookings],
            "revenue": revenue.model_dump(),
        }

    raise HTTPException(status_code=404, detail=f"Unhandled view: {view}")
