from fastapi import APIRouter, Depends, HTTPException

from app.core.clock import get_clock
from app.core.dependencies import get_snapshot
from app.schemas.session import Court, ResolvedSession
from app.services.catalog import BOOKING_LOCALE, COURT, PACKAGES
from app.services.scheduling import resolve_sessions, with_capacity
from app.services.snapshot import BookingSnapshot

router = APIRouter(tags=["Sessions"])


def ensure_snapshot(snapshot: BookingSnapshot):
    if snapshot.error:
        raise HTTPException(
            status_code=503,
            detail=f"{snapshot.error} (retry with POST /bookings/refresh)",
        )


def current_sessions(clock, snapshot: BookingSnapshot):
    """This week's occurrences with remaining capacity, "now" read once."""
    ensure_snapshot(snapshot)
    now = clock.now()
    return with_capacity(resolve_sessions(now, PACKAGES, BOOKING_LOCALE), snapshot.bookings)


# =====================================================================
# VENUE
# =====================================================================
@router.get("/venue", response_model=Court)
def venue():
    return COURT


# =====================================================================
# UPCOMING SESSIONS
# =====================================================================
@router.get("/sessions", response_model=list[ResolvedSession])
def sessions(clock=Depends(get_clock), snapshot: BookingSnapshot = Depends(get_snapshot)):
    return current_sessions(clock, snapshot)
