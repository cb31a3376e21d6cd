from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.admin_gate import check_admin_code, require_admin_code
from app.core.dependencies import get_db, get_snapshot, get_store
from app.core.errors import BookingNotFound, StoreUnavailable
from app.core.logging_config import get_logger
from app.models.booking import Booking
from app.models.enums import View
from app.schemas.booking import AdminUnlock, BookingOut, PackageRevenue, RevenueOut
from app.services.booking_store import BookingStore
from app.services.snapshot import BookingSnapshot
from app.api.routes.sessions import ensure_snapshot

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = get_logger()


# =====================================================================
# CODE PROMPT
# =====================================================================
@router.post("/unlock")
def unlock(data: AdminUnlock):
    if not check_admin_code(data.code):
        logger.bind(log_type="admin").warning("Admin unlock refused")
        raise HTTPException(status_code=401, detail="Code incorrect.")

    logger.bind(log_type="admin").info("Admin console unlocked")
    return {"view": View.ADMIN.value}


# =====================================================================
# ALL BOOKINGS
# =====================================================================
@router.get("/bookings", response_model=list[BookingOut])
def admin_bookings(
    _: bool = Depends(require_admin_code),
    snapshot: BookingSnapshot = Depends(get_snapshot),
):
    ensure_snapshot(snapshot)
    return snapshot.bookings


# =====================================================================
# REVENUE
# =====================================================================
def compute_revenue(db: Session) -> RevenueOut:
    try:
        results = (
            db.query(
                Booking.package_id,
                func.count(Booking.id).label("booking_count"),
                func.sum(Booking.total_price).label("revenue"),
            )
            .group_by(Booking.package_id)
            .order_by(func.sum(Booking.total_price).desc())
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.bind(log_type="admin").error(f"Revenue query failed: {e}")
        raise StoreUnavailable(f"Booking store unavailable: {getattr(e, 'orig', None) or e}")

    packages = [
        PackageRevenue(
            package_id=r.package_id,
            booking_count=r.booking_count,
            revenue=float(r.revenue or 0),
        )
        for r in results
    ]

    return RevenueOut(
        total_revenue=sum(p.revenue for p in packages),
        booking_count=sum(p.booking_count for p in packages),
        packages=packages,
    )


@router.get("/revenue", response_model=RevenueOut)
def revenue(_: bool = Depends(require_admin_code), db: Session = Depends(get_db)):
    try:
        data = compute_revenue(db)
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)

    logger.bind(log_type="admin").info(f"Admin checked total revenue → {data.total_revenue}")
    return data


# =====================================================================
# DELETE BOOKING
# =====================================================================
@router.delete("/bookings/{booking_id}")
def admin_delete_booking(
    booking_id: int,
    _: bool = Depends(require_admin_code),
    store: BookingStore = Depends(get_store),
):
    try:
        store.delete_booking(booking_id)
    except BookingNotFound:
        return {"message": "Booking already deleted", "booking_id": booking_id}
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)

    logger.bind(log_type="admin").info(f"Admin deleted booking {booking_id}")
    return {"message": "Booking deleted", "booking_id": booking_id}
