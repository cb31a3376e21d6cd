import asyncio

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect

from app.api.routes.sessions import current_sessions, ensure_snapshot
from app.core.clock import get_clock
from app.core.dependencies import get_snapshot, get_store
from app.core.errors import (
    BookingError, BookingNotFound, DraftIncomplete, SessionFull, SessionUnavailable,
    StoreUnavailable, UnknownSession, ValidationFailure,
)
from app.core.events import ChangeNotifier, get_notifier
from app.core.logging_config import get_logger
from app.schemas.booking import BookingCreate, BookingOut
from app.services.booking_flow import BookingDraft
from app.services.booking_store import BookingStore
from app.services.catalog import COURT
from app.services.snapshot import BookingSnapshot

router = APIRouter(prefix="/bookings", tags=["Bookings"])
logger = get_logger()


# ---------------------------------------------------------------------
# ERROR MAPPING
# ---------------------------------------------------------------------
def raise_http(error):
    if isinstance(error, UnknownSession):
        raise HTTPException(status_code=404, detail=error.message)
    if isinstance(error, (SessionUnavailable, SessionFull)):
        raise HTTPException(status_code=409, detail=error.message)
    if isinstance(error, (DraftIncomplete, ValidationFailure)):
        raise HTTPException(status_code=422, detail=error.message)
    if isinstance(error, StoreUnavailable):
        raise HTTPException(status_code=503, detail=error.message)
    raise error


# ---------------------------------------------------------------------
# CREATE BOOKING
# ---------------------------------------------------------------------
@router.post("/", response_model=BookingOut, status_code=201)
def create_booking(
    data: BookingCreate,
    clock=Depends(get_clock),
    snapshot: BookingSnapshot = Depends(get_snapshot),
    store: BookingStore = Depends(get_store),
):
    draft = BookingDraft(current_sessions(clock, snapshot))

    try:
        draft.select(data.package_id)
        draft.proceed()
        draft.set_contact(data.user_name, data.user_phone)
        return draft.confirm(store, COURT)
    except BookingError as e:
        raise_http(e)


# ---------------------------------------------------------------------
# LIST (shared snapshot)
# ---------------------------------------------------------------------
@router.get("/", response_model=list[BookingOut])
def list_bookings(snapshot: BookingSnapshot = Depends(get_snapshot)):
    ensure_snapshot(snapshot)
    return snapshot.bookings


@router.post("/refresh", response_model=list[BookingOut])
def refresh_bookings(snapshot: BookingSnapshot = Depends(get_snapshot)):
    snapshot.refresh()
    ensure_snapshot(snapshot)
    return snapshot.bookings


# ---------------------------------------------------------------------
# CANCEL BOOKING
# ---------------------------------------------------------------------
@router.delete("/{booking_id}")
def cancel_booking(booking_id: int, store: BookingStore = Depends(get_store)):
    try:
        store.delete_booking(booking_id)
    except BookingNotFound:
        logger.bind(log_type="booking").info(f"Cancel of missing booking {booking_id}, already gone")
        return {"message": "Booking already cancelled", "booking_id": booking_id}
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Erreur lors de l'annulation: {e.message}")

    return {"message": "Booking cancelled successfully", "booking_id": booking_id}


# ---------------------------------------------------------------------
# CHANGE STREAM
# ---------------------------------------------------------------------
@router.websocket("/changes")
async def booking_changes(websocket: WebSocket, notifier: ChangeNotifier = Depends(get_notifier)):
    loop = asyncio.get_running_loop()
    queue = asyncio.Queue()

    # Writes happen on worker threads; hop back onto the event loop
    subscription = notifier.subscribe(
        lambda event: loop.call_soon_threadsafe(queue.put_nowait, event)
    )
    receiver = None

    try:
        await websocket.accept()
        receiver = asyncio.ensure_future(websocket.receive())

        while True:
            getter = asyncio.ensure_future(queue.get())
            done, _ = await asyncio.wait(
                {receiver, getter}, return_when=asyncio.FIRST_COMPLETED
            )

            if receiver in done:
                if receiver.result()["type"] == "websocket.disconnect":
                    getter.cancel()
                    break
                receiver = asyncio.ensure_future(websocket.receive())

            if getter in done:
                event = getter.result()
                await websocket.send_json({"event": event["event"], "action": event["action"]})
            else:
                getter.cancel()
    except WebSocketDisconnect:
        pass
    finally:
        subscription.unsubscribe()
        if receiver is not None and not receiver.done():
            receiver.cancel()
