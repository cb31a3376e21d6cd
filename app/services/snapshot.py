import threading

from app.core.errors import BookingError
from app.core.logging_config import get_logger

logger = get_logger()


class BookingSnapshot:
    """
    Shared, read-through copy of every booking.

    The list is only ever replaced wholesale by refresh(): at startup, and
    whenever the change notifier reports a write. A failed refresh keeps the
    previous list and records the error until the next successful one.

    Refreshes may overlap (several writes notifying from different worker
    threads). Each one takes a ticket before fetching, and a result is only
    applied when no later ticket has been applied already, so a slow fetch
    that read the store before a write cannot replace the list taken after it.
    """

    def __init__(self, fetch):
        self._fetch = fetch
        self._lock = threading.Lock()
        self._bookings = []
        self._issued = 0
        self._applied = 0
        self._in_flight = 0
        self.error = None
        self._subscription = None

    @property
    def bookings(self):
        with self._lock:
            return list(self._bookings)

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._in_flight > 0

    def refresh(self) -> bool:
        with self._lock:
            self._issued += 1
            ticket = self._issued
            self._in_flight += 1

        try:
            bookings = self._fetch()
            return self._apply(ticket, bookings=list(bookings))
        except BookingError as e:
            logger.error(f"Booking snapshot refresh failed: {e.message}")
            return self._apply(ticket, error=e.message)
        except Exception as e:
            logger.exception(f"Booking snapshot refresh crashed: {e}")
            return self._apply(ticket, error=f"Booking snapshot refresh failed: {e}")
        finally:
            with self._lock:
                self._in_flight -= 1

    def _apply(self, ticket, bookings=None, error=None) -> bool:
        with self._lock:
            if ticket < self._applied:
                # A newer refresh already landed
                logger.bind(log_type="changes").debug(f"Dropped stale snapshot refresh #{ticket}")
                return error is None
            self._applied = ticket
            if error is not None:
                self.error = error
                return False
            self._bookings = bookings
            self.error = None

        logger.bind(log_type="changes").info(f"Snapshot refreshed #{ticket} | {len(bookings)} bookings")
        return True

    # ---------- CHANGE SUBSCRIPTION ----------
    def attach(self, notifier):
        if self._subscription is None:
            self._subscription = notifier.subscribe(lambda event: self.refresh())

    def detach(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
