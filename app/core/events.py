"""
Change notification for the booking collection.

Every successful create/delete publishes a ``bookings_changed`` event to the
in-process subscribers and, when Redis is configured, to the other worker
processes. Subscribers only learn *that* something changed; they refetch.
"""

import threading
import uuid

from app.core import redis as redis_bus
from app.core.logging_config import get_logger

logger = get_logger()

BOOKINGS_CHANGED = "bookings_changed"


class Subscription:
    def __init__(self, notifier, callback):
        self._notifier = notifier
        self._callback = callback
        self.active = True

    def unsubscribe(self):
        if self.active:
            self._notifier._remove(self._callback)
            self.active = False


class ChangeNotifier:
    def __init__(self):
        self._lock = threading.Lock()
        self._callbacks = []
        self.origin = uuid.uuid4().hex
        self._relay = None

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def subscribe(self, callback) -> Subscription:
        with self._lock:
            self._callbacks.append(callback)
        return Subscription(self, callback)

    def _remove(self, callback):
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

    def notify_local(self, event: dict):
        with self._lock:
            callbacks = list(self._callbacks)

        for callback in callbacks:
            try:
                callback(event)
            except Exception as e:
                # One broken subscriber must not starve the others
                logger.exception(f"Change subscriber failed: {e}")

    def publish(self, action: str, booking_id=None):
        event = {
            "event": BOOKINGS_CHANGED,
            "action": action,
            "booking_id": booking_id,
            "origin": self.origin,
        }
        self.notify_local(event)
        redis_bus.publish_change(event)
        logger.bind(log_type="changes").info(f"Published {action} | booking={booking_id}")

    # ---------- CROSS-PROCESS RELAY ----------
    def _on_remote(self, event: dict):
        if event.get("origin") == self.origin:
            return
        logger.bind(log_type="changes").info(
            f"Received {event.get('action')} from worker {event.get('origin')}"
        )
        self.notify_local(event)

    def start_relay(self):
        if self._relay is None:
            self._relay = redis_bus.start_change_listener(self._on_remote)
            if self._relay is not None:
                logger.info("Listening for booking changes from other workers")

    def stop_relay(self):
        if self._relay is not None:
            self._relay.stop()
            self._relay = None


notifier = ChangeNotifier()


def get_notifier():
    return notifier
