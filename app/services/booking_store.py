from pydantic import ValidationError
from sqlalchemy.orm import Session
from sqlalchemy.exc import DataError, IntegrityError, InterfaceError, OperationalError, SQLAlchemyError

from app.core.errors import BookingNotFound, SessionFull, StoreUnavailable, ValidationFailure
from app.core.events import ChangeNotifier
from app.core.logging_config import get_logger
from app.models.booking import Booking
from app.schemas.booking import BookingDraftRecord, BookingOut

logger = get_logger()


class BookingStore:
    """
    Gateway over the bookings table.

    Records are created and deleted, never updated. Every successful write is
    followed by a change notification.
    """

    def __init__(self, db: Session, notifier: ChangeNotifier):
        self.db = db
        self.notifier = notifier

    # -----------------------------------------------------------------
    # READ
    # -----------------------------------------------------------------
    def list_bookings(self):
        try:
            rows = (
                self.db.query(Booking)
                .order_by(Booking.created_at.desc(), Booking.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Booking list failed: {e}")
            raise StoreUnavailable(f"Booking store unavailable: {getattr(e, 'orig', None) or e}")

        try:
            return [BookingOut.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error(f"Booking list returned an unreadable row: {e}")
            raise StoreUnavailable(f"Booking store returned an unreadable row: {e.error_count()} invalid field(s)")

    # -----------------------------------------------------------------
    # CREATE (serialized check-and-reserve)
    # -----------------------------------------------------------------
    def _taken_seats(self, record: BookingDraftRecord):
        rows = (
            self.db.query(Booking.seat_number)
            .filter(
                Booking.package_id == record.package_id,
                Booking.session_date == record.session_date,
            )
            .all()
        )
        return {r.seat_number for r in rows}

    def create_booking(self, record: BookingDraftRecord, max_players: int) -> BookingOut:
        if not record.user_name.strip() or not record.user_phone.strip():
            raise ValidationFailure("Name and phone are required")

        # A lost race on a seat means someone else committed first; recount.
        for _ in range(max_players):
            try:
                taken = self._taken_seats(record)
            except (OperationalError, InterfaceError) as e:
                self.db.rollback()
                logger.error(f"Seat count failed: {e}")
                raise StoreUnavailable(f"Booking store unavailable: {e.orig}")

            free = [seat for seat in range(1, max_players + 1) if seat not in taken]
            if not free:
                break

            booking = Booking(
                **record.model_dump(),
                seat_number=free[0],
            )
            booking.status = record.status.value

            try:
                self.db.add(booking)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                if self._is_seat_conflict(e):
                    logger.warning(
                        f"Seat {free[0]} of {record.package_id} {record.session_date} taken concurrently, retrying"
                    )
                    continue
                logger.error(f"Booking rejected by store: {e}")
                raise ValidationFailure(f"Booking rejected: {e.orig}")
            except DataError as e:
                self.db.rollback()
                logger.error(f"Booking rejected by store: {e}")
                raise ValidationFailure(f"Booking rejected: {e.orig}")
            except (OperationalError, InterfaceError) as e:
                self.db.rollback()
                logger.error(f"Booking insert failed: {e}")
                raise StoreUnavailable(f"Booking store unavailable: {e.orig}")

            self.db.refresh(booking)
            stored = BookingOut.model_validate(booking)

            logger.bind(log_type="booking").info(
                f"Booking Created | Id={stored.id} | Package={stored.package_id} "
                f"| Date={stored.session_date} | Seat={stored.seat_number} | User={stored.user_name}"
            )
            self.notifier.publish("created", stored.id)
            return stored

        logger.bind(log_type="booking").info(
            f"Booking refused, session full | Package={record.package_id} | Date={record.session_date}"
        )
        raise SessionFull(f"Session {record.date} is full")

    @staticmethod
    def _is_seat_conflict(error: IntegrityError) -> bool:
        message = str(error.orig).lower()
        return "uq_bookings_session_seat" in message or (
            "unique" in message and "seat_number" in message
        )

    # -----------------------------------------------------------------
    # DELETE
    # -----------------------------------------------------------------
    def delete_booking(self, booking_id: int):
        try:
            booking = self.db.query(Booking).filter(Booking.id == booking_id).first()
            if not booking:
                raise BookingNotFound(f"Booking {booking_id} not found")

            self.db.delete(booking)
            self.db.commit()
        except (OperationalError, InterfaceError) as e:
            self.db.rollback()
            logger.error(f"Booking delete failed: {e}")
            raise StoreUnavailable(f"Booking store unavailable: {e.orig}")

        logger.bind(log_type="booking").info(f"Booking Deleted | Id={booking_id}")
        self.notifier.publish("deleted", booking_id)

    # -----------------------------------------------------------------
    # CHANGE SUBSCRIPTION
    # -----------------------------------------------------------------
    def subscribe_to_changes(self, on_change):
        return self.notifier.subscribe(on_change)
