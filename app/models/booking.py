from sqlalchemy import (
    CheckConstraint, Column, Integer, String, Date, Float, DateTime, UniqueConstraint, func
)
from app.db.session import Base
from app.models.enums import BookingStatus


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # One row per seat of a concrete session occurrence
        UniqueConstraint(
            "package_id", "session_date", "seat_number",
            name="uq_bookings_session_seat",
        ),
        CheckConstraint("status IN ('confirmed', 'pending')", name="ck_bookings_status"),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Denormalized venue reference (single court)
    court_id = Column(String, nullable=False)
    court_name = Column(String, nullable=False)

    # Canonical session key
    package_id = Column(String, nullable=False, index=True)
    session_date = Column(Date, nullable=False, index=True)
    seat_number = Column(Integer, nullable=False)

    user_name = Column(String, nullable=False)
    user_phone = Column(String, nullable=False)

    # Display values captured at booking time
    date = Column(String, nullable=False)
    time = Column(String, nullable=False)
    total_price = Column(Float, nullable=False)

    status = Column(String, nullable=False, default=BookingStatus.CONFIRMED.value)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    @property
    def session_key(self):
        return (self.package_id, self.session_date)
