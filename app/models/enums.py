from enum import Enum


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"


class CourtType(str, Enum):
    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"
    PANORAMIC = "Panoramique"


class View(str, Enum):
    HOME = "home"
    MY_BOOKINGS = "my-bookings"
    ADMIN = "admin"
