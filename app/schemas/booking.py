from pydantic import BaseModel, Field
from typing import List
import datetime as dt

from app.models.enums import BookingStatus


class BookingCreate(BaseModel):
    package_id: str
    user_name: str = Field(min_length=1)
    user_phone: str = Field(min_length=1)


class BookingDraftRecord(BaseModel):
    """Booking as assembled by the draft flow, before the store assigns ids."""

    court_id: str
    court_name: str
    package_id: str
    session_date: dt.date
    user_name: str
    user_phone: str
    date: str
    time: str
    total_price: float
    status: BookingStatus = BookingStatus.CONFIRMED

    @property
    def session_key(self):
        return (self.package_id, self.session_date)


class BookingOut(BaseModel):
    id: int
    court_id: str
    court_name: str
    package_id: str
    session_date: dt.date
    seat_number: int
    user_name: str
    user_phone: str
    date: str
    time: str
    total_price: float
    status: BookingStatus
    created_at: dt.datetime

    model_config = {"from_attributes": True}

    @property
    def session_key(self):
        return (self.package_id, self.session_date)


class PackageRevenue(BaseModel):
    package_id: str
    booking_count: int
    revenue: float


class RevenueOut(BaseModel):
    total_revenue: float
    booking_count: int
    packages: List[PackageRevenue] = []


class AdminUnlock(BaseModel):
    code: str
