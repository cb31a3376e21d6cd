from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date

from app.models.enums import CourtType


class Court(BaseModel):
    id: str
    name: str
    type: CourtType
    image: str
    rating: float
    features: List[str] = []
    price_label: str

    model_config = {"frozen": True}


class PackageTemplate(BaseModel):
    id: str
    name: str
    day_name: str
    description: str
    time_range: str
    max_players: int = Field(gt=0)
    price_per_person: float = Field(ge=0)
    # 0 = Sunday ... 6 = Saturday
    target_weekday: int = Field(ge=0, le=6)

    model_config = {"frozen": True}


class ResolvedSession(PackageTemplate):
    session_date: date
    date_display: str

    # Filled in once bookings are counted
    remaining: Optional[int] = None
    is_full: bool = False

    @property
    def session_key(self):
        return (self.id, self.session_date)
