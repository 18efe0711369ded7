"""Holiday schemas."""
import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict


class HolidayCreate(BaseModel):
    """Schema for creating a holiday."""

    name: str
    date: dt.date


class HolidayInDB(HolidayCreate):
    """Schema for holiday from database."""

    id: int
    club_id: int
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)
