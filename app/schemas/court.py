"""Court schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class CourtBase(BaseModel):
    """Base court schema."""

    name: str
    sport_type: Optional[str] = None
    surface_type: Optional[str] = None
    default_price_cents: Optional[int] = Field(default=None, ge=0)


class CourtCreate(CourtBase):
    """Schema for creating a court."""

    pass


class CourtUpdate(BaseModel):
    """Schema for updating a court."""

    name: Optional[str] = None
    sport_type: Optional[str] = None
    surface_type: Optional[str] = None
    default_price_cents: Optional[int] = Field(default=None, ge=0)


class CourtInDB(CourtBase):
    """Schema for court from database."""

    id: int
    club_id: int
    default_price_cents: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
