"""Pricing timeline and quote schemas."""
import datetime as dt
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.schemas.price_rule import PriceRuleRecord


class DaySegment(BaseModel):
    """A [start, end) window of one date with a single hourly price."""

    start: str  # HH:MM
    end: str    # HH:MM, "24:00" for end of day
    price_cents: int


class PricingResource(BaseModel):
    """Everything the pricing engine needs to know about a court."""

    timezone: Optional[str] = None
    default_price_cents: int = Field(default=0, ge=0)
    rules: List[PriceRuleRecord] = []
    holidays: Dict[int, dt.date] = {}  # holiday id -> date


class PriceTimelineResponse(BaseModel):
    """Schema for a court's price timeline on one date."""

    court_id: int
    date: dt.date
    timezone: str
    segments: List[DaySegment]


class PriceBreakdownItem(BaseModel):
    """Portion of a booking priced at a single rate."""

    start: str
    end: str
    minutes: int
    rate_cents: int
    price_cents: int


class PriceQuote(BaseModel):
    """Schema for the price of a booking interval."""

    start_time: str
    end_time: str
    duration_minutes: int
    total_price_cents: int
    breakdown: List[PriceBreakdownItem]


class PriceQuoteResponse(PriceQuote):
    """Price quote for a court on a date."""

    court_id: int
    date: dt.date
    timezone: str
