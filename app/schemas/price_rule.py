"""Price rule schemas."""
import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class RuleType(str, Enum):
    """Which calendar dates a price rule applies to."""

    SPECIFIC_DAY = "SPECIFIC_DAY"
    WEEKDAYS = "WEEKDAYS"
    WEEKENDS = "WEEKENDS"
    SPECIFIC_DATE = "SPECIFIC_DATE"
    HOLIDAY = "HOLIDAY"
    ALL_DAYS = "ALL_DAYS"


class PriceRuleCreate(BaseModel):
    """
    Schema for a price rule as entered by an administrator.

    Times are club-local. Fields are loosely typed on purpose so that the
    rule validator, not request parsing, reports user-correctable errors.
    """

    rule_type: str
    day_of_week: Optional[int] = None
    date: Optional[dt.date] = None
    holiday_id: Optional[int] = None
    start_time: str
    end_time: str
    price_cents: int


class PriceRuleUpdate(BaseModel):
    """Schema for updating a price rule (club-local times)."""

    rule_type: Optional[str] = None
    day_of_week: Optional[int] = None
    date: Optional[dt.date] = None
    holiday_id: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    price_cents: Optional[int] = None


class PriceRuleRecord(BaseModel):
    """A price rule as persisted, with UTC start and end times."""

    id: Optional[int] = None
    rule_type: RuleType
    day_of_week: Optional[int] = None
    date: Optional[dt.date] = None
    holiday_id: Optional[int] = None
    start_time: str
    end_time: str
    price_cents: int
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PriceRuleLocal(PriceRuleRecord):
    """A stored price rule converted to the club's local time for display."""

    court_id: int
    timezone: str
    updated_at: Optional[dt.datetime] = None


class RuleValidationError(BaseModel):
    """A user-correctable problem with a rule or a rule set."""

    field: str
    message_key: str
    message: str


class RuleValidationResult(BaseModel):
    """Outcome of validating a rule without storing it."""

    valid: bool
    error: Optional[RuleValidationError] = None
