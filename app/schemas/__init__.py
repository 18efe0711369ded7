"""API schemas."""
from app.schemas.club import (
    ClubCreate,
    ClubUpdate,
    ClubInDB,
)
from app.schemas.court import (
    CourtCreate,
    CourtUpdate,
    CourtInDB,
)
from app.schemas.holiday import (
    HolidayCreate,
    HolidayInDB,
)
from app.schemas.price_rule import (
    RuleType,
    PriceRuleCreate,
    PriceRuleUpdate,
    PriceRuleRecord,
    PriceRuleLocal,
    RuleValidationError,
    RuleValidationResult,
)
from app.schemas.pricing import (
    DaySegment,
    PricingResource,
    PriceTimelineResponse,
    PriceBreakdownItem,
    PriceQuote,
    PriceQuoteResponse,
)

__all__ = [
    "ClubCreate",
    "ClubUpdate",
    "ClubInDB",
    "CourtCreate",
    "CourtUpdate",
    "CourtInDB",
    "HolidayCreate",
    "HolidayInDB",
    "RuleType",
    "PriceRuleCreate",
    "PriceRuleUpdate",
    "PriceRuleRecord",
    "PriceRuleLocal",
    "RuleValidationError",
    "RuleValidationResult",
    "DaySegment",
    "PricingResource",
    "PriceTimelineResponse",
    "PriceBreakdownItem",
    "PriceQuote",
    "PriceQuoteResponse",
]
