"""Database models."""
from app.models.club import Club
from app.models.court import Court
from app.models.holiday import Holiday
from app.models.price_rule import CourtPriceRule

__all__ = ["Club", "Court", "Holiday", "CourtPriceRule"]
