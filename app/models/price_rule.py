"""Court price rule model."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Date, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class CourtPriceRule(Base):
    """Hourly price applied to a time-of-day window on matching dates."""

    __tablename__ = "court_price_rules"

    id = Column(Integer, primary_key=True, index=True)
    court_id = Column(Integer, ForeignKey("courts.id", ondelete="CASCADE"), nullable=False, index=True)
    rule_type = Column(String, nullable=False)  # SPECIFIC_DAY, WEEKDAYS, WEEKENDS, SPECIFIC_DATE, HOLIDAY, ALL_DAYS
    day_of_week = Column(Integer, nullable=True)  # 0=Sunday .. 6=Saturday, SPECIFIC_DAY only
    date = Column(Date, nullable=True)  # SPECIFIC_DATE only
    holiday_id = Column(Integer, ForeignKey("holidays.id", ondelete="CASCADE"), nullable=True)  # HOLIDAY only
    start_time = Column(String(5), nullable=False)  # HH:MM, UTC
    end_time = Column(String(5), nullable=False)    # HH:MM, UTC
    price_cents = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    court = relationship("Court", back_populates="price_rules")

    __table_args__ = (
        Index("ix_price_rules_court_type", "court_id", "rule_type"),
    )
