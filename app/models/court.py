"""Court model."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Court(Base):
    """Represents a bookable court at a club."""

    __tablename__ = "courts"

    id = Column(Integer, primary_key=True, index=True)
    club_id = Column(Integer, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    sport_type = Column(String, nullable=True)  # e.g., "padel", "tennis"
    surface_type = Column(String, nullable=True)  # e.g., "indoor", "outdoor"
    default_price_cents = Column(Integer, nullable=False, default=0)  # hourly price when no rule applies
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    club = relationship("Club", back_populates="courts")
    price_rules = relationship("CourtPriceRule", back_populates="court", cascade="all, delete-orphan", passive_deletes=True)
