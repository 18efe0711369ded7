"""Holiday model."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Holiday(Base):
    """A named holiday with a fixed calendar date, scoped to a club."""

    __tablename__ = "holidays"

    id = Column(Integer, primary_key=True, index=True)
    club_id = Column(Integer, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    club = relationship("Club", back_populates="holidays")

    __table_args__ = (
        UniqueConstraint("club_id", "date", "name", name="uq_holidays_club_date_name"),
    )
