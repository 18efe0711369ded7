"""Price timeline and quote endpoints."""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.pricing import PriceQuoteResponse, PriceTimelineResponse
from app.services.price_calculator import BookingSpansMidnightError
from app.services.pricing_service import pricing_service
from app.services.time_of_day import is_valid_time

router = APIRouter(prefix="/courts/{court_id}", tags=["pricing"])


@router.get("/price-timeline", response_model=PriceTimelineResponse)
async def get_price_timeline(
    court_id: int,
    target_date: Optional[date] = Query(
        default=None, alias="date", description="Club-local date, defaults to today"
    ),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the price of every part of a day for a court.

    Segments are in club-local time, cover 00:00-24:00 without gaps and
    carry the hourly price in cents.

    Args:
        court_id: Court ID
        target_date: Club-local date
        db: Database session

    Returns:
        Price timeline
    """
    try:
        return await pricing_service.get_timeline(db, court_id, target_date)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/price-quote", response_model=PriceQuoteResponse)
async def get_price_quote(
    court_id: int,
    target_date: date = Query(..., alias="date", description="Club-local date"),
    start_time: str = Query(..., description="Club-local start time, HH:MM"),
    duration_minutes: int = Query(..., ge=1, le=1440),
    db: AsyncSession = Depends(get_db),
):
    """
    Price a booking of a court.

    Bookings must end by 24:00 of the same date.

    Args:
        court_id: Court ID
        target_date: Club-local date
        start_time: Club-local start time
        duration_minutes: Booking length
        db: Database session

    Returns:
        Total price and per-rate breakdown
    """
    if not is_valid_time(start_time):
        raise HTTPException(
            status_code=422,
            detail="Invalid start_time. Use HH:MM format (00:00-23:59)",
        )

    try:
        return await pricing_service.get_quote(
            db, court_id, target_date, start_time, duration_minutes
        )
    except BookingSpansMidnightError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
