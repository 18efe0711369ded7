"""Holiday endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.clubs import get_club_or_404
from app.core.database import get_db
from app.models.holiday import Holiday
from app.models.price_rule import CourtPriceRule
from app.schemas.holiday import HolidayCreate, HolidayInDB

router = APIRouter(tags=["holidays"])


@router.post("/clubs/{club_id}/holidays", response_model=HolidayInDB, status_code=201)
async def create_holiday(
    club_id: int,
    holiday: HolidayCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a holiday that HOLIDAY price rules of the club's courts can use.

    Args:
        club_id: Club ID
        holiday: Holiday name and date
        db: Database session

    Returns:
        Created holiday
    """
    await get_club_or_404(db, club_id)

    result = await db.execute(
        select(Holiday).where(
            Holiday.club_id == club_id,
            Holiday.date == holiday.date,
            Holiday.name == holiday.name,
        )
    )
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=400,
            detail=f"Holiday '{holiday.name}' on {holiday.date.isoformat()} already exists",
        )

    db_holiday = Holiday(club_id=club_id, **holiday.model_dump())
    db.add(db_holiday)
    await db.commit()
    await db.refresh(db_holiday)

    return db_holiday


@router.get("/clubs/{club_id}/holidays", response_model=List[HolidayInDB])
async def list_holidays(
    club_id: int,
    db: AsyncSession = Depends(get_db),
):
    """List a club's holidays by date."""
    await get_club_or_404(db, club_id)

    result = await db.execute(
        select(Holiday).where(Holiday.club_id == club_id).order_by(Holiday.date)
    )
    return result.scalars().all()


@router.delete("/holidays/{holiday_id}", status_code=204)
async def delete_holiday(
    holiday_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a holiday. HOLIDAY rules referencing it are removed with it."""
    result = await db.execute(select(Holiday).where(Holiday.id == holiday_id))
    holiday = result.scalar_one_or_none()

    if not holiday:
        raise HTTPException(status_code=404, detail="Holiday not found")

    await db.execute(
        delete(CourtPriceRule).where(CourtPriceRule.holiday_id == holiday_id)
    )
    await db.delete(holiday)
    await db.commit()
