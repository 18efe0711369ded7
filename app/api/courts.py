"""Court endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.clubs import get_club_or_404
from app.core.config import settings
from app.core.database import get_db
from app.models.court import Court
from app.schemas.court import CourtCreate, CourtUpdate, CourtInDB

router = APIRouter(tags=["courts"])


async def get_court_or_404(db: AsyncSession, court_id: int) -> Court:
    """Load a court or raise a 404."""
    result = await db.execute(select(Court).where(Court.id == court_id))
    court = result.scalar_one_or_none()

    if not court:
        raise HTTPException(status_code=404, detail="Court not found")

    return court


@router.post("/clubs/{club_id}/courts", response_model=CourtInDB, status_code=201)
async def create_court(
    club_id: int,
    court: CourtCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a court in a club.

    Args:
        club_id: Club ID
        court: Court data; the default hourly price falls back to
            DEFAULT_COURT_PRICE_CENTS when omitted
        db: Database session

    Returns:
        Created court
    """
    await get_club_or_404(db, club_id)

    court_data = court.model_dump()
    if court_data["default_price_cents"] is None:
        court_data["default_price_cents"] = settings.DEFAULT_COURT_PRICE_CENTS
    court_data["club_id"] = club_id

    db_court = Court(**court_data)
    db.add(db_court)
    await db.commit()
    await db.refresh(db_court)

    return db_court


@router.get("/clubs/{club_id}/courts", response_model=List[CourtInDB])
async def list_courts(
    club_id: int,
    db: AsyncSession = Depends(get_db),
):
    """List the courts of a club."""
    await get_club_or_404(db, club_id)

    result = await db.execute(
        select(Court).where(Court.club_id == club_id).order_by(Court.id)
    )
    return result.scalars().all()


@router.get("/courts/{court_id}", response_model=CourtInDB)
async def get_court(
    court_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific court by ID."""
    return await get_court_or_404(db, court_id)


@router.patch("/courts/{court_id}", response_model=CourtInDB)
async def update_court(
    court_id: int,
    court_update: CourtUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a court, including its default hourly price."""
    court = await get_court_or_404(db, court_id)

    update_data = court_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if field == "default_price_cents" and value is None:
            continue
        setattr(court, field, value)

    await db.commit()
    await db.refresh(court)

    return court


@router.delete("/courts/{court_id}", status_code=204)
async def delete_court(
    court_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a court and its price rules."""
    court = await get_court_or_404(db, court_id)

    await db.delete(court)
    await db.commit()
