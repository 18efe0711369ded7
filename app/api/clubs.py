"""Club endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.models.club import Club
from app.schemas.club import ClubCreate, ClubUpdate, ClubInDB

router = APIRouter(prefix="/clubs", tags=["clubs"])


async def get_club_or_404(db: AsyncSession, club_id: int) -> Club:
    """Load a club or raise a 404."""
    result = await db.execute(
        select(Club).where(Club.id == club_id)
    )
    club = result.scalar_one_or_none()

    if not club:
        raise HTTPException(status_code=404, detail="Club not found")

    return club


@router.post("", response_model=ClubInDB, status_code=201)
async def create_club(
    club: ClubCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a new club.

    The timezone is stored as given. Pricing falls back to the configured
    default timezone while it is missing or not a known IANA name.

    Args:
        club: Club data
        db: Database session

    Returns:
        Created club
    """
    if club.slug:
        # Check if club already exists
        result = await db.execute(
            select(Club).where(Club.slug == club.slug)
        )
        existing_club = result.scalar_one_or_none()

        if existing_club:
            raise HTTPException(
                status_code=400,
                detail=f"Club with slug '{club.slug}' already exists (ID: {existing_club.id})",
            )

    db_club = Club(**club.model_dump())
    db.add(db_club)
    await db.commit()
    await db.refresh(db_club)

    return db_club


@router.get("", response_model=List[ClubInDB])
async def list_clubs(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
):
    """
    List all clubs.

    Args:
        skip: Number of records to skip
        limit: Maximum number of records to return
        db: Database session

    Returns:
        List of clubs
    """
    result = await db.execute(
        select(Club).order_by(Club.id).offset(skip).limit(limit)
    )
    clubs = result.scalars().all()
    return clubs


@router.get("/{club_id}", response_model=ClubInDB)
async def get_club(
    club_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific club by ID."""
    return await get_club_or_404(db, club_id)


@router.patch("/{club_id}", response_model=ClubInDB)
async def update_club(
    club_id: int,
    club_update: ClubUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Update a club's information.

    Args:
        club_id: Club ID
        club_update: Fields to update
        db: Database session

    Returns:
        Updated club
    """
    club = await get_club_or_404(db, club_id)

    # Update fields
    update_data = club_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(club, field, value)

    await db.commit()
    await db.refresh(club)

    return club


@router.delete("/{club_id}", status_code=204)
async def delete_club(
    club_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a club with its courts, holidays and price rules."""
    club = await get_club_or_404(db, club_id)

    await db.delete(club)
    await db.commit()
