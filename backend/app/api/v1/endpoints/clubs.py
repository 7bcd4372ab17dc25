from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.core.database import get_db
from app.core.exceptions import DuplicateResourceError
from app.core.logging_config import logger
from app.models.user import User
from app.models.club import Club
from app.schemas.organization import (
    ClubCreate,
    ClubResponse,
    ClubListResponse,
    ClubDetailResponse,
)
from app.modules.auth.dependencies import get_current_admin


router = APIRouter()


@router.get("", response_model=ClubListResponse)
async def list_clubs(db: AsyncSession = Depends(get_db)):
    """All clubs sorted by name (public)"""
    result = await db.execute(select(Club).order_by(Club.name))
    clubs = result.scalars().all()

    return ClubListResponse(
        count=len(clubs),
        clubs=[ClubResponse.model_validate(c) for c in clubs]
    )


@router.post("", response_model=ClubDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_club(
    club_data: ClubCreate,
    current_user: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Create a club (admin only)"""
    existing = await db.execute(
        select(Club).where(func.lower(Club.name) == club_data.name.lower())
    )
    if existing.scalar_one_or_none():
        raise DuplicateResourceError("Club", "name")

    club = Club(
        name=club_data.name,
        category=club_data.category,
        description=club_data.description,
    )
    db.add(club)
    await db.commit()
    await db.refresh(club)

    logger.info(f"[Clubs] {current_user.email} created club {club.name}")

    return ClubDetailResponse(club=ClubResponse.model_validate(club))
