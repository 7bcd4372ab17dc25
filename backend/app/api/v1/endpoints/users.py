"""
User administration and club membership endpoints.

Admins manage posting privileges, primary roles and additional roles.
Club heads may list and remove members of their own club.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from typing import Optional

from app.core.database import get_db
from app.core.logging_config import logger
from app.core.exceptions import UserNotFoundError, ClubNotFoundError
from app.models.user import User, UserRole, AdditionalRole
from app.models.club import Club
from app.schemas.user import (
    PrivilegesUpdate,
    RoleUpdate,
    AdditionalRolesUpdate,
    UserListResponse,
    UserDetailResponse,
)
from app.schemas.auth import UserResponse
from app.modules.auth.dependencies import get_current_user, get_current_admin
from app.modules.auth.permissions import can_manage_club_members


router = APIRouter()


async def _load_user(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(
        select(User)
        .where(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    user = result.scalar_one_or_none()
    if not user:
        raise UserNotFoundError(user_id)
    return user


def _deny_club_management(current_user: User, club_id: Optional[str]) -> None:
    if not can_manage_club_members(current_user, club_id):
        logger.log_permission_denied(
            "manage club members",
            user_id=str(current_user.id),
            role=current_user.role.value,
            target_id=club_id,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to manage this club"
        )


@router.get("", response_model=UserListResponse)
async def list_users(
    role: Optional[str] = Query(None, description="Filter by primary role"),
    search: Optional[str] = Query(None, description="Search by name or email"),
    current_admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """List users with department and club (admin only)"""
    query = select(User)

    if search:
        search_term = f"%{search}%"
        query = query.where(or_(
            User.name.ilike(search_term),
            User.email.ilike(search_term),
        ))

    if role:
        try:
            query = query.where(User.role == UserRole(role))
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid role"
            )

    query = query.order_by(User.created_at.desc())

    result = await db.execute(query)
    users = result.scalars().all()

    return UserListResponse(
        count=len(users),
        users=[UserResponse.model_validate(u) for u in users]
    )


@router.put("/{user_id}/privileges", response_model=UserDetailResponse)
async def update_privileges(
    user_id: str,
    update: PrivilegesUpdate,
    current_admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Grant or revoke the right to post notices"""
    user = await _load_user(db, user_id)

    user.can_post = update.can_post
    await db.commit()

    logger.info(
        f"[Users] {current_admin.email} set can_post={update.can_post} for {user.email}"
    )

    user = await _load_user(db, user_id)
    return UserDetailResponse(
        message="User privileges updated successfully",
        user=UserResponse.model_validate(user)
    )


@router.put("/{user_id}/role", response_model=UserDetailResponse)
async def update_role(
    user_id: str,
    update: RoleUpdate,
    current_admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Change a user's primary role"""
    try:
        new_role = UserRole(update.role)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid role"
        )

    user = await _load_user(db, user_id)

    old_role = user.role
    user.role = new_role
    await db.commit()

    logger.info(
        f"[Users] {current_admin.email} changed role of {user.email}: "
        f"{old_role.value} -> {new_role.value}"
    )

    user = await _load_user(db, user_id)
    return UserDetailResponse(
        message="User role updated successfully",
        user=UserResponse.model_validate(user)
    )


@router.put("/{user_id}/additional-roles", response_model=UserDetailResponse)
async def update_additional_roles(
    user_id: str,
    update: AdditionalRolesUpdate,
    current_admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Replace a user's additional roles, optionally assigning a club.

    A club head must end up assigned to a club.
    """
    user = await _load_user(db, user_id)

    if update.club:
        club = await db.get(Club, update.club)
        if not club:
            raise ClubNotFoundError(update.club)
        user.club_id = club.id

    if AdditionalRole.CLUB_HEAD in update.additional_roles and not user.club_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A club head must be assigned to a club"
        )

    user.additional_roles = [r.value for r in update.additional_roles]
    await db.commit()

    logger.info(
        f"[Users] {current_admin.email} set additional roles of {user.email} "
        f"to {user.additional_roles}"
    )

    user = await _load_user(db, user_id)
    return UserDetailResponse(
        message="Additional roles updated successfully",
        user=UserResponse.model_validate(user)
    )


@router.get("/club-members/{club_id}", response_model=UserListResponse)
async def list_club_members(
    club_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Members assigned to a club (admin or that club's head)"""
    _deny_club_management(current_user, club_id)

    if not await db.get(Club, club_id):
        raise ClubNotFoundError(club_id)

    result = await db.execute(
        select(User).where(User.club_id == club_id).order_by(User.name)
    )
    members = result.scalars().all()

    return UserListResponse(
        count=len(members),
        users=[UserResponse.model_validate(m) for m in members]
    )


@router.delete("/club-members/{member_id}", response_model=UserDetailResponse)
async def remove_club_member(
    member_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Drop a member from their club (admin or that club's head)"""
    member = await _load_user(db, member_id)

    if not member.club_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User is not a member of any club"
        )

    club_id = member.club_id
    _deny_club_management(current_user, club_id)

    member.revoke_additional_role(AdditionalRole.CLUB_MEMBER)
    # Head status is scoped to the club being left
    member.revoke_additional_role(AdditionalRole.CLUB_HEAD)
    member.club_id = None
    await db.commit()

    logger.info(f"[Users] {current_user.email} removed {member.email} from club {club_id}")

    member = await _load_user(db, member_id)
    return UserDetailResponse(
        message="Member removed from club successfully",
        user=UserResponse.model_validate(member)
    )
