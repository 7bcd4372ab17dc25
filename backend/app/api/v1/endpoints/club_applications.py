from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import datetime

from app.core.database import get_db
from app.core.logging_config import logger
from app.core.exceptions import ClubNotFoundError, ApplicationNotFoundError
from app.models.user import User, AdditionalRole
from app.models.club import Club
from app.models.club_application import ClubApplication, ApplicationStatus, LIVE_STATUSES
from app.schemas.common import ClubBrief
from app.schemas.club_application import (
    ApplicationCreate,
    ApplicationReview,
    ApplicationResponse,
    ApplicationListResponse,
    ClubHeadApplicationsResponse,
    ApplicationDetailResponse,
)
from app.modules.auth.dependencies import get_current_user, get_current_admin
from app.modules.auth.permissions import is_club_head, can_review_application


router = APIRouter()

REVIEW_STATUSES = (ApplicationStatus.APPROVED.value, ApplicationStatus.REJECTED.value)


async def _load_application(db: AsyncSession, application_id: str) -> ClubApplication:
    result = await db.execute(
        select(ClubApplication)
        .where(ClubApplication.id == application_id)
        .execution_options(populate_existing=True)
    )
    application = result.scalar_one_or_none()
    if not application:
        raise ApplicationNotFoundError(application_id)
    return application


def _as_list(applications) -> dict:
    return {
        "count": len(applications),
        "applications": [ApplicationResponse.model_validate(a) for a in applications],
    }


@router.get("", response_model=ApplicationListResponse)
async def list_applications(
    current_admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """All applications, newest first (admin only)"""
    result = await db.execute(
        select(ClubApplication).order_by(ClubApplication.applied_at.desc())
    )
    return ApplicationListResponse(**_as_list(result.scalars().all()))


@router.get("/club-head", response_model=ClubHeadApplicationsResponse)
async def list_club_head_applications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Applications to the caller's club (club heads only)"""
    if not is_club_head(current_user):
        logger.log_permission_denied(
            "list club applications",
            user_id=str(current_user.id),
            role=current_user.role.value,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only club heads can access this route"
        )

    if not current_user.club_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You are not assigned to any club"
        )

    club = await db.get(Club, current_user.club_id)

    result = await db.execute(
        select(ClubApplication)
        .where(ClubApplication.club_id == current_user.club_id)
        .order_by(ClubApplication.applied_at.desc())
    )

    return ClubHeadApplicationsResponse(
        club=ClubBrief.model_validate(club),
        **_as_list(result.scalars().all())
    )


@router.get("/my-applications", response_model=ApplicationListResponse)
async def list_my_applications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """The caller's own applications, newest first"""
    result = await db.execute(
        select(ClubApplication)
        .where(ClubApplication.student_id == current_user.id)
        .order_by(ClubApplication.applied_at.desc())
    )
    return ApplicationListResponse(**_as_list(result.scalars().all()))


@router.post("", response_model=ApplicationDetailResponse, status_code=status.HTTP_201_CREATED)
async def apply_to_club(
    application_data: ApplicationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Apply to join a club"""
    reason = (application_data.reason or "").strip()

    if not application_data.club or not reason:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide club and reason"
        )

    if not await db.get(Club, application_data.club):
        raise ClubNotFoundError(application_data.club)

    # At most one pending or approved application per student and club
    result = await db.execute(
        select(ClubApplication).where(
            ClubApplication.club_id == application_data.club,
            ClubApplication.student_id == current_user.id,
            ClubApplication.status.in_(LIVE_STATUSES),
        )
    )
    if result.scalars().first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You have already applied to this club or are already a member"
        )

    application = ClubApplication(
        club_id=application_data.club,
        student_id=current_user.id,
        reason=reason,
    )
    db.add(application)
    await db.commit()

    logger.info(f"[ClubApplications] {current_user.email} applied to club {application.club_id}")

    application = await _load_application(db, application.id)
    return ApplicationDetailResponse(application=ApplicationResponse.model_validate(application))


@router.patch("/{application_id}", response_model=ApplicationDetailResponse)
async def review_application(
    application_id: str,
    review: ApplicationReview,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Approve or reject an application (admin, or head of the application's club).

    Approval adds ``club_member`` to the student's additional roles and
    assigns them the club.
    """
    if review.status not in REVIEW_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid status"
        )

    application = await _load_application(db, application_id)

    if not can_review_application(current_user, application):
        logger.log_permission_denied(
            "review club application",
            user_id=str(current_user.id),
            role=current_user.role.value,
            target_id=application_id,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to review this application"
        )

    new_status = ApplicationStatus(review.status)
    application.status = new_status
    application.reviewed_at = datetime.utcnow()
    application.reviewed_by_id = current_user.id

    if new_status == ApplicationStatus.APPROVED:
        student = await db.get(User, application.student_id)
        if student:
            student.grant_additional_role(AdditionalRole.CLUB_MEMBER)
            student.club_id = application.club_id

    await db.commit()

    logger.info(
        f"[ClubApplications] {current_user.email} {new_status.value} application {application_id}"
    )

    application = await _load_application(db, application_id)
    return ApplicationDetailResponse(application=ApplicationResponse.model_validate(application))
