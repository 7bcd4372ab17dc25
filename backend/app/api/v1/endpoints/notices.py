"""
Notice endpoints.

Students only see academic notices that are general or belong to their
department; club notices are visible to everyone signed in. Posting needs
the can-post gate, editing and deleting need admin or ownership, and pinning
is admin-only.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query, Form, File, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from app.core.database import get_db
from app.core.logging_config import logger
from app.core.exceptions import NoticeNotFoundError, AuthorizationError
from app.models.user import User
from app.models.notice import Notice, NoticeType, NoticeFormat
from app.models.department import Department
from app.models.club import Club
from app.schemas.common import MessageResponse
from app.schemas.notice import (
    NoticeUpdate,
    NoticeResponse,
    NoticeListResponse,
    NoticeDetailResponse,
)
from app.modules.auth.dependencies import get_current_user, get_current_admin, require_can_post
from app.modules.auth.permissions import (
    can_view_notice,
    can_modify_notice,
    notice_visibility_clause,
)
from app.services.file_storage import file_storage


router = APIRouter()


async def _load_notice(db: AsyncSession, notice_id: str) -> Notice:
    """Fetch a notice with its relations freshly loaded, or 404"""
    result = await db.execute(
        select(Notice)
        .where(Notice.id == notice_id)
        .execution_options(populate_existing=True)
    )
    notice = result.scalar_one_or_none()
    if not notice:
        raise NoticeNotFoundError(notice_id)
    return notice


async def _check_references(
    db: AsyncSession,
    department_id: Optional[str],
    club_id: Optional[str]
) -> None:
    if department_id and not await db.get(Department, department_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Department not found"
        )
    if club_id and not await db.get(Club, club_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Club not found"
        )


@router.get("", response_model=NoticeListResponse)
async def list_notices(
    type: Optional[NoticeType] = Query(None, description="academic or club"),
    department: Optional[str] = Query(None),
    club: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List active notices visible to the caller, pinned first then newest"""
    query = select(Notice).where(Notice.is_active == True)  # noqa: E712

    if type:
        query = query.where(Notice.type == type)
    if department:
        query = query.where(Notice.department_id == department)
    if club:
        query = query.where(Notice.club_id == club)

    visibility = notice_visibility_clause(current_user, type)
    if visibility is not None:
        query = query.where(visibility)

    query = query.order_by(Notice.is_pinned.desc(), Notice.created_at.desc())

    result = await db.execute(query)
    notices = result.scalars().all()

    return NoticeListResponse(
        count=len(notices),
        notices=[NoticeResponse.model_validate(n) for n in notices]
    )


@router.get("/{notice_id}", response_model=NoticeDetailResponse)
async def get_notice(
    notice_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a single notice"""
    notice = await _load_notice(db, notice_id)

    if not can_view_notice(current_user, notice):
        logger.log_permission_denied(
            "view notice",
            user_id=str(current_user.id),
            role=current_user.role.value,
            target_id=notice_id,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this notice"
        )

    return NoticeDetailResponse(notice=NoticeResponse.model_validate(notice))


@router.get("/{notice_id}/file")
async def download_notice_file(
    notice_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Download the PDF attached to a notice"""
    notice = await _load_notice(db, notice_id)

    if not can_view_notice(current_user, notice):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this notice"
        )

    path = file_storage.resolve(notice.pdf_path)
    if path is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No file attached to this notice"
        )

    return FileResponse(
        path,
        media_type="application/pdf",
        filename=notice.pdf_filename or path.name
    )


@router.post("", response_model=NoticeDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_notice(
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    format: Optional[str] = Form(None),
    department: Optional[str] = Form(None),
    club: Optional[str] = Form(None),
    pdf_file: Optional[UploadFile] = File(None),
    current_user: User = Depends(require_can_post),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a notice (multipart form).

    Attaching ``pdf_file`` forces the pdf format. The department is kept
    only for academic notices and the club only for club notices.
    """
    title = (title or "").strip()
    content = (content or "").strip()

    if not title or not type or not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide title, type, and content"
        )

    try:
        notice_type = NoticeType(type)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid notice type"
        )

    try:
        notice_format = NoticeFormat(format) if format else NoticeFormat.TEXT
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid notice format"
        )

    department_id = department if notice_type == NoticeType.ACADEMIC and department else None
    club_id = club if notice_type == NoticeType.CLUB and club else None
    await _check_references(db, department_id, club_id)

    notice = Notice(
        title=title,
        content=content,
        type=notice_type,
        format=notice_format,
        department_id=department_id,
        club_id=club_id,
        posted_by_id=current_user.id,
    )

    stored = None
    if pdf_file is not None and pdf_file.filename:
        stored = await file_storage.save_pdf(pdf_file)
        notice.format = NoticeFormat.PDF
        notice.pdf_filename = stored.original_name
        notice.pdf_path = stored.path
        notice.pdf_size = stored.size

    db.add(notice)
    try:
        await db.commit()
    except Exception:
        if stored:
            await file_storage.delete(stored.path)
        raise

    logger.info(
        f"[Notices] {current_user.email} posted {notice_type.value} notice {notice.id}"
        + (" with attachment" if stored else "")
    )

    notice = await _load_notice(db, notice.id)
    return NoticeDetailResponse(notice=NoticeResponse.model_validate(notice))


@router.put("/{notice_id}", response_model=NoticeDetailResponse)
async def update_notice(
    notice_id: str,
    update: NoticeUpdate,
    current_user: User = Depends(require_can_post),
    db: AsyncSession = Depends(get_db)
):
    """Edit a notice (admin or the poster)"""
    notice = await _load_notice(db, notice_id)

    if not can_modify_notice(current_user, notice):
        logger.log_permission_denied(
            "edit notice",
            user_id=str(current_user.id),
            role=current_user.role.value,
            target_id=notice_id,
        )
        raise AuthorizationError("Not authorized to edit this notice")

    if update.title and update.title.strip():
        notice.title = update.title.strip()
    if update.content and update.content.strip():
        notice.content = update.content.strip()
    if update.type:
        notice.type = update.type

    # Present-but-empty clears the reference
    fields = update.model_fields_set
    if "department" in fields:
        await _check_references(db, update.department, None)
        notice.department_id = update.department or None
    if "club" in fields:
        await _check_references(db, None, update.club)
        notice.club_id = update.club or None

    await db.commit()

    notice = await _load_notice(db, notice_id)
    return NoticeDetailResponse(
        message="Notice updated successfully",
        notice=NoticeResponse.model_validate(notice)
    )


@router.patch("/{notice_id}/pin", response_model=NoticeDetailResponse)
async def toggle_pin(
    notice_id: str,
    current_user: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Pin or unpin a notice (admin only)"""
    notice = await _load_notice(db, notice_id)

    notice.is_pinned = not notice.is_pinned
    await db.commit()

    state = "pinned" if notice.is_pinned else "unpinned"
    logger.info(f"[Notices] {current_user.email} {state} notice {notice_id}")

    notice = await _load_notice(db, notice_id)
    return NoticeDetailResponse(
        message=f"Notice {state} successfully",
        notice=NoticeResponse.model_validate(notice)
    )


@router.delete("/{notice_id}", response_model=MessageResponse)
async def delete_notice(
    notice_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a notice and its attachment (admin or the poster)"""
    notice = await _load_notice(db, notice_id)

    if not can_modify_notice(current_user, notice):
        logger.log_permission_denied(
            "delete notice",
            user_id=str(current_user.id),
            role=current_user.role.value,
            target_id=notice_id,
        )
        raise AuthorizationError("Not authorized to delete this notice")

    pdf_path = notice.pdf_path
    await db.delete(notice)
    await db.commit()

    if pdf_path:
        await file_storage.delete(pdf_path)

    logger.info(f"[Notices] {current_user.email} deleted notice {notice_id}")

    return MessageResponse(message="Notice deleted successfully")
