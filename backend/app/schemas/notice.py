from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from app.models.notice import NoticeType, NoticeFormat
from app.schemas.common import DepartmentBrief, ClubBrief, UserBrief


class NoticeUpdate(BaseModel):
    """
    Partial update. title/content/type apply only when non-empty;
    department/club apply whenever present, and an empty value clears them.
    """
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    type: Optional[NoticeType] = None
    department: Optional[str] = None
    club: Optional[str] = None


class NoticeResponse(BaseModel):
    id: str
    title: str
    content: Optional[str] = None
    type: NoticeType
    format: NoticeFormat
    pdf_filename: Optional[str] = None
    pdf_size: Optional[int] = None
    has_file: bool = False
    department: Optional[DepartmentBrief] = None
    club: Optional[ClubBrief] = None
    posted_by: Optional[UserBrief] = None
    is_active: bool
    is_pinned: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NoticeListResponse(BaseModel):
    success: bool = True
    count: int
    notices: List[NoticeResponse]


class NoticeDetailResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    notice: NoticeResponse
