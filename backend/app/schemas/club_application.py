from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from app.models.club_application import ApplicationStatus
from app.schemas.common import DepartmentBrief, ClubBrief


class ApplicationCreate(BaseModel):
    # Presence is checked in the endpoint ("Please provide club and reason")
    club: Optional[str] = None
    reason: Optional[str] = None


class ApplicationReview(BaseModel):
    status: Optional[str] = None


class ApplicantBrief(BaseModel):
    id: str
    name: str
    email: str
    department: Optional[DepartmentBrief] = None

    class Config:
        from_attributes = True


class ReviewerBrief(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class ApplicationResponse(BaseModel):
    id: str
    club: ClubBrief
    student: ApplicantBrief
    reason: str
    status: ApplicationStatus
    applied_at: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[ReviewerBrief] = None

    class Config:
        from_attributes = True


class ApplicationListResponse(BaseModel):
    success: bool = True
    count: int
    applications: List[ApplicationResponse]


class ClubHeadApplicationsResponse(ApplicationListResponse):
    club: ClubBrief


class ApplicationDetailResponse(BaseModel):
    success: bool = True
    application: ApplicationResponse
