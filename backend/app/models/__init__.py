# Re-export all models for convenient imports
from app.models.user import User, UserRole, AdditionalRole
from app.models.department import Department
from app.models.club import Club, ClubCategory
from app.models.notice import Notice, NoticeType, NoticeFormat
from app.models.club_application import ClubApplication, ApplicationStatus

__all__ = [
    # User
    "User",
    "UserRole",
    "AdditionalRole",
    # Organisation
    "Department",
    "Club",
    "ClubCategory",
    # Notices
    "Notice",
    "NoticeType",
    "NoticeFormat",
    # Membership
    "ClubApplication",
    "ApplicationStatus",
]
