from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, ForeignKey, JSON
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base, generate_uuid


class UserRole(str, enum.Enum):
    """Primary user roles"""
    STUDENT = "student"
    FACULTY = "faculty"
    CLUB_MEMBER = "club_member"
    ADMIN = "admin"


class AdditionalRole(str, enum.Enum):
    """Roles granted on top of the primary role"""
    CLUB_MEMBER = "club_member"
    CLUB_HEAD = "club_head"


# Roles a user may pick for themselves at registration
REGISTRABLE_ROLES = (UserRole.STUDENT, UserRole.FACULTY, UserRole.CLUB_MEMBER)


class User(Base):
    """User model"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    role = Column(SQLEnum(UserRole), default=UserRole.STUDENT, nullable=False)
    additional_roles = Column(MutableList.as_mutable(JSON), default=list, nullable=False)
    can_post = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    department_id = Column(String(36), ForeignKey("departments.id", ondelete="SET NULL"), nullable=True)
    club_id = Column(String(36), ForeignKey("clubs.id", ondelete="SET NULL"), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login = Column(DateTime, nullable=True)

    # Relationships
    department = relationship("Department", lazy="selectin")
    club = relationship("Club", lazy="selectin")

    def grant_additional_role(self, role: AdditionalRole) -> None:
        if self.additional_roles is None:
            self.additional_roles = []
        if role.value not in self.additional_roles:
            self.additional_roles.append(role.value)

    def revoke_additional_role(self, role: AdditionalRole) -> None:
        if self.additional_roles and role.value in self.additional_roles:
            self.additional_roles.remove(role.value)

    def __repr__(self):
        return f"<User {self.email}>"
