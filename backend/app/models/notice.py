from sqlalchemy import Column, String, Boolean, DateTime, Integer, Text, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base, generate_uuid


class NoticeType(str, enum.Enum):
    ACADEMIC = "academic"
    CLUB = "club"


class NoticeFormat(str, enum.Enum):
    TEXT = "text"
    PDF = "pdf"


class Notice(Base):
    """Notice posted on the board"""
    __tablename__ = "notices"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    type = Column(SQLEnum(NoticeType), nullable=False, index=True)
    format = Column(SQLEnum(NoticeFormat), default=NoticeFormat.TEXT, nullable=False)

    # Attached PDF (format == pdf)
    pdf_filename = Column(String(255), nullable=True)
    pdf_path = Column(String(512), nullable=True)
    pdf_size = Column(Integer, nullable=True)

    # Scope: department for academic notices, club for club notices
    department_id = Column(String(36), ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True)
    club_id = Column(String(36), ForeignKey("clubs.id", ondelete="SET NULL"), nullable=True, index=True)
    posted_by_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    is_active = Column(Boolean, default=True, nullable=False)
    is_pinned = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    posted_by = relationship("User", lazy="selectin")
    department = relationship("Department", lazy="selectin")
    club = relationship("Club", lazy="selectin")

    @property
    def has_file(self) -> bool:
        return bool(self.pdf_path)

    def __repr__(self):
        return f"<Notice {self.title!r} ({self.type.value})>"
