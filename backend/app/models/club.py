from sqlalchemy import Column, String, DateTime, Text, Enum as SQLEnum
from datetime import datetime
import enum

from app.core.database import Base, generate_uuid


class ClubCategory(str, enum.Enum):
    TECHNICAL = "technical"
    CULTURAL = "cultural"
    SPORTS = "sports"
    SOCIAL = "social"
    OTHER = "other"


class Club(Base):
    """Student club"""
    __tablename__ = "clubs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), unique=True, nullable=False)
    category = Column(SQLEnum(ClubCategory), default=ClubCategory.OTHER, nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Club {self.name}>"
