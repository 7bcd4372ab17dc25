from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime

from app.core.database import Base, generate_uuid


class Department(Base):
    """Academic department"""
    __tablename__ = "departments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), unique=True, nullable=False)
    code = Column(String(20), unique=True, nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Department {self.code}>"
