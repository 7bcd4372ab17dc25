"""Compact representations of related records embedded in responses"""
from pydantic import BaseModel
from typing import Optional

from app.models.club import ClubCategory
from app.models.user import UserRole


class DepartmentBrief(BaseModel):
    id: str
    name: str
    code: str

    class Config:
        from_attributes = True


class ClubBrief(BaseModel):
    id: str
    name: str
    category: ClubCategory
    description: Optional[str] = None

    class Config:
        from_attributes = True


class UserBrief(BaseModel):
    id: str
    name: str
    role: UserRole

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    success: bool = True
    message: str
