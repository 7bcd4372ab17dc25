"""Schemas for departments and clubs"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from app.models.club import ClubCategory


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=20)
    description: Optional[str] = None

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Please provide department name')
        return v

    @field_validator('code')
    @classmethod
    def normalize_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError('Please provide department code')
        return v


class DepartmentResponse(BaseModel):
    id: str
    name: str
    code: str
    description: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class DepartmentListResponse(BaseModel):
    success: bool = True
    count: int
    departments: List[DepartmentResponse]


class DepartmentDetailResponse(BaseModel):
    success: bool = True
    department: DepartmentResponse


class ClubCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: ClubCategory = ClubCategory.OTHER
    description: Optional[str] = None

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Please provide club name')
        return v

    @field_validator('description')
    @classmethod
    def strip_description(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v


class ClubResponse(BaseModel):
    id: str
    name: str
    category: ClubCategory
    description: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ClubListResponse(BaseModel):
    success: bool = True
    count: int
    clubs: List[ClubResponse]


class ClubDetailResponse(BaseModel):
    success: bool = True
    club: ClubResponse
