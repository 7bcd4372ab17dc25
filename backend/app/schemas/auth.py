from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime

from app.models.user import UserRole, REGISTRABLE_ROLES
from app.schemas.common import DepartmentBrief, ClubBrief


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1, description="Name is required")
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.STUDENT
    department: Optional[str] = None
    club: Optional[str] = None

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Name is required')
        return v

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator('role')
    @classmethod
    def registrable_role(cls, v: UserRole) -> UserRole:
        if v not in REGISTRABLE_ROLES:
            raise ValueError('Invalid role')
        return v

    @field_validator('department', 'club')
    @classmethod
    def empty_reference_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, description="Password is required")

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    additional_roles: List[str] = []
    department: Optional[DepartmentBrief] = None
    club: Optional[ClubBrief] = None
    can_post: bool
    is_active: bool
    created_at: datetime

    @field_validator('additional_roles', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse


class MeResponse(BaseModel):
    success: bool = True
    user: UserResponse
