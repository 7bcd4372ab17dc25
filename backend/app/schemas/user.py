"""Schemas for admin user management and club membership"""
from pydantic import BaseModel, field_validator
from typing import List, Optional

from app.models.user import AdditionalRole
from app.schemas.auth import UserResponse


class PrivilegesUpdate(BaseModel):
    can_post: bool


class RoleUpdate(BaseModel):
    # Checked in the endpoint so an unknown role yields 400, not 422
    role: Optional[str] = None


class AdditionalRolesUpdate(BaseModel):
    additional_roles: List[AdditionalRole]
    club: Optional[str] = None

    @field_validator('additional_roles')
    @classmethod
    def dedupe(cls, v: List[AdditionalRole]) -> List[AdditionalRole]:
        seen = []
        for role in v:
            if role not in seen:
                seen.append(role)
        return seen

    @field_validator('club')
    @classmethod
    def empty_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class UserListResponse(BaseModel):
    success: bool = True
    count: int
    users: List[UserResponse]


class UserDetailResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    user: UserResponse
