from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, func

from app.core.database import get_db
from app.core.exceptions import DuplicateResourceError
from app.core.logging_config import logger
from app.models.user import User
from app.models.department import Department
from app.schemas.organization import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentListResponse,
    DepartmentDetailResponse,
)
from app.modules.auth.dependencies import get_current_admin


router = APIRouter()


@router.get("", response_model=DepartmentListResponse)
async def list_departments(db: AsyncSession = Depends(get_db)):
    """All departments sorted by name (public)"""
    result = await db.execute(select(Department).order_by(Department.name))
    departments = result.scalars().all()

    return DepartmentListResponse(
        count=len(departments),
        departments=[DepartmentResponse.model_validate(d) for d in departments]
    )


@router.post("", response_model=DepartmentDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_department(
    department_data: DepartmentCreate,
    current_user: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Create a department (admin only)"""
    result = await db.execute(
        select(Department).where(
            or_(
                func.lower(Department.name) == department_data.name.lower(),
                Department.code == department_data.code,
            )
        )
    )
    existing = result.scalars().first()
    if existing:
        field = "code" if existing.code == department_data.code else "name"
        raise DuplicateResourceError("Department", field)

    department = Department(
        name=department_data.name,
        code=department_data.code,
        description=department_data.description,
    )
    db.add(department)
    await db.commit()
    await db.refresh(department)

    logger.info(f"[Departments] {current_user.email} created department {department.code}")

    return DepartmentDetailResponse(department=DepartmentResponse.model_validate(department))
