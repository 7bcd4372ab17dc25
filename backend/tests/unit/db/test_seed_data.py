"""
Tests for default data seeding
"""
import pytest
from sqlalchemy import select, func

from app.core.config import settings
from app.core.security import verify_password
from app.db.seed_data import (
    seed_departments,
    seed_clubs,
    seed_admin,
    DEFAULT_DEPARTMENTS,
    DEFAULT_CLUBS,
)
from app.models.department import Department
from app.models.club import Club
from app.models.user import UserRole


@pytest.mark.asyncio
async def test_seed_departments_idempotent(db_session):
    first = await seed_departments(db_session)
    second = await seed_departments(db_session)

    count = await db_session.scalar(select(func.count(Department.id)))
    assert len(first) == len(DEFAULT_DEPARTMENTS)
    assert second == []
    assert count == len(DEFAULT_DEPARTMENTS)


@pytest.mark.asyncio
async def test_seed_clubs_skips_existing(db_session, club):
    created = await seed_clubs(db_session)

    count = await db_session.scalar(select(func.count(Club.id)))
    assert "Coding Club" not in {c.name for c in created}
    assert count == len(DEFAULT_CLUBS)


@pytest.mark.asyncio
async def test_seed_admin(db_session):
    admin = await seed_admin(db_session)
    again = await seed_admin(db_session)

    assert admin.id == again.id
    assert admin.role == UserRole.ADMIN
    assert admin.can_post is True
    assert verify_password(settings.SEED_ADMIN_PASSWORD, admin.hashed_password)
