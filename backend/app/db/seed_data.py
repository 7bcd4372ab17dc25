"""
Database Seed Data Module

Default departments, clubs and an admin account. Seeding is idempotent:
records that already exist (matched by their unique name, code or email)
are left untouched.

Run with: python -m app.db.seed_data
"""
import asyncio
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import AsyncSessionLocal, init_db
from app.core.security import get_password_hash
from app.models.user import User, UserRole
from app.models.department import Department
from app.models.club import Club, ClubCategory
from app.models.notice import Notice
from app.models.club_application import ClubApplication


# ==================== Sample Data Constants ====================

DEFAULT_DEPARTMENTS = [
    {"name": "Computer Engineering", "code": "COMP", "description": "Department of Computer Engineering"},
    {"name": "Information Technology", "code": "IT", "description": "Department of Information Technology"},
    {"name": "Electronics and Telecommunication", "code": "ENTC", "description": "Department of Electronics and Telecommunication"},
    {"name": "Mechanical Engineering", "code": "MECH", "description": "Department of Mechanical Engineering"},
    {"name": "Civil Engineering", "code": "CIVIL", "description": "Department of Civil Engineering"},
]

DEFAULT_CLUBS = [
    {"name": "Coding Club", "category": ClubCategory.TECHNICAL, "description": "Competitive programming and hackathons"},
    {"name": "Robotics Club", "category": ClubCategory.TECHNICAL, "description": "Build and race robots"},
    {"name": "Music Club", "category": ClubCategory.CULTURAL, "description": "Bands, choirs and open mics"},
    {"name": "Drama Club", "category": ClubCategory.CULTURAL, "description": "Street plays and stage productions"},
    {"name": "Sports Club", "category": ClubCategory.SPORTS, "description": "Inter-college tournaments"},
    {"name": "NSS", "category": ClubCategory.SOCIAL, "description": "National Service Scheme volunteering"},
]


async def seed_departments(db: AsyncSession) -> List[Department]:
    """Create default departments"""
    result = await db.execute(select(Department.code))
    existing = set(result.scalars().all())

    created = []
    for data in DEFAULT_DEPARTMENTS:
        if data["code"] in existing:
            continue
        department = Department(**data)
        db.add(department)
        created.append(department)

    await db.flush()
    print(f"Created {len(created)} departments")
    return created


async def seed_clubs(db: AsyncSession) -> List[Club]:
    """Create default clubs"""
    result = await db.execute(select(Club.name))
    existing = set(result.scalars().all())

    created = []
    for data in DEFAULT_CLUBS:
        if data["name"] in existing:
            continue
        club = Club(**data)
        db.add(club)
        created.append(club)

    await db.flush()
    print(f"Created {len(created)} clubs")
    return created


async def seed_admin(db: AsyncSession) -> User:
    """Create the admin account from SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD"""
    email = settings.SEED_ADMIN_EMAIL.lower()
    result = await db.execute(select(User).where(User.email == email))
    admin = result.scalar_one_or_none()

    if admin:
        print(f"Admin {email} already exists")
        return admin

    admin = User(
        name="Administrator",
        email=email,
        hashed_password=get_password_hash(settings.SEED_ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        additional_roles=[],
        can_post=True,
    )
    db.add(admin)
    await db.flush()
    print(f"Created admin {email}")
    return admin


async def seed_all():
    """Seed all default data"""
    print("=" * 50)
    print("Starting database seeding...")
    print("=" * 50)

    await init_db()

    async with AsyncSessionLocal() as db:
        try:
            await seed_departments(db)
            await seed_clubs(db)
            await seed_admin(db)

            await db.commit()
            print("=" * 50)
            print("Database seeding completed successfully!")
            print("=" * 50)

        except Exception as e:
            await db.rollback()
            print(f"Error seeding database: {e}")
            raise


async def clear_all():
    """Clear all data from database"""
    print("Clearing all data...")
    async with AsyncSessionLocal() as db:
        # Delete in reverse order of dependencies
        await db.execute(delete(ClubApplication))
        await db.execute(delete(Notice))
        await db.execute(delete(User))
        await db.execute(delete(Club))
        await db.execute(delete(Department))
        await db.commit()
        print("All data cleared!")


def main():
    """Console entry point: ``noticeboard-seed [clear]``"""
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "clear":
        asyncio.run(clear_all())
    else:
        asyncio.run(seed_all())


if __name__ == "__main__":
    main()
