"""
Campus Notice Board - Test Configuration and Fixtures
"""
import os
import tempfile
from typing import AsyncGenerator, Callable, Optional, List
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'test'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_FILE'] = ''
os.environ['UPLOAD_DIR'] = tempfile.mkdtemp(prefix='noticeboard-uploads-')

from app.main import app
from app.core.database import Base, get_db
from app.core.security import get_password_hash, create_access_token
from app.models.user import User, UserRole
from app.models.department import Department
from app.models.club import Club, ClubCategory
from app.models.notice import Notice, NoticeType

fake = Faker()

TEST_PASSWORD = 'testpassword123'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


def headers_for(user: User) -> dict:
    """Bearer headers carrying an access token for ``user``"""
    token_data = {
        'sub': str(user.id),
        'email': user.email,
        'role': user.role.value
    }
    token = create_access_token(token_data)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
async def department(db_session: AsyncSession) -> Department:
    dept = Department(name='Computer Engineering', code='COMP')
    db_session.add(dept)
    await db_session.commit()
    return dept


@pytest.fixture
async def other_department(db_session: AsyncSession) -> Department:
    dept = Department(name='Mechanical Engineering', code='MECH')
    db_session.add(dept)
    await db_session.commit()
    return dept


@pytest.fixture
async def club(db_session: AsyncSession) -> Club:
    c = Club(name='Coding Club', category=ClubCategory.TECHNICAL, description='Hackathons')
    db_session.add(c)
    await db_session.commit()
    return c


@pytest.fixture
async def other_club(db_session: AsyncSession) -> Club:
    c = Club(name='Music Club', category=ClubCategory.CULTURAL)
    db_session.add(c)
    await db_session.commit()
    return c


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable:
    """Factory creating users with the given role, affiliation and grants"""
    async def _make(
        role: UserRole = UserRole.STUDENT,
        email: Optional[str] = None,
        department: Optional[Department] = None,
        club: Optional[Club] = None,
        can_post: bool = False,
        additional_roles: Optional[List[str]] = None,
        is_active: bool = True,
    ) -> User:
        user = User(
            name=fake.name(),
            email=(email or fake.unique.email()).lower(),
            hashed_password=get_password_hash(TEST_PASSWORD),
            role=role,
            department_id=department.id if department else None,
            club_id=club.id if club else None,
            can_post=can_post,
            additional_roles=list(additional_roles or []),
            is_active=is_active,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make


@pytest.fixture
async def admin_user(make_user) -> User:
    return await make_user(role=UserRole.ADMIN, email='admin@vit.edu', can_post=True)


@pytest.fixture
async def faculty_user(make_user, department) -> User:
    return await make_user(
        role=UserRole.FACULTY,
        email='prof@vit.edu',
        department=department,
        can_post=True,
    )


@pytest.fixture
async def student_user(make_user, department) -> User:
    return await make_user(role=UserRole.STUDENT, department=department)


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return headers_for(admin_user)


@pytest.fixture
def faculty_headers(faculty_user: User) -> dict:
    return headers_for(faculty_user)


@pytest.fixture
def student_headers(student_user: User) -> dict:
    return headers_for(student_user)


@pytest.fixture
def make_notice(db_session: AsyncSession) -> Callable:
    """Factory inserting notices directly"""
    async def _make(
        posted_by: User,
        type: NoticeType = NoticeType.ACADEMIC,
        department: Optional[Department] = None,
        club: Optional[Club] = None,
        title: Optional[str] = None,
        is_pinned: bool = False,
        is_active: bool = True,
    ) -> Notice:
        notice = Notice(
            title=title or fake.sentence(nb_words=4),
            content=fake.paragraph(),
            type=type,
            department_id=department.id if department else None,
            club_id=club.id if club else None,
            posted_by_id=posted_by.id,
            is_pinned=is_pinned,
            is_active=is_active,
        )
        db_session.add(notice)
        await db_session.commit()
        await db_session.refresh(notice)
        return notice

    return _make


@pytest.fixture
def user_password() -> str:
    """Plain password of every user built by ``make_user``"""
    return TEST_PASSWORD


@pytest.fixture
def auth_headers_for() -> Callable[[User], dict]:
    return headers_for
