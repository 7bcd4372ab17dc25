# Pydantic schemas
from app.schemas.common import DepartmentBrief, ClubBrief, UserBrief, MessageResponse
from app.schemas.auth import (
    UserRegister,
    UserLogin,
    RefreshTokenRequest,
    UserResponse,
    AuthResponse,
    MeResponse,
)
from app.schemas.organization import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentListResponse,
    DepartmentDetailResponse,
    ClubCreate,
    ClubResponse,
    ClubListResponse,
    ClubDetailResponse,
)
from app.schemas.notice import (
    NoticeUpdate,
    NoticeResponse,
    NoticeListResponse,
    NoticeDetailResponse,
)
from app.schemas.user import (
    PrivilegesUpdate,
    RoleUpdate,
    AdditionalRolesUpdate,
    UserListResponse,
    UserDetailResponse,
)
from app.schemas.club_application import (
    ApplicationCreate,
    ApplicationReview,
    ApplicationResponse,
    ApplicationListResponse,
    ClubHeadApplicationsResponse,
    ApplicationDetailResponse,
)
