from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Callable, Optional

from app.core.database import get_db
from app.core.security import decode_token
from app.core.logging_config import logger, set_user_id
from app.models.user import User, UserRole
from app.modules.auth.permissions import has_role, can_post_notices

# auto_error=False so a missing header is a 401 like any other bad credential
security = HTTPBearer(auto_error=False)

NOT_AUTHORIZED = "Not authorized to access this route"


def _unauthorized(detail: str = NOT_AUTHORIZED) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    if credentials is None or not credentials.credentials:
        raise _unauthorized()

    payload = decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise _unauthorized("Invalid token type")

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Invalid token payload")

    result = await db.execute(
        select(User).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()

    if not user:
        raise _unauthorized("User not found")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    request.state.user_id = str(user.id)
    set_user_id(str(user.id))
    return user


def require_roles(*roles: UserRole) -> Callable:
    """
    Dependency factory restricting a route to the given primary roles.

    Usage:
        @router.post("", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """
    allowed = ", ".join(r.value for r in roles)

    async def checker(current_user: User = Depends(get_current_user)) -> User:
        if not has_role(current_user, *roles):
            logger.log_permission_denied(
                f"role gate [{allowed}]",
                user_id=str(current_user.id),
                role=current_user.role.value,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User role {current_user.role.value} is not authorized to access this route"
            )
        return current_user

    return checker


get_current_admin = require_roles(UserRole.ADMIN)


async def require_can_post(
    current_user: User = Depends(get_current_user)
) -> User:
    """Users flagged can_post, or admins"""
    if not can_post_notices(current_user):
        logger.log_permission_denied(
            "post notices",
            user_id=str(current_user.id),
            role=current_user.role.value,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to post notices"
        )
    return current_user
