# Authentication module

from app.modules.auth.dependencies import (
    get_current_user,
    get_current_admin,
    require_roles,
    require_can_post,
)

from app.modules.auth import permissions

__all__ = [
    "get_current_user",
    "get_current_admin",
    "require_roles",
    "require_can_post",
    "permissions",
]
