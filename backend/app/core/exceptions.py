"""
Custom Exceptions for the Campus Notice Board
=============================================

Raise these from services and the permission layer; the exception handler
registered in ``app.main`` renders them as JSON with the matching status code.

Usage:
    from app.core.exceptions import NoticeNotFoundError, AuthorizationError

    if not notice:
        raise NoticeNotFoundError(notice_id)

    if not can_modify_notice(user, notice):
        raise AuthorizationError("Not authorized to edit this notice")
"""

from typing import Optional, Any, Dict, List


class NoticeBoardError(Exception):
    """Base exception for all notice board errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authorization Errors
# ============================================

class AuthorizationError(NoticeBoardError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(NoticeBoardError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class NoticeNotFoundError(ResourceNotFoundError):
    def __init__(self, notice_id: str):
        super().__init__("Notice", notice_id)


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class ClubNotFoundError(ResourceNotFoundError):
    def __init__(self, club_id: str):
        super().__init__("Club", club_id)


class ApplicationNotFoundError(ResourceNotFoundError):
    def __init__(self, application_id: str):
        super().__init__("Application", application_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(NoticeBoardError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class DuplicateResourceError(ValidationError):
    """Unique field already taken"""

    def __init__(self, resource_type: str, field: str):
        super().__init__(f"{resource_type} with this {field} already exists", field=field)
        self.code = "DUPLICATE_RESOURCE"


class InvalidFileTypeError(ValidationError):
    """File type not allowed"""

    def __init__(self, file_type: str, allowed_types: List[str]):
        super().__init__(
            f"File type '{file_type}' not allowed. Allowed: {', '.join(allowed_types)}"
        )
        self.code = "INVALID_FILE_TYPE"
        self.details = {"file_type": file_type, "allowed_types": allowed_types}


class FileTooLargeError(NoticeBoardError):
    """Upload exceeds MAX_UPLOAD_SIZE"""

    status_code = 413

    def __init__(self, size: int, max_size: int):
        super().__init__(
            f"File too large. Maximum size is {max_size // (1024 * 1024)}MB",
            code="FILE_TOO_LARGE",
            details={"size": size, "max_size": max_size}
        )


# ============================================
# Storage Errors
# ============================================

class StorageError(NoticeBoardError):
    """Storage operation failed"""

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: NoticeBoardError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "detail": error.message,
        "error": error.to_dict()
    }
