"""
Authorization rules for the notice board.

Every rule is a plain predicate over a user and (optionally) the record being
acted on. Primary role, additional roles, club affiliation and department
all feed into these checks:

- Posting requires the ``can_post`` flag, or the admin role.
- Editing and deleting a notice is limited to admins and the poster.
- Pinning is admin-only.
- Club heads review applications for, and manage members of, their own club.
- Students only see academic notices that are general or from their department.

The functions accept any object exposing the same attributes as the models,
so they are usable outside a database session.
"""
from typing import Iterable, Optional

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from app.models.user import UserRole, AdditionalRole
from app.models.notice import Notice, NoticeType


def _role_value(role) -> str:
    return role.value if hasattr(role, "value") else role


def has_role(user, *roles: UserRole) -> bool:
    """Primary role is one of ``roles``"""
    return _role_value(user.role) in {_role_value(r) for r in roles}


def is_admin(user) -> bool:
    return has_role(user, UserRole.ADMIN)


def is_student(user) -> bool:
    return has_role(user, UserRole.STUDENT)


def has_additional_role(user, role: AdditionalRole) -> bool:
    additional: Iterable[str] = user.additional_roles or []
    return role.value in additional


def is_club_head(user) -> bool:
    return has_additional_role(user, AdditionalRole.CLUB_HEAD)


def is_club_head_of(user, club_id: Optional[str]) -> bool:
    """Club head whose assigned club is ``club_id``"""
    if not club_id or not is_club_head(user):
        return False
    return user.club_id is not None and str(user.club_id) == str(club_id)


def can_post_notices(user) -> bool:
    return bool(user.can_post) or is_admin(user)


def can_modify_notice(user, notice) -> bool:
    """Edit and delete: admins, or whoever posted the notice"""
    return is_admin(user) or str(notice.posted_by_id) == str(user.id)


def can_pin_notice(user) -> bool:
    return is_admin(user)


def can_view_notice(user, notice) -> bool:
    """Students are limited to general academic notices and their own department's"""
    if not is_student(user):
        return True
    if _role_value(notice.type) != NoticeType.ACADEMIC.value:
        return True
    if notice.department_id is None:
        return True
    return user.department_id is not None and str(notice.department_id) == str(user.department_id)


def can_review_application(user, application) -> bool:
    return is_admin(user) or is_club_head_of(user, application.club_id)


def can_manage_club_members(user, club_id: Optional[str]) -> bool:
    return is_admin(user) or is_club_head_of(user, club_id)


def notice_visibility_clause(user, notice_type: Optional[NoticeType] = None) -> Optional[ColumnElement]:
    """
    SQL filter matching ``can_view_notice`` for list queries.

    Returns None when no restriction applies (non-students, or students
    asking only for club notices).
    """
    if not is_student(user) or notice_type == NoticeType.CLUB:
        return None

    visible_academic = and_(
        Notice.type == NoticeType.ACADEMIC,
        or_(
            Notice.department_id.is_(None),
            Notice.department_id == user.department_id,
        ),
    )

    if notice_type == NoticeType.ACADEMIC:
        return visible_academic

    return or_(Notice.type == NoticeType.CLUB, visible_academic)
