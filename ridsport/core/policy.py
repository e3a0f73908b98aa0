"""
core/policy.py
--------------
Capability checks: who may do what to which resource.

Every function here is pure. It receives the caller's role and id plus the
owner of the target resource and answers allow / deny, without touching the
database. Tenant isolation is NOT decided here; routes only call these after
the resource has been loaded through a tenant-scoped lookup.

Role model:
  - Admin:   elevated read scope, manages users and any lesson / booking.
  - Trainer: owns lessons and progress reports.
  - Rider:   owns bookings.
"""

from typing import Iterable, Optional

from ridsport.core.exceptions import ForbiddenError
from ridsport.models.enums import BookingStatus, UserRole

# Fields a user may change on their own profile.
SELF_EDITABLE_USER_FIELDS = frozenset({"name", "phone", "email"})


def can_create_lesson(role: UserRole) -> bool:
    return role in (UserRole.trainer, UserRole.admin)


def can_manage_lesson(role: UserRole, caller_id: str, trainer_id: str) -> bool:
    """Update / delete: the owning trainer or an admin."""
    if role == UserRole.admin:
        return True
    return role == UserRole.trainer and caller_id == trainer_id


def can_create_booking(role: UserRole) -> bool:
    return role == UserRole.rider


def can_view_bookings_of_rider(role: UserRole, caller_id: str, rider_id: str) -> bool:
    if role in (UserRole.trainer, UserRole.admin):
        return True
    return caller_id == rider_id


def can_view_bookings_of_lesson(role: UserRole) -> bool:
    return role in (UserRole.trainer, UserRole.admin)


def can_change_booking_status(
    role: UserRole,
    caller_id: str,
    rider_id: str,
    new_status: BookingStatus,
) -> bool:
    """Staff may set any status; a rider may only cancel their own booking."""
    if role in (UserRole.trainer, UserRole.admin):
        return True
    return (
        role == UserRole.rider
        and caller_id == rider_id
        and new_status == BookingStatus.cancelled
    )


def can_delete_booking(role: UserRole) -> bool:
    return role == UserRole.admin


def can_list_users(role: UserRole) -> bool:
    return role == UserRole.admin


def can_update_user(
    role: UserRole,
    caller_id: str,
    target_id: str,
    fields: Iterable[str],
) -> bool:
    """Admins may change anything; users may edit their own contact details."""
    if role == UserRole.admin:
        return True
    if caller_id != target_id:
        return False
    return set(fields) <= SELF_EDITABLE_USER_FIELDS


def can_create_progress_report(role: UserRole) -> bool:
    return role == UserRole.trainer


def can_view_progress_of_rider(role: UserRole, caller_id: str, rider_id: str) -> bool:
    if role in (UserRole.trainer, UserRole.admin):
        return True
    return caller_id == rider_id


def can_view_progress_of_trainer(role: UserRole, caller_id: str, trainer_id: str) -> bool:
    if role == UserRole.admin:
        return True
    return role == UserRole.trainer and caller_id == trainer_id


def can_update_tenant(
    role: UserRole,
    caller_tenant_id: str,
    tenant_id: str,
) -> bool:
    return role == UserRole.admin and caller_tenant_id == tenant_id


def ensure(allowed: bool, message: Optional[str] = None) -> None:
    """Raise ForbiddenError unless the check passed."""
    if not allowed:
        raise ForbiddenError(message or "You are not allowed to perform this action")
