"""Precondition checks run before users and roles are mutated.

Every guard is a pure read. On failure it raises before anything is written,
so a rejected request leaves storage untouched. The unique constraints on
``roles.name`` and ``users.email`` stay authoritative under concurrency;
these checks only produce the friendly error first.
"""

from typing import Optional

from rbac_admin.core.exceptions import (
    DuplicateEmailError,
    DuplicateNameError,
    InvalidRoleError,
    LockoutError,
    ResourceNotFoundError,
    RoleInUseError,
    SelfDeletionError,
    ValidationError,
)
from rbac_admin.core.permissions import ADMIN_PERMISSIONS, Permission
from rbac_admin.core.security import MAX_PASSWORD_BYTES, password_too_long
from rbac_admin.models.role import Role
from rbac_admin.models.user import User
from rbac_admin.repositories import RoleRepository, UserRepository


def require_found(entity, kind: str, entity_id):
    """Return ``entity`` or raise ResourceNotFoundError."""
    if entity is None:
        raise ResourceNotFoundError(f"{kind} {entity_id} not found")
    return entity


def ensure_role_name_available(
    roles: RoleRepository, name: str, exclude_id: Optional[int] = None
) -> None:
    existing = roles.find_by_name(name)
    if existing is not None and existing.id != exclude_id:
        raise DuplicateNameError(f"Role '{name}' already exists")


def ensure_role_exists(roles: RoleRepository, role_id: int) -> Role:
    role = roles.find_by_id(role_id)
    if role is None:
        raise InvalidRoleError("Invalid role")
    return role


def ensure_email_available(
    users: UserRepository, email: str, exclude_id: Optional[int] = None
) -> None:
    existing = users.find_by_email(email)
    if existing is not None and existing.id != exclude_id:
        raise DuplicateEmailError(f"User with email {email} already exists")


def ensure_not_self(target_user_id: int, acting_user_id: int) -> None:
    if target_user_id == acting_user_id:
        raise SelfDeletionError("Cannot delete your own account")


def ensure_role_not_in_use(users: UserRepository, role_id: int) -> None:
    count = users.count_by_role(role_id)
    if count > 0:
        raise RoleInUseError(
            f"Cannot delete role that is assigned to {count} user(s)"
        )


def ensure_password_hashable(password: str) -> None:
    if password_too_long(password):
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        )


def ensure_user_keeps_access(
    user: User, changes: dict, new_role: Optional[Role], acting_user_id: Optional[int]
) -> None:
    """Refuse edits through which the acting user would lose user management."""
    if acting_user_id is None or user.id != acting_user_id:
        return
    if changes.get("is_active") is False:
        raise LockoutError("Cannot deactivate your own account")
    if new_role is not None and (
        not new_role.is_active
        or Permission.MANAGE_USERS.value not in new_role.permissions
    ):
        raise LockoutError("Cannot move yourself to a role without manage_users")


def ensure_role_keeps_access(
    role: Role, changes: dict, acting_user: Optional[User]
) -> None:
    """Refuse edits to the acting user's own role that revoke their admin rights."""
    if acting_user is None or acting_user.role_id != role.id:
        return
    if changes.get("is_active") is False:
        raise LockoutError("Cannot deactivate your own role")
    if "permissions" in changes:
        dropped = ADMIN_PERMISSIONS.intersection(role.permissions) - set(changes["permissions"])
        if dropped:
            raise LockoutError(
                f"Cannot remove {', '.join(sorted(dropped))} from your own role"
            )
