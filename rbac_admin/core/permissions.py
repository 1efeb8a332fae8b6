"""Permission vocabulary and the authorization decision."""

import enum
from typing import Iterable, List, Optional

from rbac_admin.core.exceptions import InvalidPermissionError


class Permission(str, enum.Enum):
    """Closed set of capability tokens a role can carry."""
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE_USERS = "manage_users"
    MANAGE_ROLES = "manage_roles"


ALL_PERMISSIONS = tuple(p.value for p in Permission)

# Permissions that make a role administrative (not self-assignable)
ADMIN_PERMISSIONS = frozenset({Permission.MANAGE_USERS.value, Permission.MANAGE_ROLES.value})


class Decision(enum.Enum):
    ALLOW = "allow"
    DENY = "deny"


def _token(value) -> str:
    return value.value if isinstance(value, Permission) else value


def is_valid_permission(token) -> bool:
    """Return True if ``token`` belongs to the permission vocabulary."""
    return _token(token) in ALL_PERMISSIONS


def normalize_permissions(tokens: Optional[Iterable]) -> List[str]:
    """Validate permission tokens and return them de-duplicated in vocabulary order.

    Raises:
        InvalidPermissionError: If any token is not a known permission.
    """
    requested = {_token(t) for t in (tokens or [])}
    invalid = sorted(str(t) for t in requested if t not in ALL_PERMISSIONS)
    if invalid:
        raise InvalidPermissionError(f"Invalid permission(s): {', '.join(invalid)}")
    return [p for p in ALL_PERMISSIONS if p in requested]


def authorize(actor_permissions: Optional[Iterable], required: Iterable) -> Decision:
    """Decide whether an actor may perform an action.

    Access is granted when the actor holds ANY of the required permissions.
    ``actor_permissions`` of ``None`` means no authenticated actor and is
    always denied. Storage is never consulted.
    """
    if actor_permissions is None:
        return Decision.DENY
    held = {_token(p) for p in actor_permissions}
    wanted = {_token(p) for p in required}
    if held.isdisjoint(wanted):
        return Decision.DENY
    return Decision.ALLOW
