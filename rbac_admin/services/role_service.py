"""Role service — CRUD for roles behind the lifecycle guards."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from rbac_admin.core.exceptions import ValidationError
from rbac_admin.core.permissions import normalize_permissions
from rbac_admin.models.role import Role
from rbac_admin.repositories import RoleRepository, UserRepository
from rbac_admin.services import guards

logger = logging.getLogger("rbac_admin.roles")

ROLE_FIELDS = ("name", "description", "permissions", "is_active")


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Role name is required")
    return name


class RoleService:
    """Handles role listing and mutation."""

    @staticmethod
    def list_roles(db: Session) -> List[Role]:
        """List active roles ordered by name."""
        return RoleRepository(db).list_active()

    @staticmethod
    def get_role(db: Session, role_id: int) -> Role:
        role = RoleRepository(db).find_by_id(role_id)
        return guards.require_found(role, "Role", role_id)

    @staticmethod
    def create_role(
        db: Session,
        name: str,
        description: str,
        permissions: Optional[List[str]] = None,
    ) -> Role:
        """Create a new role.

        Raises:
            InvalidPermissionError: If a permission is outside the vocabulary.
            DuplicateNameError: If a role with the same name exists.
        """
        roles = RoleRepository(db)
        name = _clean_name(name)
        perms = normalize_permissions(permissions)
        guards.ensure_role_name_available(roles, name)

        role = roles.create(
            Role(name=name, description=description, permissions=perms, is_active=True)
        )
        logger.info("Created role %s (id=%s)", role.name, role.id)
        return role

    @staticmethod
    def update_role(
        db: Session,
        role_id: int,
        fields: Dict[str, Any],
        acting_user_id: Optional[int] = None,
    ) -> Role:
        """Apply a partial update to a role.

        Raises:
            ResourceNotFoundError: If the role does not exist.
            InvalidPermissionError: If a permission is outside the vocabulary.
            DuplicateNameError: If renaming onto another role's name.
            LockoutError: If the acting user would lose admin rights through their own role.
        """
        roles = RoleRepository(db)
        role = guards.require_found(roles.find_by_id(role_id), "Role", role_id)

        changes = {k: v for k, v in fields.items() if k in ROLE_FIELDS and v is not None}
        if "name" in changes:
            changes["name"] = _clean_name(changes["name"])
        if "permissions" in changes:
            changes["permissions"] = normalize_permissions(changes["permissions"])
        if "name" in changes and changes["name"] != role.name:
            guards.ensure_role_name_available(roles, changes["name"], exclude_id=role.id)
        if acting_user_id is not None:
            acting_user = UserRepository(db).find_by_id(acting_user_id)
            guards.ensure_role_keeps_access(role, changes, acting_user)

        role = roles.update(role, changes)
        logger.info("Updated role %s (id=%s): %s", role.name, role.id, sorted(changes))
        return role

    @staticmethod
    def delete_role(db: Session, role_id: int) -> None:
        """Delete a role that no user references.

        Raises:
            ResourceNotFoundError: If the role does not exist.
            RoleInUseError: If any user still holds the role.
        """
        roles = RoleRepository(db)
        role = guards.require_found(roles.find_by_id(role_id), "Role", role_id)
        guards.ensure_role_not_in_use(UserRepository(db), role.id)

        roles.delete(role)
        logger.info("Deleted role %s (id=%s)", role.name, role_id)


role_service = RoleService()
