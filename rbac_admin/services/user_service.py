"""User service — admin-side user management."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from rbac_admin.core.security import hash_password
from rbac_admin.models.user import User
from rbac_admin.repositories import RoleRepository, UserRepository
from rbac_admin.services import guards

logger = logging.getLogger("rbac_admin.users")

USER_FIELDS = ("name", "email", "role_id", "is_active")


class UserService:
    """Handles user listing and mutation."""

    @staticmethod
    def list_users(db: Session) -> List[User]:
        """List all users, newest first, with their role loaded."""
        return UserRepository(db).list_all()

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = UserRepository(db).find_by_id(user_id)
        return guards.require_found(user, "User", user_id)

    @staticmethod
    def create_user(
        db: Session,
        name: str,
        email: str,
        password: str,
        role_id: int,
    ) -> User:
        """Create a new user with a hashed password.

        Raises:
            DuplicateEmailError: If the email is already registered.
            InvalidRoleError: If ``role_id`` does not resolve to a role.
            ValidationError: If the password is longer than bcrypt accepts.
        """
        guards.ensure_password_hashable(password)
        users = UserRepository(db)
        guards.ensure_email_available(users, email)
        guards.ensure_role_exists(RoleRepository(db), role_id)

        user = users.create(
            User(
                name=name,
                email=email,
                hashed_password=hash_password(password),
                role_id=role_id,
                is_active=True,
            )
        )
        logger.info("Created user %s (id=%s)", user.email, user.id)
        return user

    @staticmethod
    def update_user(
        db: Session,
        user_id: int,
        fields: Dict[str, Any],
        acting_user_id: Optional[int] = None,
    ) -> User:
        """Apply a partial update to a user.

        Raises:
            ResourceNotFoundError: If the user does not exist.
            InvalidRoleError: If a new ``role_id`` does not resolve to a role.
            DuplicateEmailError: If changing onto another user's email.
            LockoutError: If the acting user would lose their own access.
        """
        users = UserRepository(db)
        user = guards.require_found(users.find_by_id(user_id), "User", user_id)

        changes = {k: v for k, v in fields.items() if k in USER_FIELDS and v is not None}
        new_role = None
        if "role_id" in changes and changes["role_id"] != user.role_id:
            new_role = guards.ensure_role_exists(RoleRepository(db), changes["role_id"])
        guards.ensure_user_keeps_access(user, changes, new_role, acting_user_id)
        if "email" in changes and changes["email"] != user.email:
            guards.ensure_email_available(users, changes["email"], exclude_id=user.id)

        user = users.update(user, changes)
        logger.info("Updated user %s (id=%s): %s", user.email, user.id, sorted(changes))
        return user

    @staticmethod
    def delete_user(db: Session, user_id: int, acting_user_id: int) -> None:
        """Delete a user other than the acting one.

        Raises:
            SelfDeletionError: If ``user_id`` is the acting user.
            ResourceNotFoundError: If the user does not exist.
        """
        guards.ensure_not_self(user_id, acting_user_id)
        users = UserRepository(db)
        user = guards.require_found(users.find_by_id(user_id), "User", user_id)

        users.delete(user)
        logger.info("User %s deleted user %s (id=%s)", acting_user_id, user.email, user_id)


user_service = UserService()
