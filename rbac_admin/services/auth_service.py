"""Auth service — login, self-registration, current user profile."""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List

from sqlalchemy.orm import Session

from rbac_admin.core.config import settings
from rbac_admin.core.exceptions import (
    AuthenticationError, AuthorizationError, InvalidRoleError,
)
from rbac_admin.core.permissions import ADMIN_PERMISSIONS
from rbac_admin.core.security import verify_password, create_access_token
from rbac_admin.models.user import User
from rbac_admin.repositories import RoleRepository, UserRepository
from rbac_admin.services import guards
from rbac_admin.services.user_service import user_service

logger = logging.getLogger("rbac_admin.auth")


def resolve_permissions(user: User) -> List[str]:
    """Effective permission set of a user; an inactive role grants nothing."""
    if user.role is None or not user.role.is_active:
        return []
    return user.role.permissions


def user_summary(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role.name if user.role else None,
        "permissions": resolve_permissions(user),
    }


class AuthService:
    """Handles authentication and self-registration."""

    @staticmethod
    def issue_token(user: User) -> Dict[str, Any]:
        """Create an access token carrying the user's permission snapshot."""
        summary = user_summary(user)
        token_data = {
            "sub": str(user.id),
            "email": user.email,
            "role": summary["role"],
            "permissions": summary["permissions"],
        }
        return {
            "access_token": create_access_token(token_data),
            "token_type": "bearer",
            "user": summary,
        }

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Dict[str, Any]:
        """Authenticate user and return a JWT access token.

        Raises:
            AuthenticationError: If credentials are invalid.
        """
        users = UserRepository(db)
        user = users.find_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            logger.info("Failed login for %s", email)
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        user = users.update(user, {"last_login_at": datetime.now(timezone.utc)})
        return AuthService.issue_token(user)

    @staticmethod
    def register(
        db: Session,
        name: str,
        email: str,
        password: str,
        role_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Register a new user under a non-administrative role and log them in.

        Raises:
            AuthorizationError: If self-registration is disabled.
            DuplicateEmailError: If the email is already registered.
            InvalidRoleError: If the role is missing, inactive or administrative.
        """
        if not settings.ALLOW_REGISTRATION:
            raise AuthorizationError("Registration is disabled")

        role_name = role_name or settings.DEFAULT_ROLE_NAME
        role = RoleRepository(db).find_by_name(role_name)
        if role is None or not role.is_active:
            raise InvalidRoleError("Invalid role")
        if ADMIN_PERMISSIONS.intersection(role.permissions):
            raise InvalidRoleError(f"Role '{role_name}' cannot be self-assigned")

        user = user_service.create_user(db, name, email, password, role.id)
        logger.info("Registered user %s with role %s", user.email, role.name)
        return AuthService.issue_token(user)

    @staticmethod
    def get_profile(db: Session, user_id: int) -> Dict[str, Any]:
        """Current user with role and live permissions."""
        user = guards.require_found(UserRepository(db).find_by_id(user_id), "User", user_id)
        return user_summary(user)


auth_service = AuthService()
