"""Seed the administrative user from settings."""

import logging

from sqlalchemy.orm import Session

from rbac_admin.core.config import settings
from rbac_admin.core.security import hash_password
from rbac_admin.models.role import Role
from rbac_admin.models.user import User

logger = logging.getLogger("rbac_admin.seeds")


def seed_admin(db: Session) -> bool:
    """Create the admin user if not already present. Returns True if created."""
    admin_role = db.query(Role).filter(Role.name == settings.ADMIN_ROLE_NAME).first()
    if not admin_role:
        logger.warning("%s role not found. Run seed_roles first.", settings.ADMIN_ROLE_NAME)
        return False

    existing = db.query(User).filter(User.email == settings.ADMIN_EMAIL).first()
    if existing:
        logger.info("Admin '%s' already exists, skipping.", settings.ADMIN_EMAIL)
        return False

    admin = User(
        name=settings.ADMIN_NAME,
        email=settings.ADMIN_EMAIL,
        hashed_password=hash_password(settings.ADMIN_PASSWORD),
        is_active=True,
        role_id=admin_role.id,
    )
    db.add(admin)
    db.commit()
    logger.info("Created default admin user: %s", settings.ADMIN_EMAIL)
    return True
