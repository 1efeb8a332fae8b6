"""Seed default roles into the database."""

import logging

from sqlalchemy.orm import Session

from rbac_admin.core.permissions import ALL_PERMISSIONS, Permission
from rbac_admin.models.role import Role

logger = logging.getLogger("rbac_admin.seeds")

DEFAULT_ROLES = [
    {
        "name": "Admin",
        "description": "Full system access",
        "permissions": list(ALL_PERMISSIONS),
    },
    {
        "name": "Developer",
        "description": "Development team member",
        "permissions": [Permission.CREATE.value, Permission.READ.value, Permission.UPDATE.value],
    },
    {
        "name": "Designer",
        "description": "Design team member",
        "permissions": [Permission.CREATE.value, Permission.READ.value, Permission.UPDATE.value],
    },
    {
        "name": "Tester",
        "description": "Quality assurance team member",
        "permissions": [Permission.READ.value, Permission.UPDATE.value],
    },
]


def seed_roles(db: Session) -> int:
    """Insert default roles if they don't already exist. Returns how many were created."""
    created = 0
    for role_data in DEFAULT_ROLES:
        existing = db.query(Role).filter(Role.name == role_data["name"]).first()
        if not existing:
            db.add(Role(**role_data))
            db.commit()
            created += 1
            logger.info("Created role: %s", role_data["name"])

    logger.info("Seeded roles (%d new, %d total defaults)", created, len(DEFAULT_ROLES))
    return created
