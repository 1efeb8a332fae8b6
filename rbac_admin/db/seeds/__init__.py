"""Idempotent bootstrap of baseline roles and the admin user."""

import logging

from sqlalchemy.orm import Session

from rbac_admin.db.seeds.seed_admin import seed_admin
from rbac_admin.db.seeds.seed_roles import DEFAULT_ROLES, seed_roles

logger = logging.getLogger("rbac_admin.seeds")

__all__ = ["DEFAULT_ROLES", "seed_admin", "seed_defaults", "seed_roles"]


def seed_defaults(db: Session) -> None:
    """Run every seed step; a failing step is logged and the next one still runs.

    Each step checks for existing rows first, so a partially seeded database
    is completed on the next start.
    """
    for step in (seed_roles, seed_admin):
        try:
            step(db)
        except Exception:
            db.rollback()
            logger.exception("Seed step %s failed", step.__name__)
