"""Models package — import all models so they register on Base.metadata."""

from rbac_admin.models.role import Role
from rbac_admin.models.user import User

__all__ = ["Role", "User"]
