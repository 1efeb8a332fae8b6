from rbac_admin.repositories.role_repository import RoleRepository
from rbac_admin.repositories.user_repository import UserRepository

__all__ = ["RoleRepository", "UserRepository"]
