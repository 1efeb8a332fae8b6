from typing import Any, Dict, List, Optional

from rbac_admin.core.exceptions import DuplicateNameError
from rbac_admin.models.role import Role
from rbac_admin.repositories.base import SqlalchemyRepository


class RoleRepository(SqlalchemyRepository):
    conflict_error = DuplicateNameError
    conflict_message = "Role already exists"

    def find_by_id(self, role_id: int) -> Optional[Role]:
        return self.db.query(Role).filter(Role.id == role_id).first()

    def find_by_name(self, name: str) -> Optional[Role]:
        return self.db.query(Role).filter(Role.name == name).first()

    def list_active(self) -> List[Role]:
        return (
            self.db.query(Role)
            .filter(Role.is_active.is_(True))
            .order_by(Role.name.asc())
            .all()
        )

    def create(self, role_model: Role) -> Role:
        self.db.add(role_model)
        self._commit(role_model)
        return role_model

    def update(self, role: Role, fields: Dict[str, Any]) -> Role:
        for key, value in fields.items():
            setattr(role, key, value)
        self._commit(role)
        return role

    def delete(self, role: Role) -> bool:
        return self._delete(role)
