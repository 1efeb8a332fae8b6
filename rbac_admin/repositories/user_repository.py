from typing import Any, Dict, List, Optional

from rbac_admin.core.exceptions import DuplicateEmailError
from rbac_admin.models.user import User
from rbac_admin.repositories.base import SqlalchemyRepository


class UserRepository(SqlalchemyRepository):
    conflict_error = DuplicateEmailError
    conflict_message = "User already exists"

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def count_by_role(self, role_id: int) -> int:
        return self.db.query(User).filter(User.role_id == role_id).count()

    def list_all(self) -> List[User]:
        return (
            self.db.query(User)
            .order_by(User.created_at.desc(), User.id.desc())
            .all()
        )

    def create(self, user_model: User) -> User:
        self.db.add(user_model)
        self._commit(user_model)
        return user_model

    def update(self, user: User, fields: Dict[str, Any]) -> User:
        for key, value in fields.items():
            setattr(user, key, value)
        self._commit(user)
        return user

    def delete(self, user: User) -> bool:
        return self._delete(user)
