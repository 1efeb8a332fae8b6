"""Role model for RBAC."""

import json

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from rbac_admin.db.base import Base


class Role(Base):
    """Named bundle of permissions assigned to users."""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False, index=True)
    description = Column(String(255), nullable=False)
    permissions_json = Column(Text, nullable=False, default="[]")  # JSON list of permission strings
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def permissions(self) -> list[str]:
        return json.loads(self.permissions_json or "[]")

    @permissions.setter
    def permissions(self, value) -> None:
        self.permissions_json = json.dumps(list(value or []))

    def __repr__(self) -> str:
        return f"<Role id={self.id} name={self.name!r}>"
