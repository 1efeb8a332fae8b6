from unittest.mock import patch

import pytest

from rbac_admin.core.exceptions import (
    DuplicateNameError,
    InvalidPermissionError,
    LockoutError,
    ResourceNotFoundError,
    RoleInUseError,
    ValidationError,
)
from rbac_admin.models import Role
from rbac_admin.repositories import UserRepository
from rbac_admin.services.role_service import role_service
from rbac_admin.services.user_service import user_service
from conftest import role_id_by_name


class TestCreateRole:
    def test_create_role(self, db):
        role = role_service.create_role(db, "  QA  ", "Quality", ["read", "update", "read"])
        assert role.id is not None
        assert role.name == "QA"
        assert role.permissions == ["read", "update"]
        assert role.is_active is True

    def test_empty_permissions_allowed(self, db):
        role = role_service.create_role(db, "Guest", "No rights", [])
        assert role.permissions == []

    def test_blank_name_rejected(self, db):
        with pytest.raises(ValidationError):
            role_service.create_role(db, "   ", "Blank", [])

    def test_unknown_permission_rejected(self, db):
        with pytest.raises(InvalidPermissionError):
            role_service.create_role(db, "QA", "Quality", ["read", "sudo"])
        assert db.query(Role).count() == 0

    def test_duplicate_name_leaves_existing_unchanged(self, seeded_db):
        admin = seeded_db.query(Role).filter(Role.name == "Admin").one()
        before = (admin.description, admin.permissions)

        with pytest.raises(DuplicateNameError):
            role_service.create_role(seeded_db, "Admin", "Hijack", ["read"])

        seeded_db.expire_all()
        admin = seeded_db.query(Role).filter(Role.name == "Admin").one()
        assert (admin.description, admin.permissions) == before
        assert seeded_db.query(Role).filter(Role.name == "Admin").count() == 1

    def test_name_match_is_case_sensitive(self, seeded_db):
        role = role_service.create_role(seeded_db, "admin", "Lowercase twin", ["read"])
        assert role.name == "admin"

    def test_unique_constraint_backs_up_the_guard(self, db):
        """Two creations that both pass the guard still yield one success."""
        role_service.create_role(db, "QA", "first", ["read"])
        with patch("rbac_admin.services.guards.ensure_role_name_available"):
            with pytest.raises(DuplicateNameError):
                role_service.create_role(db, "QA", "second", ["read"])
        assert db.query(Role).filter(Role.name == "QA").count() == 1


class TestListAndUpdateRoles:
    def test_list_roles_active_only_sorted(self, seeded_db):
        role_service.update_role(seeded_db, role_id_by_name(seeded_db, "Designer"), {"is_active": False})
        names = [r.name for r in role_service.list_roles(seeded_db)]
        assert names == ["Admin", "Developer", "Tester"]

    def test_update_fields(self, seeded_db):
        role_id = role_id_by_name(seeded_db, "Tester")
        role = role_service.update_role(
            seeded_db, role_id, {"description": "QA", "permissions": ["delete", "read"]}
        )
        assert role.description == "QA"
        assert role.permissions == ["read", "delete"]
        assert role.name == "Tester"

    def test_update_ignores_unknown_and_none_fields(self, seeded_db):
        role_id = role_id_by_name(seeded_db, "Tester")
        role = role_service.update_role(seeded_db, role_id, {"name": None, "id": 99})
        assert role.id == role_id
        assert role.name == "Tester"

    def test_update_rejects_unknown_permission(self, seeded_db):
        with pytest.raises(InvalidPermissionError):
            role_service.update_role(seeded_db, role_id_by_name(seeded_db, "Tester"), {"permissions": ["root"]})

    def test_rename_onto_existing_name(self, seeded_db):
        with pytest.raises(DuplicateNameError):
            role_service.update_role(seeded_db, role_id_by_name(seeded_db, "Tester"), {"name": "Admin"})

    def test_update_missing_role(self, db):
        with pytest.raises(ResourceNotFoundError):
            role_service.update_role(db, 404, {"description": "x"})


class TestOwnRoleLockout:
    @pytest.fixture
    def admin_id(self, seeded_db) -> int:
        return UserRepository(seeded_db).find_by_email("admin@example.com").id

    def test_cannot_strip_manage_roles_from_own_role(self, seeded_db, admin_id):
        role_id = role_id_by_name(seeded_db, "Admin")
        with pytest.raises(LockoutError):
            role_service.update_role(seeded_db, role_id, {"permissions": ["read", "manage_users"]}, admin_id)
        seeded_db.expire_all()
        assert "manage_roles" in role_service.get_role(seeded_db, role_id).permissions

    def test_cannot_deactivate_own_role(self, seeded_db, admin_id):
        role_id = role_id_by_name(seeded_db, "Admin")
        with pytest.raises(LockoutError):
            role_service.update_role(seeded_db, role_id, {"is_active": False}, admin_id)

    def test_may_edit_other_roles_freely(self, seeded_db, admin_id):
        role_id = role_id_by_name(seeded_db, "Tester")
        role = role_service.update_role(seeded_db, role_id, {"is_active": False, "permissions": []}, admin_id)
        assert role.is_active is False


class TestDeleteRole:
    def test_delete_unused_role(self, seeded_db):
        role_id = role_id_by_name(seeded_db, "Designer")
        role_service.delete_role(seeded_db, role_id)
        with pytest.raises(ResourceNotFoundError):
            role_service.get_role(seeded_db, role_id)

    def test_delete_missing_role(self, db):
        with pytest.raises(ResourceNotFoundError):
            role_service.delete_role(db, 404)

    def test_delete_blocked_until_users_move(self, seeded_db):
        tester_id = role_id_by_name(seeded_db, "Tester")
        developer_id = role_id_by_name(seeded_db, "Developer")
        user = user_service.create_user(seeded_db, "Tom", "tom@x.com", "secret1", tester_id)

        with pytest.raises(RoleInUseError):
            role_service.delete_role(seeded_db, tester_id)
        assert role_service.get_role(seeded_db, tester_id).name == "Tester"

        user_service.update_user(seeded_db, user.id, {"role_id": developer_id})
        role_service.delete_role(seeded_db, tester_id)
        with pytest.raises(ResourceNotFoundError):
            role_service.get_role(seeded_db, tester_id)
