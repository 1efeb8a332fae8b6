"""Roles API router."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rbac_admin.db.session import get_db
from rbac_admin.schemas.schemas import (
    RoleCreate, RoleUpdate, RoleOut, RoleMessage, MessageResponse,
)
from rbac_admin.services.role_service import role_service
from rbac_admin.core.permissions import ALL_PERMISSIONS, Permission
from rbac_admin.core.security import Actor, RequirePermission, get_current_actor

router = APIRouter(prefix="/roles", tags=["roles"])

require_manage_roles = RequirePermission(Permission.MANAGE_ROLES)


@router.get("", response_model=List[RoleOut])
def list_roles(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """List active roles, name ascending."""
    return role_service.list_roles(db)


@router.get("/permissions", response_model=List[str])
async def list_permissions(actor: Actor = Depends(get_current_actor)):
    """List the permission vocabulary."""
    return list(ALL_PERMISSIONS)


@router.get("/{role_id}", response_model=RoleOut)
def get_role(
    role_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return role_service.get_role(db, role_id)


@router.post("", response_model=RoleMessage, status_code=201)
def create_role(
    body: RoleCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_manage_roles),
):
    """Create a role (manage_roles)."""
    role = role_service.create_role(db, body.name, body.description, body.permissions)
    return RoleMessage(message="Role created successfully", role=RoleOut.model_validate(role))


@router.put("/{role_id}", response_model=RoleMessage)
def update_role(
    role_id: int,
    body: RoleUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_manage_roles),
):
    """Update a role's name, description, permissions or status (manage_roles)."""
    role = role_service.update_role(
        db, role_id, body.model_dump(exclude_unset=True), actor.user_id
    )
    return RoleMessage(message="Role updated successfully", role=RoleOut.model_validate(role))


@router.delete("/{role_id}", response_model=MessageResponse)
def delete_role(
    role_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_manage_roles),
):
    """Delete a role no user holds (manage_roles)."""
    role_service.delete_role(db, role_id)
    return MessageResponse(message="Role deleted successfully")
