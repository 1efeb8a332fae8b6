"""Users API router (manage_users only)."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rbac_admin.db.session import get_db
from rbac_admin.schemas.schemas import (
    UserCreate, UserUpdate, UserOut, UserMessage, MessageResponse,
)
from rbac_admin.services.user_service import user_service
from rbac_admin.core.permissions import Permission
from rbac_admin.core.security import Actor, RequirePermission

router = APIRouter(prefix="/users", tags=["users"])

require_manage_users = RequirePermission(Permission.MANAGE_USERS)


@router.get("", response_model=List[UserOut])
def list_users(
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_manage_users),
):
    """List all users, newest first."""
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_manage_users),
):
    return user_service.get_user(db, user_id)


@router.post("", response_model=UserMessage, status_code=201)
def create_user(
    body: UserCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_manage_users),
):
    user = user_service.create_user(db, body.name, body.email, body.password, body.role_id)
    return UserMessage(message="User created successfully", user=UserOut.model_validate(user))


@router.put("/{user_id}", response_model=UserMessage)
def update_user(
    user_id: int,
    body: UserUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_manage_users),
):
    """Update a user's name, email, role, or status."""
    user = user_service.update_user(
        db, user_id, body.model_dump(exclude_unset=True), actor.user_id
    )
    return UserMessage(message="User updated successfully", user=UserOut.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_manage_users),
):
    """Delete a user; the acting user cannot delete themselves."""
    user_service.delete_user(db, user_id, actor.user_id)
    return MessageResponse(message="User deleted successfully")
