"""Auth API router — login, register, me."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rbac_admin.db.session import get_db
from rbac_admin.schemas.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, AuthUser,
)
from rbac_admin.services.auth_service import auth_service
from rbac_admin.core.security import Actor, get_current_actor

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate and return a JWT access token."""
    return auth_service.authenticate(db, body.email, body.password)


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user and log them in."""
    return auth_service.register(
        db, body.name, body.email, body.password, body.role_name
    )


@router.get("/me", response_model=AuthUser)
def get_me(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Get current user profile."""
    return auth_service.get_profile(db, actor.user_id)
