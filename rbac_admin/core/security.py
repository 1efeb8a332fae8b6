"""JWT authentication and permission-based authorization helpers."""

import bcrypt
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, FrozenSet

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from rbac_admin.core.config import settings
from rbac_admin.core.exceptions import forbidden, unauthorized
from rbac_admin.core.permissions import Decision, authorize

# JWT bearer scheme
security_scheme = HTTPBearer(auto_error=False)

# bcrypt only looks at the first 72 bytes and refuses longer input
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    if password_too_long(plain_password):
        return False
    pwd_bytes = plain_password.encode("utf-8")
    hashed_bytes = hashed_password.encode("utf-8")
    return bcrypt.checkpw(pwd_bytes, hashed_bytes)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRY_MINUTES)
    )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise unauthorized("Invalid or expired token")
    if payload.get("type") != "access":
        raise unauthorized("Invalid token type")
    return payload


@dataclass(frozen=True)
class Actor:
    """Identity and permission snapshot behind an authenticated request."""
    user_id: int
    email: Optional[str] = None
    permissions: FrozenSet[str] = field(default_factory=frozenset)


async def get_current_actor(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
) -> Actor:
    """Resolve the bearer token into an Actor."""
    if credentials is None:
        raise unauthorized()
    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if user_id is None:
        raise unauthorized("Invalid token payload")
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise unauthorized("Invalid token payload")
    request.state.actor_id = user_id
    return Actor(
        user_id=user_id,
        email=payload.get("email"),
        permissions=frozenset(payload.get("permissions") or []),
    )


class RequirePermission:
    """Dependency that checks the actor holds any of the given permissions."""

    def __init__(self, *permissions):
        self.permissions = permissions

    async def __call__(self, actor: Actor = Depends(get_current_actor)) -> Actor:
        if authorize(actor.permissions, self.permissions) is Decision.DENY:
            raise forbidden()
        return actor
