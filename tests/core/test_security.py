from datetime import timedelta
from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from rbac_admin.core.security import (
    Actor,
    RequirePermission,
    create_access_token,
    decode_token,
    get_current_actor,
    hash_password,
    password_too_long,
    verify_password,
)


class _Credentials:
    def __init__(self, token):
        self.credentials = token


def _request():
    return SimpleNamespace(state=SimpleNamespace(actor_id=None))


def test_hash_is_one_way_and_verifiable():
    hashed = hash_password("pw123")
    assert hashed != "pw123"
    assert verify_password("pw123", hashed)
    assert not verify_password("wrong", hashed)


def test_token_round_trip_keeps_permission_claims():
    token = create_access_token({"sub": "7", "permissions": ["read"]})
    payload = decode_token(token)
    assert payload["sub"] == "7"
    assert payload["permissions"] == ["read"]
    assert payload["type"] == "access"


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-1))
    with pytest.raises(HTTPException) as exc:
        decode_token(token)
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_get_current_actor_requires_credentials():
    with pytest.raises(HTTPException) as exc:
        await get_current_actor(_request(), None)
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_get_current_actor_builds_snapshot():
    token = create_access_token(
        {"sub": "3", "email": "a@x.com", "permissions": ["read", "manage_users"]}
    )
    request = _request()
    actor = await get_current_actor(request, _Credentials(token))
    assert request.state.actor_id == 3
    assert actor == Actor(user_id=3, email="a@x.com", permissions=frozenset({"read", "manage_users"}))


@pytest.mark.asyncio
async def test_require_permission_denies_with_403():
    gate = RequirePermission("manage_roles")
    actor = Actor(user_id=1, permissions=frozenset({"read"}))
    with pytest.raises(HTTPException) as exc:
        await gate(actor)
    assert exc.value.status_code == 403


@pytest.mark.asyncio
async def test_require_permission_allows_any_of():
    gate = RequirePermission("manage_roles", "manage_users")
    actor = Actor(user_id=1, permissions=frozenset({"manage_users"}))
    assert await gate(actor) is actor


def test_password_length_is_measured_in_bytes():
    assert not password_too_long("p" * 72)
    assert password_too_long("p" * 73)
    # 36 two-byte characters fit, 37 do not
    assert not password_too_long("é" * 36)
    assert password_too_long("é" * 37)


def test_overlong_password_never_verifies():
    hashed = hash_password("p" * 72)
    assert not verify_password("p" * 80, hashed)
