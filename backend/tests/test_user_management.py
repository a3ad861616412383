"""
Integration tests for account listing, provisioning and the seed bootstrap.
"""

import pytest
from sqlalchemy import func, select

from backend.app.models.user import User
from backend.app.services.credentials import bootstrap_seed, find_by_username
from conftest import auth_header


@pytest.mark.asyncio
async def test_admin_lists_users_without_password_hashes(client, admin_token):
    response = await client.get("/api/users", headers=auth_header(admin_token))
    assert response.status_code == 200
    users = response.json()
    assert [u["username"] for u in users] == ["admin", "engineer1"]
    assert [u["role"] for u in users] == ["admin", "engineer"]
    for user in users:
        assert "password_hash" not in user
        assert "password" not in user
        assert user["created_at"]


@pytest.mark.asyncio
async def test_engineer_cannot_list_users(client, engineer_token):
    response = await client.get("/api/users", headers=auth_header(engineer_token))
    assert response.status_code == 403
    assert response.json()["error"] == "Admin access required"


@pytest.mark.asyncio
async def test_provisioned_user_can_log_in(client, second_engineer):
    assert second_engineer["user"]["username"] == "engineer2"
    assert second_engineer["user"]["role"] == "engineer"
    assert second_engineer["user"]["full_name"] == "Second Engineer"


@pytest.mark.asyncio
async def test_duplicate_username_is_409(client, admin_token):
    response = await client.post(
        "/api/users",
        json={"username": "engineer1", "password": "another1"},
        headers=auth_header(admin_token)
    )
    assert response.status_code == 409
    assert response.json()["error"] == "Username already registered"


@pytest.mark.asyncio
async def test_engineer_cannot_provision_users(client, engineer_token):
    response = await client.post(
        "/api/users",
        json={"username": "rogue", "password": "rogue123", "role": "admin"},
        headers=auth_header(engineer_token)
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_bootstrap_seed_is_idempotent(db_session):
    """The fixture already seeded once; further runs create nothing."""
    assert await bootstrap_seed(db_session) == 0
    assert await bootstrap_seed(db_session) == 0

    result = await db_session.execute(
        select(User.username, func.count(User.id)).group_by(User.username)
    )
    assert dict(result.all()) == {"admin": 1, "engineer1": 1}


@pytest.mark.asyncio
async def test_seed_passwords_are_hashed(db_session):
    admin = await find_by_username(db_session, "admin")
    assert admin.password_hash != "admin123"
    assert admin.password_hash.startswith("$pbkdf2-sha256$")
