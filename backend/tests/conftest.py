"""
Centralized Test Configuration.

Every test gets its own application built on a temporary SQLite file and a
temporary upload directory. The seed accounts (admin/admin123,
engineer1/eng123) exist in each fresh database.
"""

import pytest
from httpx import AsyncClient, ASGITransport

from backend.app.core.config import Settings
from backend.app.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        upload_dir=str(tmp_path / "uploads"),
        secret_key="test-secret-key-with-at-least-32-characters",
        log_level="WARNING",
    )


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    context = app.state.context
    await context.startup()
    yield app
    await context.shutdown()


@pytest.fixture
def context(app):
    return app.state.context


@pytest.fixture
async def client(app):
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session(context):
    async with context.session_factory() as session:
        yield session


async def login(client, username, password):
    response = await client.post("/api/auth/login", json={
        "username": username,
        "password": password
    })
    assert response.status_code == 200, response.text
    return response.json()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin_token(client):
    return (await login(client, "admin", "admin123"))["token"]


@pytest.fixture
async def engineer_login(client):
    """Seed engineer1 token and user summary."""
    return await login(client, "engineer1", "eng123")


@pytest.fixture
async def engineer_token(engineer_login):
    return engineer_login["token"]


@pytest.fixture
async def second_engineer(client, admin_token):
    """Provision engineer2 through the admin API and log in."""
    response = await client.post(
        "/api/users",
        json={
            "username": "engineer2",
            "password": "eng456",
            "role": "engineer",
            "full_name": "Second Engineer"
        },
        headers=auth_header(admin_token)
    )
    assert response.status_code == 201
    return await login(client, "engineer2", "eng456")
