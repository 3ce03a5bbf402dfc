"""
Global test fixtures for the marketplace backend.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor) with the application's indexes
- Service instances bound to the mock database
- Account payload factories
- A TestClient wired to the mock database
"""

import asyncio
import sys
from pathlib import Path
from typing import Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    from mongomock_motor import AsyncMongoMockClient
    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_marketplace_db(mock_async_mongo_client):
    """Provide the mock marketplace database with the real indexes."""
    from marketplace.database.databases import marketplace_db

    db = mock_async_mongo_client[marketplace_db.DB_NAME]
    await marketplace_db.create_marketplace_indexes(db)
    yield db


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def account_service(mock_marketplace_db):
    from marketplace.services.account_service import AccountService
    return AccountService(mock_marketplace_db)


@pytest.fixture
def admin_service(mock_marketplace_db):
    from marketplace.services.admin_service import AdminService
    return AdminService(mock_marketplace_db)


@pytest.fixture
def contact_service(mock_marketplace_db):
    from marketplace.services.contact_service import ContactService
    return ContactService(mock_marketplace_db)


# =============================================================================
# Account Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic user data for registration."""
    return {
        "first_name": "Amina",
        "last_name": "Bello",
        "email": "amina@example.com",
        "password": "SecurePassword123!",
        "password_confirm": "SecurePassword123!",
    }


@pytest.fixture
def test_client_data() -> dict:
    """Business account data for registration."""
    return {
        "first_name": "Kofi",
        "business_name": "Kofi Crafts",
        "email": "kofi@example.com",
        "password": "ClientPassword123!",
        "password_confirm": "ClientPassword123!",
        "bio": "Handmade furniture",
    }


@pytest.fixture
def register_user(account_service):
    """Factory registering a plain user; extra keyword arguments override the defaults."""
    from marketplace.schemas.auth import RegisterRequest

    counter = {"n": 0}

    async def _register(**overrides):
        counter["n"] += 1
        data = {
            "first_name": f"User{counter['n']}",
            "email": f"user{counter['n']}@example.com",
            "password": "SecurePassword123!",
            "password_confirm": "SecurePassword123!",
        }
        data.update(overrides)
        return await account_service.register_user(RegisterRequest(**data))

    return _register


@pytest.fixture
def super_admin(register_user, admin_service):
    """Factory creating a user and making it a super admin; returns the user id."""
    async def _create(**overrides):
        user = await register_user(**overrides)
        await admin_service.bootstrap_super_admin(user.id)
        return user.id
    return _create


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(mock_async_mongo_client):
    """
    FastAPI app whose MongoDB connection is the mock client.

    The startup hook creates the real indexes on the mock database.
    """
    import marketplace.database.connections as conn_module
    from marketplace.main import app

    conn_module._mongo_client = mock_async_mongo_client
    yield app
    conn_module._mongo_client = None


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Redirects are not followed so guard redirects can be asserted.
    """
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture
def app_db(mock_async_mongo_client):
    """The database the app under test writes to."""
    from marketplace.database.databases import marketplace_db
    return mock_async_mongo_client[marketplace_db.DB_NAME]


@pytest.fixture
def run_async():
    """Run a coroutine from a synchronous test (the app runs on its own loop)."""
    return asyncio.run


@pytest.fixture
def register_and_login(client):
    """Register a plain user over HTTP, log in, and return the user id."""
    def _register_and_login(email: str, password: str = "SecurePassword123!", **extra):
        payload = {
            "first_name": extra.pop("first_name", "Test"),
            "email": email,
            "password": password,
            "password_confirm": password,
            **extra,
        }
        response = client.post("/auth/register", json=payload)
        assert response.status_code == 201, response.text
        login = client.post("/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        return response.json()["user_id"]
    return _register_and_login
