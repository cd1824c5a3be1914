"""
Test configuration and fixtures for the Verify.me API.

Every test session gets its own SQLite file; rows are wiped after each test
so registry scans never see another test's channels.
"""

import os
import tempfile
import uuid
from typing import Generator
from unittest.mock import patch

from cryptography.fernet import Fernet

test_db_path = tempfile.mktemp(suffix=".db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"
os.environ["ENCRYPTION_KEY"] = Fernet.generate_key().decode()
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["VERIFICATION_SIMULATED_DELAY_SECONDS"] = "0"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from app.features.auth.models.company import Company
from app.features.auth.utils.security import hash_password
from app.features.csv_import.dependencies.pipeline import get_ownership_check
from app.main import app
from app.platform.db.base import Base
from app.platform.db.session import SessionLocal

DEFAULT_PASSWORD = "TestPassword123"

sync_engine = create_engine(f"sqlite:///{test_db_path}")


@pytest.fixture(scope="session", autouse=True)
def create_schema():
    Base.metadata.create_all(sync_engine)
    yield
    Base.metadata.drop_all(sync_engine)
    sync_engine.dispose()
    if os.path.exists(test_db_path):
        os.remove(test_db_path)


@pytest.fixture(autouse=True)
def clean_tables(create_schema):
    yield
    with sync_engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """
    Create a test client for making HTTP requests.
    Dependency overrides set during a test are dropped afterwards.
    """
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def ownership_check():
    """Swap the simulated ownership check for a deterministic one."""

    def _set(check):
        app.dependency_overrides[get_ownership_check] = lambda: check

    return _set


@pytest.fixture
def register_company(client):
    """Register (and by default email-verify) a company through the API."""

    def _register(name: str = "Acme", password: str = DEFAULT_PASSWORD, verify: bool = True):
        email = f"company-{uuid.uuid4().hex[:8]}@example.com"
        with patch("app.features.auth.routes.auth.send_verification_email") as mock_send_email:
            response = client.post(
                "/api/auth/register",
                json={"name": name, "email": email, "password": password},
            )
            assert response.status_code == 201, response.text
            mock_send_email.assert_called_once()

        token = mock_send_email.call_args.kwargs["token"]
        if verify:
            response = client.get(
                "/api/auth/verify-email", params={"token": token}, follow_redirects=False
            )
            assert response.status_code == 302

        return {"name": name, "email": email, "password": password, "verification_token": token}

    return _register


@pytest.fixture
def login(client):
    def _login(account: dict) -> dict:
        response = client.post(
            "/api/auth/login",
            json={"email": account["email"], "password": account["password"]},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login


@pytest.fixture
def auth_headers(register_company, login):
    """Bearer headers for a freshly registered, verified company named Acme."""
    return login(register_company())


@pytest_asyncio.fixture
async def db_session():
    async with SessionLocal() as session:
        yield session


@pytest_asyncio.fixture
async def make_company(db_session):
    async def _make(name: str = "Acme") -> Company:
        company = Company(
            name=name,
            email=f"{uuid.uuid4().hex[:8]}@example.com",
            password_hash=hash_password(DEFAULT_PASSWORD),
            is_verified=True,
        )
        db_session.add(company)
        await db_session.commit()
        await db_session.refresh(company)
        return company

    return _make
