"""
Employee Roster API: Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── sample_employee_data: Field values for building Employee records
    ├── storage_client: Real StorageClient on in-memory SQLite
    ├── test_app: Application built around storage_client
    └── test_client: HTTPX AsyncClient talking to test_app
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from roster.config import Settings
from roster.database import StorageClient


@pytest.fixture
def test_settings():
    return Settings(database_url="sqlite+aiosqlite://", environment="test", log_level="WARNING")


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_find(mock_db_session):
            mock_db_session.get.return_value = employee
            result = await employee_service.find_employee(mock_db_session, str(employee.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_employee_data():
    return {
        "id": uuid4(),
        "name": "Maniek",
        "contract_type": "UoD",
        "employ_date": datetime(2022, 1, 26, 9, 55, 6, 71000, tzinfo=timezone.utc),
    }


@pytest_asyncio.fixture
async def storage_client(test_settings):
    """A connected StorageClient backed by a fresh in-memory database."""
    client = StorageClient(test_settings)
    await client.connect()
    yield client
    await client.disconnect()


@pytest.fixture
def test_app(test_settings, storage_client):
    from roster.main import create_app
    return create_app(config=test_settings, storage=storage_client)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    ASGITransport does not run the lifespan hook; the storage client is
    injected through create_app() instead.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
