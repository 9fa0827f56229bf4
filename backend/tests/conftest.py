"""Common test fixtures and configuration for pytest.

Settings are read from the environment when ``planwise.core.config`` is first
imported, so the test environment is pinned here before any planwise import.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOCAL_DEVELOPMENT", "true")
os.environ.setdefault("AUTH_ENABLED", "false")
os.environ.setdefault("RUN_DB_INIT", "false")
os.environ.setdefault("FIRST_SUPERUSER", "admin@example.com")

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

# Import all fixtures so they are automatically available for all tests
from tests.fixtures.common import (  # noqa: E402, F401
    active_subscription,
    admin_ctx,
    admin_user,
    basic_plan,
    client,
    db_engine,
    db_session,
    header_auth,
    make_ctx,
    other_ctx,
    other_team,
    other_user,
    owner_ctx,
    owner_user,
    premium_plan,
    pro_plan,
    subscription,
    team,
)


# Mock DB Session for Unit Tests
@pytest.fixture
async def mock_db_session():
    """Provide a mock DB session for unit tests."""
    mock_session = AsyncMock(spec=AsyncSession)
    yield mock_session
