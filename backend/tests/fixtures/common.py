"""Common test fixtures.

The database fixtures run against an in-memory SQLite database through
aiosqlite. ``StaticPool`` keeps a single connection so every session of a test
sees the same database.
"""

import uuid
from datetime import date
from typing import AsyncGenerator, Callable

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from planwise import crud, schemas
from planwise.api import deps
from planwise.api.context import ApiContext
from planwise.core.config import settings
from planwise.core.logging import logger
from planwise.main import app
from planwise.models import Base

# Fixed "today" used by the lifecycle tests
TODAY = date(2026, 1, 10)


@pytest.fixture
async def db_engine():
    """Create an in-memory database engine with all tables for each test function."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new database session for a test."""
    async with AsyncSession(db_engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def admin_user(db_session):
    """Create the admin user; its email matches FIRST_SUPERUSER."""
    return await crud.user.create(
        db_session,
        obj_in=schemas.UserCreate(email="admin@example.com", full_name="Admin", is_admin=True),
    )


@pytest.fixture
async def owner_user(db_session):
    """Create a regular user that owns a team."""
    return await crud.user.create(
        db_session, obj_in=schemas.UserCreate(email="owner@example.com", full_name="Team Owner")
    )


@pytest.fixture
async def other_user(db_session):
    """Create a regular user that does not own the test team."""
    return await crud.user.create(
        db_session, obj_in=schemas.UserCreate(email="other@example.com", full_name="Other User")
    )


@pytest.fixture
async def team(db_session, owner_user):
    """Create a team owned by ``owner_user``."""
    return await crud.team.create(
        db_session, obj_in=schemas.TeamCreate(name="Owner's team", user_id=owner_user.id)
    )


@pytest.fixture
async def other_team(db_session, other_user):
    """Create a team owned by ``other_user``."""
    return await crud.team.create(
        db_session, obj_in=schemas.TeamCreate(name="Other team", user_id=other_user.id)
    )


@pytest.fixture
async def basic_plan(db_session):
    """Create a 30.00 plan."""
    return await crud.plan.create(db_session, obj_in=schemas.PlanCreate(name="Basic", price=30))


@pytest.fixture
async def pro_plan(db_session):
    """Create a 60.00 plan."""
    return await crud.plan.create(db_session, obj_in=schemas.PlanCreate(name="Pro", price=60))


@pytest.fixture
async def premium_plan(db_session):
    """Create a 1000.00 plan."""
    return await crud.plan.create(
        db_session, obj_in=schemas.PlanCreate(name="Premium", price=1000)
    )


@pytest.fixture
async def subscription(db_session, team, basic_plan):
    """Create a MONTH subscription to ``basic_plan`` without an activation."""
    return await crud.subscription.create(
        db_session, obj_in=schemas.SubscriptionCreate(plan_id=basic_plan.id, team_id=team.id)
    )


@pytest.fixture
async def active_subscription(db_session, subscription):
    """Give ``subscription`` a current activation with 10 days left on TODAY."""
    activation = await crud.activation.create(
        db_session,
        obj_in={
            "subscription_id": subscription.id,
            "start_date": date(2025, 12, 20),
            "end_date": date(2026, 1, 20),
        },
    )
    return await crud.subscription.set_current_activation(
        db_session, db_obj=subscription, activation=activation, is_active=True
    )


@pytest.fixture
def make_ctx() -> Callable[..., ApiContext]:
    """Build an API context for a user row."""

    def _make_ctx(user, auth_method: str = "header") -> ApiContext:
        request_id = str(uuid.uuid4())
        user_schema = schemas.User.model_validate(user)
        return ApiContext(
            request_id=request_id,
            user=user_schema,
            auth_method=auth_method,
            logger=logger.with_context(request_id=request_id, user_id=str(user_schema.id)),
        )

    return _make_ctx


@pytest.fixture
def owner_ctx(make_ctx, owner_user) -> ApiContext:
    """API context of the team owner."""
    return make_ctx(owner_user)


@pytest.fixture
def other_ctx(make_ctx, other_user) -> ApiContext:
    """API context of a user that does not own the team."""
    return make_ctx(other_user)


@pytest.fixture
def admin_ctx(make_ctx, admin_user) -> ApiContext:
    """API context of the admin."""
    return make_ctx(admin_user)


@pytest.fixture
async def client(db_session):
    """HTTP client for the app, with requests served from the test database session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[deps.get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.fixture
def header_auth(monkeypatch):
    """Identify callers from the X-User-ID header instead of the bootstrap superuser."""
    monkeypatch.setattr(settings, "AUTH_ENABLED", True)

    def _headers(user) -> dict[str, str]:
        return {"X-User-ID": str(user.id)}

    return _headers
