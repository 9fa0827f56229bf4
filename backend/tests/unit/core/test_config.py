"""Unit tests for the settings."""

import pytest
from pydantic import ValidationError

from planwise.core.config import Settings


def test_database_uri_assembled_from_postgres_settings():
    settings = Settings(
        POSTGRES_HOST="db",
        POSTGRES_DB="billing",
        POSTGRES_USER="svc",
        POSTGRES_PASSWORD="secret",
        SQLALCHEMY_ASYNC_DATABASE_URI=None,
    )

    assert settings.SQLALCHEMY_ASYNC_DATABASE_URI == "postgresql+asyncpg://svc:secret@db/billing"


def test_explicit_database_uri_is_kept():
    settings = Settings(SQLALCHEMY_ASYNC_DATABASE_URI="sqlite+aiosqlite:///:memory:")

    assert settings.SQLALCHEMY_ASYNC_DATABASE_URI == "sqlite+aiosqlite:///:memory:"


def test_billing_defaults():
    settings = Settings()

    assert settings.PRORATION_DAYS_PER_MONTH == 30
    assert settings.MONTH_ACTIVATION_DAYS == 31


def test_day_counts_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(PRORATION_DAYS_PER_MONTH=0)


def test_cors_origins_split():
    settings = Settings(ADDITIONAL_CORS_ORIGINS="https://a.example.com; https://b.example.com")

    assert settings.cors_origins == ["https://a.example.com", "https://b.example.com"]
    assert Settings(ADDITIONAL_CORS_ORIGINS=None).cors_origins == []
