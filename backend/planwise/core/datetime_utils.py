"""Datetime utilities for consistent timezone handling across the application."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time - standardized across the application.

    Returns:
        Current datetime in UTC timezone.
    """
    return datetime.now(timezone.utc)


def utc_now_naive() -> datetime:
    """Get current UTC time as naive datetime for database operations.

    Returns:
        Current datetime in UTC as naive datetime (no timezone info).

    Note:
        This is specifically for SQLAlchemy models that use TIMESTAMP WITHOUT TIME ZONE
        columns.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_today() -> date:
    """Get the current calendar date in UTC.

    Activation periods are stored as calendar dates, so every date computation
    in the billing logic starts from this value.
    """
    return utc_now().date()
