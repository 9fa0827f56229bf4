"""Base models for the application."""

import uuid

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase

from planwise.core.datetime_utils import utc_now_naive


class Base(DeclarativeBase):
    """Base class for all models."""

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    created_at = Column(DateTime, default=utc_now_naive, nullable=False)
    modified_at = Column(DateTime, default=utc_now_naive, onupdate=utc_now_naive, nullable=False)
