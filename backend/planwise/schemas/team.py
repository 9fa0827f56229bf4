"""Team schema module."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class TeamBase(BaseModel):
    """Base schema for Team."""

    name: str
    is_personal: bool = False


class TeamCreate(TeamBase):
    """Schema for creating a Team object."""

    user_id: UUID


class Team(TeamBase):
    """Schema for Team."""

    model_config = {"from_attributes": True}

    id: UUID
    user_id: UUID
    created_at: datetime
    modified_at: datetime
