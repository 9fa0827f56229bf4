"""User schema module."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr


class UserBase(BaseModel):
    """Base schema for User."""

    email: EmailStr
    full_name: Optional[str] = "Superuser"
    is_admin: bool = False

    model_config = ConfigDict(from_attributes=True)


class UserCreate(UserBase):
    """Schema for creating a User object."""

    pass


class UserInDBBase(UserBase):
    """Base schema for User stored in DB."""

    id: UUID
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class User(UserInDBBase):
    """Schema for User."""

    pass
