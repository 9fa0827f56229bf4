"""Activation schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class ActivationBase(BaseModel):
    """Base activation schema."""

    start_date: date = Field(..., description="First day of the period (inclusive)")
    end_date: date = Field(..., description="Day the period ends")
    subscription_id: UUID = Field(..., description="Subscription this period belongs to")

    @model_validator(mode="after")
    def check_dates(self) -> "ActivationBase":
        """An activation must span at least one day."""
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class ActivationCreate(ActivationBase):
    """Schema for creating an activation.

    ``make_current`` relinks the subscription's current activation to the new
    row in the same transaction.
    """

    make_current: bool = False


class ActivationUpdate(ActivationBase):
    """Schema for updating an activation."""

    pass


class Activation(BaseModel):
    """Complete activation representation."""

    model_config = {"from_attributes": True}

    id: UUID
    subscription_id: UUID
    start_date: date
    end_date: date
    created_at: datetime
    modified_at: datetime
