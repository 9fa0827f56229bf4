"""Plan schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class PlanBase(BaseModel):
    """Base plan schema."""

    name: str = Field(..., min_length=1, description="Display name of the plan")
    price: float = Field(..., ge=0, description="Price per billing cycle")


class PlanCreate(PlanBase):
    """Schema for creating a plan."""

    pass


class PlanUpdate(PlanBase):
    """Schema for updating a plan.

    Name and price are both replaced; there is no historical price lock-in for
    orders created under the previous price.
    """

    pass


class Plan(PlanBase):
    """Complete plan representation."""

    model_config = {"from_attributes": True}

    id: UUID
    created_at: datetime
    modified_at: datetime


class UpgradePlanRequest(BaseModel):
    """Request to move a subscription to a plan at least as expensive as its current one."""

    new_plan_id: UUID
    subscription_id: UUID


class UpgradeCost(BaseModel):
    """Prorated amount due to upgrade from the current activation's plan."""

    upgrade_cost: float = Field(..., ge=0)
