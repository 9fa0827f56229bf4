"""Order schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from planwise.core.shared_models import OrderStatus


class OrderCreate(BaseModel):
    """Schema for creating an order.

    Orders always open as PENDING; only ``OrderUpdate`` can mark one PAID.
    """

    model_config = ConfigDict(extra="forbid")

    subscription_id: UUID
    due_payment: float = Field(..., ge=0)


class OrderUpdate(BaseModel):
    """Schema for updating an order.

    Moving ``status`` from PENDING to PAID materializes a new activation for
    the order's subscription.
    """

    due_payment: float = Field(..., ge=0)
    status: OrderStatus


class Order(BaseModel):
    """Complete order representation."""

    model_config = {"from_attributes": True}

    id: UUID
    subscription_id: UUID
    due_payment: float
    status: OrderStatus
    created_at: datetime
    modified_at: datetime
