"""Subscription schemas."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, computed_field

from planwise.core.datetime_utils import utc_today
from planwise.core.shared_models import SubscriptionState, SubscriptionType

from .activation import Activation
from .plan import Plan
from .team import Team


class SubscriptionCreate(BaseModel):
    """Schema for creating a subscription. New subscriptions have no activation."""

    plan_id: UUID
    team_id: UUID
    type: SubscriptionType = SubscriptionType.MONTH


class SubscriptionUpdate(BaseModel):
    """Schema for updating a subscription's active flag and current activation."""

    is_active: bool
    activation_id: Optional[UUID] = Field(
        None, description="Activation to mark as current; must belong to this subscription"
    )


class Subscription(BaseModel):
    """Subscription without related objects."""

    model_config = {"from_attributes": True}

    id: UUID
    plan_id: UUID
    team_id: UUID
    type: SubscriptionType
    is_active: bool
    activation_id: Optional[UUID] = None
    created_at: datetime
    modified_at: datetime


class SubscriptionWithRelations(Subscription):
    """Subscription with its plan, team and current activation."""

    plan: Plan
    team: Team
    activation: Optional[Activation] = None

    @computed_field
    @property
    def state(self) -> SubscriptionState:
        """Lifecycle state as of today (UTC)."""
        return self.state_on(utc_today())

    def state_on(self, today: date) -> SubscriptionState:
        """Derive the lifecycle state for a given day."""
        if self.activation is None:
            return SubscriptionState.UNPROVISIONED
        if today > self.activation.end_date:
            return SubscriptionState.EXPIRED
        return SubscriptionState.ACTIVE
