# flake8: noqa: F401
"""Schemas for the application."""

from .activation import Activation, ActivationCreate, ActivationUpdate
from .common import MutationResult
from .order import Order, OrderCreate, OrderUpdate
from .plan import Plan, PlanCreate, PlanUpdate, UpgradeCost, UpgradePlanRequest
from .subscription import (
    Subscription,
    SubscriptionCreate,
    SubscriptionUpdate,
    SubscriptionWithRelations,
)
from .team import Team, TeamCreate
from .user import User, UserCreate, UserInDBBase
