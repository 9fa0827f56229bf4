"""CRUD operations for the application."""

from .crud_activation import activation
from .crud_order import order
from .crud_plan import plan
from .crud_subscription import subscription
from .crud_team import team
from .crud_user import user

__all__ = [
    "activation",
    "order",
    "plan",
    "subscription",
    "team",
    "user",
]
