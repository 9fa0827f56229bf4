"""Models for the application."""

from ._base import Base
from .activation import Activation
from .order import Order
from .plan import Plan
from .subscription import Subscription
from .team import Team
from .user import User

__all__ = [
    "Activation",
    "Base",
    "Order",
    "Plan",
    "Subscription",
    "Team",
    "User",
]
