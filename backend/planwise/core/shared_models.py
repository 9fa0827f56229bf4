"""Shared models for the backend."""

from enum import Enum


class SubscriptionType(str, Enum):
    """Billing cycle of a subscription."""

    MONTH = "MONTH"
    YEAR = "YEAR"


class OrderStatus(str, Enum):
    """Order status enum."""

    PENDING = "PENDING"
    PAID = "PAID"


class SubscriptionState(str, Enum):
    """Derived lifecycle state of a subscription.

    Not persisted; computed from the current activation pointer and its dates.
    """

    UNPROVISIONED = "unprovisioned"  # No current activation
    ACTIVE = "active"  # Current activation covers today
    EXPIRED = "expired"  # Current activation ended, pointer not cleared yet


class FaultCode(str, Enum):
    """Fault codes surfaced to API callers."""

    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
