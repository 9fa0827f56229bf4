"""Pure business logic for billing operations.

This module contains the proration and activation-period rules, separated from
infrastructure concerns like the database and the request context. Every
function takes ``today`` explicitly so callers and tests control the clock.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Union

from dateutil.relativedelta import relativedelta

from planwise.core.exceptions import InvalidPlanChangeError
from planwise.core.shared_models import SubscriptionType

Number = Union[int, float, Decimal]

CENT = Decimal("0.01")

# Plan prices are monthly; a day of service is priced as 1/30 of the plan
DEFAULT_DAYS_PER_MONTH = 30

# MONTH subscriptions are activated for 31 calendar days
DEFAULT_MONTH_ACTIVATION_DAYS = 31


class ChangeType(Enum):
    """Type of plan change."""

    UPGRADE = "upgrade"
    DOWNGRADE = "downgrade"
    SAME = "same"


@dataclass(frozen=True)
class ActivationPeriod:
    """Start and end dates of a paid-for period."""

    start_date: date
    end_date: date


def to_money(value: Number) -> Decimal:
    """Convert a price to a Decimal rounded to cents."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def compare_plans(current_price: Number, new_price: Number) -> ChangeType:
    """Compare two plan prices to determine the change type."""
    current, new = to_money(current_price), to_money(new_price)
    if new > current:
        return ChangeType.UPGRADE
    if new < current:
        return ChangeType.DOWNGRADE
    return ChangeType.SAME


def remaining_days(end_date: date, today: date) -> int:
    """Whole days left before ``end_date``; zero or negative once it has passed."""
    return (end_date - today).days


def price_per_day(price: Number, days_per_month: int = DEFAULT_DAYS_PER_MONTH) -> Decimal:
    """Daily price of a monthly plan, rounded to cents. Free plans cost nothing per day."""
    amount = to_money(price)
    if amount <= 0:
        return Decimal("0.00")
    return (amount / days_per_month).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_upgrade_cost(
    current_price: Number,
    new_price: Number,
    end_date: date,
    today: date,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
) -> Decimal:
    """Calculate what is due to move from the current plan to a new plan mid-cycle.

    The unused days of the current activation are credited at the current plan's
    daily price. An expired activation (less than one day left) gets no credit and
    the new plan is charged in full.

    Args:
    ----
        current_price (Number): Price of the plan the activation was paid under.
        new_price (Number): Price of the plan to move to.
        end_date (date): End date of the current activation.
        today (date): The day the upgrade happens.
        days_per_month (int): Divisor used to derive the daily price.

    Returns:
    -------
        Decimal: Amount due, rounded to cents and never negative.

    Raises:
    ------
        InvalidPlanChangeError: If the new plan is cheaper than the current one.
    """
    if compare_plans(current_price, new_price) == ChangeType.DOWNGRADE:
        raise InvalidPlanChangeError()

    new_amount = to_money(new_price)
    days_left = remaining_days(end_date, today)
    if days_left < 1:
        return new_amount

    deduction = (days_left * price_per_day(current_price, days_per_month)).quantize(
        CENT, rounding=ROUND_HALF_UP
    )
    # A long remaining period on a yearly cycle can exceed the new price
    return max(new_amount - deduction, Decimal("0.00"))


def get_activation_period(
    subscription_type: Union[SubscriptionType, str],
    today: date,
    month_days: int = DEFAULT_MONTH_ACTIVATION_DAYS,
) -> ActivationPeriod:
    """Compute the activation period that a payment buys, starting today.

    Args:
    ----
        subscription_type (Union[SubscriptionType, str]): MONTH or YEAR.
        today (date): First day of the period.
        month_days (int): Length of a MONTH period in days.

    Returns:
    -------
        ActivationPeriod: MONTH ends ``month_days`` days later, YEAR ends on the same
            calendar day one year later.

    Raises:
    ------
        ValueError: If the subscription type is neither MONTH nor YEAR.
    """
    subscription_type = SubscriptionType(subscription_type)

    if subscription_type == SubscriptionType.YEAR:
        return ActivationPeriod(start_date=today, end_date=today + relativedelta(years=1))
    return ActivationPeriod(start_date=today, end_date=today + timedelta(days=month_days))
