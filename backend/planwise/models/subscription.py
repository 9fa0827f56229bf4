"""Subscription model."""

from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planwise.core.shared_models import SubscriptionType
from planwise.models._base import Base

if TYPE_CHECKING:
    from planwise.models.activation import Activation
    from planwise.models.order import Order
    from planwise.models.plan import Plan
    from planwise.models.team import Team


class Subscription(Base):
    """Binding between a team and a plan, with an optional current activation.

    ``activation_id`` points at the current row of the append-only activation
    history. It may only reference an activation of this subscription; the
    check lives in ``crud.subscription.set_current_activation``.
    """

    __tablename__ = "subscription"

    type: Mapped[str] = mapped_column(
        String(10), default=SubscriptionType.MONTH.value, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    plan_id: Mapped[UUID] = mapped_column(ForeignKey("plan.id", ondelete="RESTRICT"))
    team_id: Mapped[UUID] = mapped_column(ForeignKey("team.id", ondelete="RESTRICT"))

    # Current pointer into the activation history (circular with activation.subscription_id)
    activation_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey(
            "activation.id",
            use_alter=True,
            name="fk_subscription_activation_id",
            ondelete="SET NULL",
        ),
        nullable=True,
    )

    plan: Mapped["Plan"] = relationship("Plan")
    team: Mapped["Team"] = relationship("Team", back_populates="subscriptions")
    activation: Mapped[Optional["Activation"]] = relationship(
        "Activation",
        foreign_keys=[activation_id],
        post_update=True,
    )
    activations: Mapped[List["Activation"]] = relationship(
        "Activation",
        foreign_keys="Activation.subscription_id",
        back_populates="subscription",
    )
    orders: Mapped[List["Order"]] = relationship("Order", back_populates="subscription")
