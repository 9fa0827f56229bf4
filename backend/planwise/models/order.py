"""Order model."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.schema import CheckConstraint, Index

from planwise.core.shared_models import OrderStatus
from planwise.models._base import Base

if TYPE_CHECKING:
    from planwise.models.subscription import Subscription


class Order(Base):
    """A due payment for a subscription: one billing cycle or one upgrade charge."""

    __tablename__ = "order"

    subscription_id: Mapped[UUID] = mapped_column(
        ForeignKey("subscription.id", ondelete="RESTRICT"), nullable=False
    )
    due_payment: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=OrderStatus.PENDING.value, nullable=False
    )

    subscription: Mapped["Subscription"] = relationship("Subscription", back_populates="orders")

    __table_args__ = (
        CheckConstraint("due_payment >= 0", name="check_order_due_payment_non_negative"),
        Index("ix_order_subscription_status", "subscription_id", "status"),
    )
