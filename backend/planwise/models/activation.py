"""Activation model for tracking paid-for subscription periods."""

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.schema import CheckConstraint, Index

from planwise.models._base import Base

if TYPE_CHECKING:
    from planwise.models.subscription import Subscription


class Activation(Base):
    """A concrete date range during which a subscription's plan benefits apply."""

    __tablename__ = "activation"

    subscription_id: Mapped[UUID] = mapped_column(
        ForeignKey("subscription.id", ondelete="RESTRICT"), nullable=False
    )

    # Calendar dates, start inclusive
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    subscription: Mapped["Subscription"] = relationship(
        "Subscription",
        foreign_keys=[subscription_id],
        back_populates="activations",
    )

    __table_args__ = (
        CheckConstraint("end_date > start_date", name="check_activation_end_after_start"),
        Index("ix_activation_subscription_dates", "subscription_id", "start_date"),
    )
