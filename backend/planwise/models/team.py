"""Team model."""

from typing import TYPE_CHECKING, List
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planwise.models._base import Base

if TYPE_CHECKING:
    from planwise.models.subscription import Subscription
    from planwise.models.user import User


class Team(Base):
    """Team model. The owning user is the source of truth for billing ownership."""

    __tablename__ = "team"

    name: Mapped[str] = mapped_column(String, nullable=False)
    is_personal: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    user_id: Mapped[UUID] = mapped_column(ForeignKey("user.id", ondelete="RESTRICT"))

    user: Mapped["User"] = relationship("User", back_populates="teams")
    subscriptions: Mapped[List["Subscription"]] = relationship(
        "Subscription", back_populates="team"
    )
