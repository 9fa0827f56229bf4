"""User model."""

from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planwise.models._base import Base

if TYPE_CHECKING:
    from planwise.models.team import Team


class User(Base):
    """User model.

    Only the fields the billing module needs: identity for ownership checks and
    the admin flag that gates plan administration.
    """

    __tablename__ = "user"

    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    teams: Mapped[List["Team"]] = relationship("Team", back_populates="user")
