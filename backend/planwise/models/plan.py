"""Plan model."""

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.schema import CheckConstraint

from planwise.models._base import Base


class Plan(Base):
    """A named price tier subscribers can be billed under."""

    __tablename__ = "plan"

    name: Mapped[str] = mapped_column(String, nullable=False)
    price: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    __table_args__ = (CheckConstraint("price >= 0", name="check_plan_price_non_negative"),)
