"""CRUD operations for the order model."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from planwise.core.exceptions import OrderNotFoundException
from planwise.core.shared_models import OrderStatus
from planwise.crud._base import CRUDBase
from planwise.db.unit_of_work import UnitOfWork
from planwise.models.order import Order
from planwise.schemas.order import OrderCreate, OrderUpdate


class CRUDOrder(CRUDBase[Order, OrderCreate, OrderUpdate]):
    """CRUD operations for the order model."""

    async def get_by_subscription(
        self,
        db: AsyncSession,
        *,
        subscription_id: UUID,
        status: Optional[OrderStatus] = None,
    ) -> list[Order]:
        """Get the orders of a subscription, optionally filtered by status."""
        query = select(Order).where(Order.subscription_id == subscription_id)
        if status:
            query = query.where(Order.status == status.value)
        result = await db.execute(query.order_by(Order.created_at))
        return list(result.scalars().all())

    async def mark_paid(
        self,
        db: AsyncSession,
        *,
        db_obj: Order,
        due_payment: float,
        uow: UnitOfWork,
    ) -> bool:
        """Flip a PENDING order to PAID with a conditional update.

        The ``WHERE status = 'PENDING'`` guard makes the flip happen at most once
        per order, even when concurrent requests all read the order as PENDING:
        the row lock taken by the first update makes the others re-check the
        status and match nothing.

        Args:
        ----
            db (AsyncSession): The database session.
            db_obj (Order): The order, as read by the caller.
            due_payment (float): The amount to store alongside the new status.
            uow (UnitOfWork): The unit of work the flip belongs to.

        Returns:
        -------
            bool: True if this call flipped the order, False if it was already PAID.
        """
        result = await db.execute(
            update(Order.__table__)
            .where(Order.id == db_obj.id, Order.status == OrderStatus.PENDING.value)
            .values(status=OrderStatus.PAID.value, due_payment=due_payment)
        )
        await db.refresh(db_obj)
        return result.rowcount == 1


order = CRUDOrder(Order, OrderNotFoundException)
