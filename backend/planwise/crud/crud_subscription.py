"""CRUD operations for the subscription model."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from planwise.core.exceptions import ActivationMismatchError, SubscriptionNotFoundException
from planwise.crud._base import CRUDBase
from planwise.db.unit_of_work import UnitOfWork
from planwise.models.activation import Activation
from planwise.models.subscription import Subscription
from planwise.schemas.subscription import SubscriptionCreate, SubscriptionUpdate

RELATIONS = (
    selectinload(Subscription.plan),
    selectinload(Subscription.team),
    selectinload(Subscription.activation),
)


class CRUDSubscription(CRUDBase[Subscription, SubscriptionCreate, SubscriptionUpdate]):
    """CRUD operations for the subscription model."""

    async def get_with_relations(self, db: AsyncSession, id: UUID) -> Subscription:
        """Get a subscription with its plan, team and current activation loaded."""
        return await self.get(db, id, options=RELATIONS)

    async def get_multi_with_relations(self, db: AsyncSession) -> list[Subscription]:
        """Get all subscriptions with their plan, team and current activation loaded."""
        return await self.get_multi(db, options=RELATIONS)

    async def get_by_activation(
        self, db: AsyncSession, *, activation_id: UUID
    ) -> list[Subscription]:
        """Get the subscriptions whose current activation is the given one."""
        result = await db.execute(
            select(Subscription).where(Subscription.activation_id == activation_id)
        )
        return list(result.scalars().all())

    async def set_current_activation(
        self,
        db: AsyncSession,
        *,
        db_obj: Subscription,
        activation: Optional[Activation],
        is_active: Optional[bool] = None,
        uow: Optional[UnitOfWork] = None,
    ) -> Subscription:
        """Point the subscription at one of its activations, or clear the pointer.

        Args:
        ----
            db (AsyncSession): The database session.
            db_obj (Subscription): The subscription to update.
            activation (Optional[Activation]): The new current activation, None to clear.
            is_active (Optional[bool]): New value for the active flag, unchanged when None.
            uow (Optional[UnitOfWork]): The unit of work to use for the transaction.

        Returns:
        -------
            Subscription: The updated subscription.

        Raises:
        ------
            ActivationMismatchError: If the activation belongs to another subscription.
        """
        if activation is not None and activation.subscription_id != db_obj.id:
            raise ActivationMismatchError(activation.id, db_obj.id)

        fields = {"activation_id": activation.id if activation is not None else None}
        if is_active is not None:
            fields["is_active"] = is_active

        return await self.update(db, db_obj=db_obj, obj_in=fields, uow=uow)


subscription = CRUDSubscription(Subscription, SubscriptionNotFoundException)
