"""CRUD operations for the activation model."""

from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from planwise.core.exceptions import ActivationNotFoundException
from planwise.crud._base import CRUDBase
from planwise.models.activation import Activation
from planwise.models.subscription import Subscription
from planwise.schemas.activation import ActivationCreate, ActivationUpdate


class CRUDActivation(CRUDBase[Activation, ActivationCreate, ActivationUpdate]):
    """CRUD operations for the activation model."""

    async def get_with_subscription(self, db: AsyncSession, id: UUID) -> Activation:
        """Get an activation with its subscription, and that subscription's plan and team."""
        return await self.get(
            db,
            id,
            options=(
                selectinload(Activation.subscription).selectinload(Subscription.plan),
                selectinload(Activation.subscription).selectinload(Subscription.team),
            ),
        )

    async def get_by_subscription(
        self,
        db: AsyncSession,
        *,
        subscription_id: UUID,
        limit: int = 100,
    ) -> list[Activation]:
        """Get the activation history of a subscription.

        Args:
        ----
            db (AsyncSession): The database session.
            subscription_id (UUID): The subscription ID.
            limit (int): Maximum number of activations to return.

        Returns:
        -------
            list[Activation]: Activations ordered by start date, newest first.
        """
        query = (
            select(Activation)
            .where(Activation.subscription_id == subscription_id)
            .order_by(desc(Activation.start_date), desc(Activation.created_at))
            .limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


activation = CRUDActivation(Activation, ActivationNotFoundException)
