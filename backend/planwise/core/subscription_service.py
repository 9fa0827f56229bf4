"""Subscription service.

Owns the subscription lifecycle: a subscription starts without an activation,
gets one when an order for it is paid, and loses it again on a plan upgrade.
Every activation ever granted is kept; ``subscription.activation_id`` points
at the current one.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from planwise import crud, schemas
from planwise.api.context import ApiContext
from planwise.billing import plan_logic
from planwise.core.access import validate_team_access
from planwise.core.config import settings
from planwise.core.datetime_utils import utc_today
from planwise.core.exceptions import InvalidOrderTransitionError, PermissionException
from planwise.core.shared_models import OrderStatus
from planwise.db.unit_of_work import UnitOfWork


class SubscriptionService:
    """Service for subscriptions, their activations and their orders."""

    async def get(
        self, db: AsyncSession, subscription_id: UUID
    ) -> schemas.SubscriptionWithRelations:
        """Get a subscription with its plan, team and current activation."""
        subscription = await crud.subscription.get_with_relations(db, id=subscription_id)
        return schemas.SubscriptionWithRelations.model_validate(
            subscription, from_attributes=True
        )

    async def list(self, db: AsyncSession) -> List[schemas.SubscriptionWithRelations]:
        """List all subscriptions with their plan, team and current activation."""
        subscriptions = await crud.subscription.get_multi_with_relations(db)
        return [
            schemas.SubscriptionWithRelations.model_validate(subscription, from_attributes=True)
            for subscription in subscriptions
        ]

    async def create(
        self,
        db: AsyncSession,
        subscription_in: schemas.SubscriptionCreate,
        ctx: ApiContext,
    ) -> schemas.Subscription:
        """Subscribe a team to a plan. The caller must own the team.

        The subscription has no activation until its first order is paid.

        Raises:
        ------
            TeamNotFoundException: If the team does not exist.
            PlanNotFoundException: If the plan does not exist.
            PermissionException: If the caller does not own the team.
        """
        team = await crud.team.get(db, id=subscription_in.team_id)
        await crud.plan.get(db, id=subscription_in.plan_id)
        validate_team_access(ctx, team)

        subscription = await crud.subscription.create(db, obj_in=subscription_in)
        ctx.logger.with_context(subscription_id=str(subscription.id)).info(
            f"Created {subscription.type} subscription for team {team.id}"
        )
        return schemas.Subscription.model_validate(subscription, from_attributes=True)

    async def update(
        self,
        db: AsyncSession,
        subscription_id: UUID,
        subscription_in: schemas.SubscriptionUpdate,
        ctx: ApiContext,
    ) -> schemas.SubscriptionWithRelations:
        """Set a subscription's active flag and current activation.

        Raises:
        ------
            SubscriptionNotFoundException: If the subscription does not exist.
            PermissionException: If the caller does not own the subscription's team.
            ActivationNotFoundException: If the activation does not exist.
            ActivationMismatchError: If the activation belongs to another subscription.
        """
        subscription = await crud.subscription.get_with_relations(db, id=subscription_id)
        validate_team_access(ctx, subscription.team)

        activation = None
        if subscription_in.activation_id is not None:
            activation = await crud.activation.get(db, id=subscription_in.activation_id)

        async with UnitOfWork(db) as uow:
            await crud.subscription.set_current_activation(
                db,
                db_obj=subscription,
                activation=activation,
                is_active=subscription_in.is_active,
                uow=uow,
            )

        ctx.logger.with_context(subscription_id=str(subscription_id)).info(
            f"Updated subscription (is_active={subscription_in.is_active}, "
            f"activation_id={subscription_in.activation_id})"
        )
        return await self.get(db, subscription_id)

    async def list_activations(
        self, db: AsyncSession, subscription_id: UUID, ctx: ApiContext
    ) -> List[schemas.Activation]:
        """Get the activation history of a subscription, newest first."""
        subscription = await crud.subscription.get_with_relations(db, id=subscription_id)
        validate_team_access(ctx, subscription.team, allow_admin=True)

        activations = await crud.activation.get_by_subscription(
            db, subscription_id=subscription.id
        )
        return [
            schemas.Activation.model_validate(activation, from_attributes=True)
            for activation in activations
        ]

    async def create_activation(
        self,
        db: AsyncSession,
        activation_in: schemas.ActivationCreate,
        ctx: ApiContext,
    ) -> schemas.Activation:
        """Record an activation period directly, outside of the order flow.

        Args:
        ----
            db (AsyncSession): The database session.
            activation_in (schemas.ActivationCreate): The period, its subscription, and
                whether it becomes the subscription's current activation.
            ctx (ApiContext): The API context.

        Returns:
        -------
            schemas.Activation: The created activation.

        Raises:
        ------
            SubscriptionNotFoundException: If the subscription does not exist.
            PermissionException: If the caller is neither the team owner nor an admin.
        """
        subscription = await crud.subscription.get_with_relations(
            db, id=activation_in.subscription_id
        )
        validate_team_access(ctx, subscription.team, allow_admin=True)

        async with UnitOfWork(db) as uow:
            activation = await crud.activation.create(
                db, obj_in=activation_in.model_dump(exclude={"make_current"}), uow=uow
            )
            if activation_in.make_current:
                await crud.subscription.set_current_activation(
                    db, db_obj=subscription, activation=activation, is_active=True, uow=uow
                )
            activation_out = schemas.Activation.model_validate(activation, from_attributes=True)

        ctx.logger.with_context(
            subscription_id=str(subscription.id), activation_id=str(activation_out.id)
        ).info(
            f"Created activation {activation_out.start_date} - {activation_out.end_date}"
            f"{' (current)' if activation_in.make_current else ''}"
        )
        return activation_out

    async def update_activation(
        self,
        db: AsyncSession,
        activation_id: UUID,
        activation_in: schemas.ActivationUpdate,
        ctx: ApiContext,
    ) -> schemas.Activation:
        """Change an activation's dates or move it to another subscription.

        A moved activation stops being the current activation of any subscription
        that pointed at it.

        Raises:
        ------
            ActivationNotFoundException: If the activation does not exist.
            SubscriptionNotFoundException: If the target subscription does not exist.
            PermissionException: If the caller is neither the owner of the source and
                target subscriptions' teams nor an admin.
        """
        activation = await crud.activation.get_with_subscription(db, id=activation_id)
        validate_team_access(ctx, activation.subscription.team, allow_admin=True)

        moved = activation_in.subscription_id != activation.subscription_id
        if moved:
            target = await crud.subscription.get_with_relations(
                db, id=activation_in.subscription_id
            )
            validate_team_access(ctx, target.team, allow_admin=True)

        async with UnitOfWork(db) as uow:
            if moved:
                for subscription in await crud.subscription.get_by_activation(
                    db, activation_id=activation.id
                ):
                    await crud.subscription.set_current_activation(
                        db, db_obj=subscription, activation=None, uow=uow
                    )
            activation = await crud.activation.update(
                db, db_obj=activation, obj_in=activation_in, uow=uow
            )
            activation_out = schemas.Activation.model_validate(activation, from_attributes=True)

        ctx.logger.with_context(activation_id=str(activation_id)).info(
            f"Updated activation {activation_out.start_date} - {activation_out.end_date}"
        )
        return activation_out

    async def create_order(
        self,
        db: AsyncSession,
        order_in: schemas.OrderCreate,
        ctx: ApiContext,
    ) -> schemas.Order:
        """Open an order against a subscription. Admins and the system identity only.

        Raises:
        ------
            PermissionException: If the caller is neither an admin nor the system.
            SubscriptionNotFoundException: If the subscription does not exist.
        """
        if not (ctx.is_admin or ctx.is_system):
            ctx.logger.warning("Denied order creation")
            raise PermissionException("Unauthorized access")

        await crud.subscription.get(db, id=order_in.subscription_id)

        order = await crud.order.create(db, obj_in=order_in)
        ctx.logger.with_context(
            subscription_id=str(order.subscription_id), order_id=str(order.id)
        ).info(f"Created {order.status} order due {order.due_payment}")
        return schemas.Order.model_validate(order, from_attributes=True)

    async def update_order(
        self,
        db: AsyncSession,
        order_id: UUID,
        order_in: schemas.OrderUpdate,
        ctx: ApiContext,
        today: Optional[date] = None,
    ) -> schemas.Order:
        """Update an order; paying a PENDING order activates its subscription.

        On PENDING -> PAID a new activation starting ``today`` is created for the
        subscription's billing cycle and becomes its current activation. PAID is
        final: paying again changes nothing else, reopening is rejected.

        Args:
        ----
            db (AsyncSession): The database session.
            order_id (UUID): The order to update.
            order_in (schemas.OrderUpdate): New amount and status.
            ctx (ApiContext): The API context.
            today (Optional[date]): Start of the new activation, today (UTC) by default.

        Returns:
        -------
            schemas.Order: The updated order.

        Raises:
        ------
            OrderNotFoundException: If the order does not exist.
            SubscriptionNotFoundException: If the order's subscription does not exist.
            PermissionException: If the caller does not own the subscription's team.
            InvalidOrderTransitionError: If a PAID order is moved back to PENDING.
        """
        order = await crud.order.get(db, id=order_id)
        subscription = await crud.subscription.get_with_relations(db, id=order.subscription_id)
        validate_team_access(ctx, subscription.team)

        previous_status = OrderStatus(order.status)
        if previous_status == OrderStatus.PAID and order_in.status == OrderStatus.PENDING:
            raise InvalidOrderTransitionError("Paid orders can't be reopened")
        paid_now = previous_status == OrderStatus.PENDING and order_in.status == OrderStatus.PAID

        logger = ctx.logger.with_context(
            subscription_id=str(subscription.id), order_id=str(order_id)
        )
        async with UnitOfWork(db) as uow:
            # Only the request whose update flips the row provisions the activation
            claimed = paid_now and await crud.order.mark_paid(
                db, db_obj=order, due_payment=order_in.due_payment, uow=uow
            )
            if not claimed:
                if paid_now:
                    logger.info("Order was paid concurrently, not activating again")
                order = await crud.order.update(db, db_obj=order, obj_in=order_in, uow=uow)

            if claimed:
                period = plan_logic.get_activation_period(
                    subscription.type,
                    today=today or utc_today(),
                    month_days=settings.MONTH_ACTIVATION_DAYS,
                )
                activation = await crud.activation.create(
                    db,
                    obj_in={
                        "subscription_id": subscription.id,
                        "start_date": period.start_date,
                        "end_date": period.end_date,
                    },
                    uow=uow,
                )
                await crud.subscription.set_current_activation(
                    db, db_obj=subscription, activation=activation, is_active=True, uow=uow
                )
                logger.info(f"Order paid, activated until {period.end_date}")

            order_out = schemas.Order.model_validate(order, from_attributes=True)

        return order_out


# Singleton instance
subscription_service = SubscriptionService()
