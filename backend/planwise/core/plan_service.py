"""Plan service.

Manages the plan catalog and mid-cycle plan upgrades. Upgrades are priced by
``planwise.billing.plan_logic`` and settled by a PENDING order; paying that
order (see ``subscription_service.update_order``) starts the next activation.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from planwise import crud, schemas
from planwise.api.context import ApiContext
from planwise.billing import plan_logic
from planwise.core.access import validate_admin, validate_team_access
from planwise.core.config import settings
from planwise.core.datetime_utils import utc_today
from planwise.core.exceptions import SubscriptionNotActiveError
from planwise.db.unit_of_work import UnitOfWork


class PlanService:
    """Service for the plan catalog and plan upgrades."""

    async def get(self, db: AsyncSession, plan_id: UUID) -> schemas.Plan:
        """Get a plan by ID."""
        plan = await crud.plan.get(db, id=plan_id)
        return schemas.Plan.model_validate(plan, from_attributes=True)

    async def list(self, db: AsyncSession) -> list[schemas.Plan]:
        """List all plans."""
        plans = await crud.plan.get_multi(db)
        return [schemas.Plan.model_validate(plan, from_attributes=True) for plan in plans]

    async def create(
        self, db: AsyncSession, plan_in: schemas.PlanCreate, ctx: ApiContext
    ) -> schemas.Plan:
        """Add a plan to the catalog. Admin only."""
        validate_admin(ctx)

        plan = await crud.plan.create(db, obj_in=plan_in)
        ctx.logger.with_context(plan_id=str(plan.id)).info(f"Created plan '{plan.name}'")
        return schemas.Plan.model_validate(plan, from_attributes=True)

    async def update(
        self,
        db: AsyncSession,
        plan_id: UUID,
        plan_in: schemas.PlanUpdate,
        ctx: ApiContext,
    ) -> schemas.Plan:
        """Replace a plan's name and price. Admin only.

        Existing orders keep the amount they were created with.
        """
        validate_admin(ctx)

        plan = await crud.plan.get(db, id=plan_id)
        plan = await crud.plan.update(db, db_obj=plan, obj_in=plan_in)
        ctx.logger.with_context(plan_id=str(plan.id)).info(
            f"Updated plan '{plan.name}' (price={plan.price})"
        )
        return schemas.Plan.model_validate(plan, from_attributes=True)

    async def calculate_upgrade_cost(
        self,
        db: AsyncSession,
        new_plan_id: UUID,
        activation_id: UUID,
        today: Optional[date] = None,
    ) -> schemas.UpgradeCost:
        """Price a move from the activation's current plan to another plan.

        Args:
        ----
            db (AsyncSession): The database session.
            new_plan_id (UUID): The plan to move to.
            activation_id (UUID): The activation whose unused days are credited.
            today (Optional[date]): The day of the upgrade, today (UTC) by default.

        Returns:
        -------
            schemas.UpgradeCost: The prorated amount due.

        Raises:
        ------
            ActivationNotFoundException: If the activation does not exist.
            PlanNotFoundException: If the new plan does not exist.
            InvalidPlanChangeError: If the new plan is cheaper than the current one.
        """
        activation = await crud.activation.get_with_subscription(db, id=activation_id)
        new_plan = await crud.plan.get(db, id=new_plan_id)

        cost = plan_logic.calculate_upgrade_cost(
            current_price=activation.subscription.plan.price,
            new_price=new_plan.price,
            end_date=activation.end_date,
            today=today or utc_today(),
            days_per_month=settings.PRORATION_DAYS_PER_MONTH,
        )
        return schemas.UpgradeCost(upgrade_cost=float(cost))

    async def upgrade_plan(
        self,
        db: AsyncSession,
        upgrade_in: schemas.UpgradePlanRequest,
        ctx: ApiContext,
        today: Optional[date] = None,
    ) -> schemas.Order:
        """Move a subscription to a new plan and open an order for the prorated cost.

        The subscription switches plan and loses its current activation; it has
        no service until the returned order is paid.

        Args:
        ----
            db (AsyncSession): The database session.
            upgrade_in (schemas.UpgradePlanRequest): Subscription and target plan.
            ctx (ApiContext): The API context.
            today (Optional[date]): The day of the upgrade, today (UTC) by default.

        Returns:
        -------
            schemas.Order: The PENDING order for the upgrade cost.

        Raises:
        ------
            SubscriptionNotFoundException: If the subscription does not exist.
            PermissionException: If the caller does not own the subscription's team.
            SubscriptionNotActiveError: If the subscription has no current activation.
            InvalidPlanChangeError: If the new plan is cheaper than the current one.
        """
        subscription = await crud.subscription.get_with_relations(
            db, id=upgrade_in.subscription_id
        )
        validate_team_access(ctx, subscription.team)

        if subscription.activation_id is None:
            raise SubscriptionNotActiveError()

        cost = await self.calculate_upgrade_cost(
            db,
            new_plan_id=upgrade_in.new_plan_id,
            activation_id=subscription.activation_id,
            today=today,
        )

        logger = ctx.logger.with_context(subscription_id=str(subscription.id))
        async with UnitOfWork(db) as uow:
            await crud.subscription.update(
                db, db_obj=subscription, obj_in={"plan_id": upgrade_in.new_plan_id}, uow=uow
            )
            await crud.subscription.set_current_activation(
                db, db_obj=subscription, activation=None, uow=uow
            )
            order = await crud.order.create(
                db,
                obj_in=schemas.OrderCreate(
                    subscription_id=subscription.id,
                    due_payment=cost.upgrade_cost,
                ),
                uow=uow,
            )
            order_out = schemas.Order.model_validate(order, from_attributes=True)

        logger.info(
            f"Upgraded to plan {upgrade_in.new_plan_id}, "
            f"order {order_out.id} due {order_out.due_payment}"
        )
        return order_out


# Singleton instance
plan_service = PlanService()
