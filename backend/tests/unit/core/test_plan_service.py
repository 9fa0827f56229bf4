"""Unit tests for the plan service, run against an in-memory database."""

from datetime import date
from uuid import uuid4

import pytest

from planwise import crud, schemas
from planwise.core.exceptions import (
    ActivationNotFoundException,
    InvalidPlanChangeError,
    PermissionException,
    PlanNotFoundException,
    SubscriptionNotActiveError,
    SubscriptionNotFoundException,
)
from planwise.core.plan_service import plan_service
from planwise.core.shared_models import OrderStatus
from tests.fixtures.common import TODAY


class TestPlanCatalog:
    """Tests for reading and administering plans."""

    async def test_get_plan(self, db_session, basic_plan):
        plan = await plan_service.get(db_session, basic_plan.id)

        assert plan.id == basic_plan.id
        assert plan.name == "Basic"
        assert plan.price == 30

    async def test_get_missing_plan(self, db_session):
        with pytest.raises(PlanNotFoundException):
            await plan_service.get(db_session, uuid4())

    async def test_list_plans(self, db_session, basic_plan, pro_plan):
        plans = await plan_service.list(db_session)

        assert [plan.name for plan in plans] == ["Basic", "Pro"]

    async def test_admin_creates_plan(self, db_session, admin_ctx):
        plan = await plan_service.create(
            db_session, schemas.PlanCreate(name="Team", price=99.5), admin_ctx
        )

        stored = await crud.plan.get(db_session, plan.id)
        assert stored.name == "Team"
        assert stored.price == 99.5

    async def test_non_admin_cannot_create_plan(self, db_session, owner_ctx):
        with pytest.raises(PermissionException):
            await plan_service.create(
                db_session, schemas.PlanCreate(name="Team", price=10), owner_ctx
            )

        assert await crud.plan.get_multi(db_session) == []

    async def test_admin_updates_plan(self, db_session, admin_ctx, basic_plan):
        created_modified_at = basic_plan.modified_at

        plan = await plan_service.update(
            db_session, basic_plan.id, schemas.PlanUpdate(name="Starter", price=35), admin_ctx
        )

        assert plan.name == "Starter"
        assert plan.price == 35
        assert plan.modified_at >= created_modified_at

    async def test_non_admin_cannot_update_plan(self, db_session, owner_ctx, basic_plan):
        with pytest.raises(PermissionException):
            await plan_service.update(
                db_session, basic_plan.id, schemas.PlanUpdate(name="Free", price=0), owner_ctx
            )

        stored = await crud.plan.get(db_session, basic_plan.id)
        assert stored.price == 30

    async def test_update_missing_plan(self, db_session, admin_ctx):
        with pytest.raises(PlanNotFoundException):
            await plan_service.update(
                db_session, uuid4(), schemas.PlanUpdate(name="Ghost", price=1), admin_ctx
            )


class TestCalculateUpgradeCost:
    """Tests for pricing an upgrade from an activation."""

    async def test_prorated_cost(self, db_session, active_subscription, pro_plan):
        cost = await plan_service.calculate_upgrade_cost(
            db_session,
            new_plan_id=pro_plan.id,
            activation_id=active_subscription.activation_id,
            today=TODAY,
        )

        assert cost.upgrade_cost == 50.0

    async def test_expired_activation_pays_full_price(
        self, db_session, active_subscription, pro_plan
    ):
        cost = await plan_service.calculate_upgrade_cost(
            db_session,
            new_plan_id=pro_plan.id,
            activation_id=active_subscription.activation_id,
            today=date(2026, 2, 1),
        )

        assert cost.upgrade_cost == 60.0

    async def test_downgrade_rejected(self, db_session, active_subscription, pro_plan):
        await crud.subscription.update(
            db_session, db_obj=active_subscription, obj_in={"plan_id": pro_plan.id}
        )
        cheaper = await crud.plan.create(
            db_session, obj_in=schemas.PlanCreate(name="Cheap", price=5)
        )

        with pytest.raises(InvalidPlanChangeError):
            await plan_service.calculate_upgrade_cost(
                db_session,
                new_plan_id=cheaper.id,
                activation_id=active_subscription.activation_id,
                today=TODAY,
            )

    async def test_missing_activation(self, db_session, pro_plan):
        with pytest.raises(ActivationNotFoundException):
            await plan_service.calculate_upgrade_cost(
                db_session, new_plan_id=pro_plan.id, activation_id=uuid4(), today=TODAY
            )

    async def test_missing_plan(self, db_session, active_subscription):
        with pytest.raises(PlanNotFoundException):
            await plan_service.calculate_upgrade_cost(
                db_session,
                new_plan_id=uuid4(),
                activation_id=active_subscription.activation_id,
                today=TODAY,
            )


class TestUpgradePlan:
    """Tests for moving a subscription to a new plan."""

    async def test_upgrade_opens_pending_order(
        self, db_session, owner_ctx, active_subscription, pro_plan
    ):
        order = await plan_service.upgrade_plan(
            db_session,
            schemas.UpgradePlanRequest(
                new_plan_id=pro_plan.id, subscription_id=active_subscription.id
            ),
            owner_ctx,
            today=TODAY,
        )

        assert order.status == OrderStatus.PENDING
        assert order.due_payment == 50.0
        assert order.subscription_id == active_subscription.id

        subscription = await crud.subscription.get_with_relations(
            db_session, active_subscription.id
        )
        assert subscription.plan_id == pro_plan.id
        assert subscription.activation_id is None

        orders = await crud.order.get_by_subscription(
            db_session, subscription_id=subscription.id, status=OrderStatus.PENDING
        )
        assert [o.id for o in orders] == [order.id]

    async def test_upgrade_keeps_activation_history(
        self, db_session, owner_ctx, active_subscription, pro_plan
    ):
        previous_activation_id = active_subscription.activation_id

        await plan_service.upgrade_plan(
            db_session,
            schemas.UpgradePlanRequest(
                new_plan_id=pro_plan.id, subscription_id=active_subscription.id
            ),
            owner_ctx,
            today=TODAY,
        )

        history = await crud.activation.get_by_subscription(
            db_session, subscription_id=active_subscription.id
        )
        assert [activation.id for activation in history] == [previous_activation_id]

    async def test_cost_floored_at_zero(
        self, db_session, owner_ctx, active_subscription, pro_plan
    ):
        order = await plan_service.upgrade_plan(
            db_session,
            schemas.UpgradePlanRequest(
                new_plan_id=pro_plan.id, subscription_id=active_subscription.id
            ),
            owner_ctx,
            # 80 days left credit 80.00 against a 60.00 plan
            today=date(2025, 11, 1),
        )

        assert order.due_payment == 0.0

    async def test_subscription_without_activation(
        self, db_session, owner_ctx, subscription, pro_plan
    ):
        with pytest.raises(SubscriptionNotActiveError):
            await plan_service.upgrade_plan(
                db_session,
                schemas.UpgradePlanRequest(
                    new_plan_id=pro_plan.id, subscription_id=subscription.id
                ),
                owner_ctx,
                today=TODAY,
            )

    async def test_non_owner_rejected(self, db_session, other_ctx, active_subscription, pro_plan):
        with pytest.raises(PermissionException):
            await plan_service.upgrade_plan(
                db_session,
                schemas.UpgradePlanRequest(
                    new_plan_id=pro_plan.id, subscription_id=active_subscription.id
                ),
                other_ctx,
                today=TODAY,
            )

    async def test_admin_is_not_owner(self, db_session, admin_ctx, active_subscription, pro_plan):
        with pytest.raises(PermissionException):
            await plan_service.upgrade_plan(
                db_session,
                schemas.UpgradePlanRequest(
                    new_plan_id=pro_plan.id, subscription_id=active_subscription.id
                ),
                admin_ctx,
                today=TODAY,
            )

    async def test_missing_subscription(self, db_session, owner_ctx, pro_plan):
        with pytest.raises(SubscriptionNotFoundException):
            await plan_service.upgrade_plan(
                db_session,
                schemas.UpgradePlanRequest(new_plan_id=pro_plan.id, subscription_id=uuid4()),
                owner_ctx,
                today=TODAY,
            )

    async def test_downgrade_leaves_subscription_untouched(
        self, db_session, owner_ctx, active_subscription, basic_plan, pro_plan
    ):
        await crud.subscription.update(
            db_session, db_obj=active_subscription, obj_in={"plan_id": pro_plan.id}
        )
        activation_id = active_subscription.activation_id

        with pytest.raises(InvalidPlanChangeError):
            await plan_service.upgrade_plan(
                db_session,
                schemas.UpgradePlanRequest(
                    new_plan_id=basic_plan.id, subscription_id=active_subscription.id
                ),
                owner_ctx,
                today=TODAY,
            )

        subscription = await crud.subscription.get_with_relations(
            db_session, active_subscription.id
        )
        assert subscription.plan_id == pro_plan.id
        assert subscription.activation_id == activation_id
        assert await crud.order.get_by_subscription(
            db_session, subscription_id=subscription.id
        ) == []
