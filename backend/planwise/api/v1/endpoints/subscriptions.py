"""API endpoints for subscriptions, their activations and their orders."""

from typing import List
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from planwise import schemas
from planwise.api import deps
from planwise.api.context import ApiContext
from planwise.api.router import TrailingSlashRouter
from planwise.core.subscription_service import subscription_service

router = TrailingSlashRouter()


@router.get("/", response_model=List[schemas.SubscriptionWithRelations])
async def list(
    db: AsyncSession = Depends(deps.get_db),
) -> List[schemas.SubscriptionWithRelations]:
    """List all subscriptions with their plan, team and current activation."""
    return await subscription_service.list(db)


@router.get("/{subscription_id}", response_model=schemas.SubscriptionWithRelations)
async def get(
    subscription_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> schemas.SubscriptionWithRelations:
    """Get a subscription with its plan, team and current activation."""
    return await subscription_service.get(db, subscription_id=subscription_id)


@router.post("/", response_model=schemas.MutationResult)
async def create(
    subscription_in: schemas.SubscriptionCreate,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.MutationResult:
    """Subscribe one of your teams to a plan."""
    await subscription_service.create(db, subscription_in=subscription_in, ctx=ctx)
    return schemas.MutationResult()


@router.put("/{subscription_id}", response_model=schemas.MutationResult)
async def update(
    subscription_id: UUID,
    subscription_in: schemas.SubscriptionUpdate,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.MutationResult:
    """Set a subscription's active flag and current activation."""
    await subscription_service.update(
        db, subscription_id=subscription_id, subscription_in=subscription_in, ctx=ctx
    )
    return schemas.MutationResult()


@router.get("/{subscription_id}/activations", response_model=List[schemas.Activation])
async def list_activations(
    subscription_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
) -> List[schemas.Activation]:
    """Get the activation history of a subscription, newest first."""
    return await subscription_service.list_activations(
        db, subscription_id=subscription_id, ctx=ctx
    )


@router.post("/activations", response_model=schemas.MutationResult)
async def create_activation(
    activation_in: schemas.ActivationCreate,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.MutationResult:
    """Record an activation period, optionally making it the current one."""
    await subscription_service.create_activation(db, activation_in=activation_in, ctx=ctx)
    return schemas.MutationResult()


@router.put("/activations/{activation_id}", response_model=schemas.MutationResult)
async def update_activation(
    activation_id: UUID,
    activation_in: schemas.ActivationUpdate,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.MutationResult:
    """Change an activation's dates or move it to another subscription."""
    await subscription_service.update_activation(
        db, activation_id=activation_id, activation_in=activation_in, ctx=ctx
    )
    return schemas.MutationResult()


@router.post("/orders", response_model=schemas.MutationResult)
async def create_order(
    order_in: schemas.OrderCreate,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.MutationResult:
    """Open an order against a subscription. Used by the billing job."""
    await subscription_service.create_order(db, order_in=order_in, ctx=ctx)
    return schemas.MutationResult()


@router.put("/orders/{order_id}", response_model=schemas.MutationResult)
async def update_order(
    order_id: UUID,
    order_in: schemas.OrderUpdate,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.MutationResult:
    """Update an order. Paying a PENDING order activates its subscription."""
    await subscription_service.update_order(db, order_id=order_id, order_in=order_in, ctx=ctx)
    return schemas.MutationResult()
