"""API endpoints for plans."""

from typing import List
from uuid import UUID

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from planwise import schemas
from planwise.api import deps
from planwise.api.context import ApiContext
from planwise.api.router import TrailingSlashRouter
from planwise.core.plan_service import plan_service

router = TrailingSlashRouter()


@router.get("/", response_model=List[schemas.Plan])
async def list(
    db: AsyncSession = Depends(deps.get_db),
) -> List[schemas.Plan]:
    """List all plans."""
    return await plan_service.list(db)


@router.get("/{plan_id}", response_model=schemas.Plan)
async def get(
    plan_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> schemas.Plan:
    """Get a plan by ID."""
    return await plan_service.get(db, plan_id=plan_id)


@router.post("/", response_model=schemas.MutationResult)
async def create(
    plan_in: schemas.PlanCreate,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.MutationResult:
    """Add a plan to the catalog. Requires an admin."""
    await plan_service.create(db, plan_in=plan_in, ctx=ctx)
    return schemas.MutationResult()


@router.put("/{plan_id}", response_model=schemas.MutationResult)
async def update(
    plan_id: UUID,
    plan_in: schemas.PlanUpdate,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.MutationResult:
    """Replace a plan's name and price. Requires an admin."""
    await plan_service.update(db, plan_id=plan_id, plan_in=plan_in, ctx=ctx)
    return schemas.MutationResult()


@router.get("/{plan_id}/upgrade-cost", response_model=schemas.UpgradeCost)
async def get_upgrade_cost(
    plan_id: UUID,
    activation_id: UUID = Query(..., description="Activation whose unused days are credited"),
    db: AsyncSession = Depends(deps.get_db),
) -> schemas.UpgradeCost:
    """Preview what moving an activation's subscription to this plan would cost today."""
    return await plan_service.calculate_upgrade_cost(
        db, new_plan_id=plan_id, activation_id=activation_id
    )


@router.post("/upgrade", response_model=schemas.MutationResult)
async def upgrade(
    upgrade_in: schemas.UpgradePlanRequest,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.MutationResult:
    """Move a subscription to a more expensive plan.

    The subscription loses its current activation and a PENDING order for the
    prorated cost is opened; paying it starts the new activation.
    """
    await plan_service.upgrade_plan(db, upgrade_in=upgrade_in, ctx=ctx)
    return schemas.MutationResult()
