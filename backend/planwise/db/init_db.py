"""Initialize the database with its tables and the first superuser."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from planwise import crud, schemas
from planwise.core.config import settings
from planwise.core.exceptions import NotFoundException
from planwise.core.logging import logger
from planwise.models import Base


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables.

    Args:
    ----
        engine (AsyncEngine): The engine bound to the target database.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db(db: AsyncSession) -> None:
    """Initialize the database with the first superuser and their personal team.

    Args:
    ----
        db (AsyncSession): The database session.
    """
    try:
        await crud.user.get_by_email(db, email=settings.FIRST_SUPERUSER)
    except NotFoundException:
        logger.info(f"User {settings.FIRST_SUPERUSER} not found, creating...")
        user = await crud.user.create(
            db,
            obj_in=schemas.UserCreate(
                email=settings.FIRST_SUPERUSER,
                full_name=settings.FIRST_SUPERUSER_NAME,
                is_admin=True,
            ),
        )
        await crud.team.create(
            db,
            obj_in=schemas.TeamCreate(
                name=f"{settings.FIRST_SUPERUSER_NAME}'s team", is_personal=True, user_id=user.id
            ),
        )
