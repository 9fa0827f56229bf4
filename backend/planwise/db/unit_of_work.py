"""Unit of work for database transactions."""

from sqlalchemy.ext.asyncio import AsyncSession

from planwise.core.logging import logger


class UnitOfWork:
    """Unit of work for database transactions.

    Usage:
    -----
    ```python

    await crud.order.create(db, obj_in=obj_in)  # commits automatically

    async with UnitOfWork(db) as uow:
        await crud.subscription.set_current_activation(db, subscription, None, uow=uow)
        await crud.order.create(db, obj_in=order_in, uow=uow)

    # Committed when the block exits cleanly, rolled back if it raises.
    ```

    """

    def __init__(self, session: AsyncSession):
        """Initialize the UnitOfWork with a database session.

        Args:
        ----
            session (AsyncSession): The database session.

        """
        self.session = session
        self._committed = False
        self._rolledback = False

    @property
    def committed(self) -> bool:
        """Whether the transaction has been committed."""
        return self._committed

    @property
    def rolledback(self) -> bool:
        """Whether the transaction has been rolled back."""
        return self._rolledback

    async def commit(self) -> None:
        """Commit the transaction.

        If the transaction has already been committed or rolled back, this method does nothing.
        """
        if not self._committed and not self._rolledback:
            await self.session.commit()
            self._committed = True

    async def rollback(self) -> None:
        """Rollback the transaction.

        If the transaction has already been committed or rolled back, this method does nothing.
        """
        if not self._committed and not self._rolledback:
            await self.session.rollback()
            self._rolledback = True

    async def __aenter__(self) -> "UnitOfWork":
        """Enter the context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Commit on clean exit, roll back and let the exception propagate otherwise."""
        if exc_type is not None:
            logger.with_context(error_type=exc_type.__name__).warning(
                f"Rolling back transaction: {exc_val}"
            )
            await self.rollback()
        else:
            await self.commit()
