"""CRUD operations for the user model."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from planwise.core.exceptions import UserNotFoundException
from planwise.crud._base import CRUDBase
from planwise.models.user import User
from planwise.schemas.user import UserCreate


class CRUDUser(CRUDBase[User, UserCreate, UserCreate]):
    """CRUD operations for the user model."""

    async def get_by_email(self, db: AsyncSession, *, email: str) -> User:
        """Get a user by email.

        Args:
        ----
            db (AsyncSession): The database session.
            email (str): The email of the user to get.

        Returns:
        -------
            User: The user with the given email.

        Raises:
        ------
            UserNotFoundException: If no user with this email exists.
        """
        result = await db.execute(select(User).where(User.email == email))
        db_obj = result.scalar_one_or_none()
        if db_obj is None:
            raise UserNotFoundException(f"User with email {email} not found")
        return db_obj


user = CRUDUser(User, UserNotFoundException)
