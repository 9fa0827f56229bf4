"""Base CRUD class shared by all billing resources."""

from enum import Enum
from typing import Any, Generic, Optional, Sequence, Type, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from planwise.core.exceptions import NotFoundException
from planwise.db.unit_of_work import UnitOfWork
from planwise.models._base import Base


def _to_column_values(obj_in: dict[str, Any]) -> dict[str, Any]:
    """Store enum members by value; columns hold plain strings."""
    return {k: v.value if isinstance(v, Enum) else v for k, v in obj_in.items()}


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """CRUD for billing resources.

    Access control is not applied here; ownership checks are made by the
    services, which know which team a resource hangs off.
    """

    def __init__(
        self,
        model: Type[ModelType],
        not_found_exception: Type[NotFoundException] = NotFoundException,
    ):
        """Initialize the CRUD object.

        Args:
        ----
            model (Type[ModelType]): The model to be used in the CRUD operations.
            not_found_exception (Type[NotFoundException]): Raised by ``get`` on a miss.
        """
        self.model = model
        self.not_found_exception = not_found_exception

    async def get(
        self,
        db: AsyncSession,
        id: UUID,
        *,
        options: Sequence[ORMOption] = (),
    ) -> ModelType:
        """Get a resource by ID.

        Args:
        ----
            db (AsyncSession): The database session.
            id (UUID): The UUID of the object to get.
            options (Sequence[ORMOption]): Loader options, e.g. eager loads of relations.

        Returns:
        -------
            ModelType: The object with the given ID.

        Raises:
        ------
            NotFoundException: If no object with this ID exists.
        """
        query = select(self.model).where(self.model.id == id)
        if options:
            # Eager loads must overwrite relations expired by an earlier refresh
            query = query.options(*options).execution_options(populate_existing=True)

        result = await db.execute(query)
        db_obj = result.unique().scalar_one_or_none()
        if db_obj is None:
            raise self.not_found_exception(f"{self.model.__name__} with ID {id} not found")
        return db_obj

    async def get_multi(
        self,
        db: AsyncSession,
        *,
        skip: int = 0,
        limit: Optional[int] = None,
        options: Sequence[ORMOption] = (),
    ) -> list[ModelType]:
        """Get resources ordered by creation time.

        Args:
        ----
            db (AsyncSession): The database session.
            skip (int): The number of objects to skip.
            limit (Optional[int]): The number of objects to return, unbounded when None.
            options (Sequence[ORMOption]): Loader options.

        Returns:
        -------
            list[ModelType]: A list of objects.
        """
        query = select(self.model).order_by(self.model.created_at).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        if options:
            query = query.options(*options).execution_options(populate_existing=True)

        result = await db.execute(query)
        return list(result.unique().scalars().all())

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: Union[CreateSchemaType, dict[str, Any]],
        uow: Optional[UnitOfWork] = None,
    ) -> ModelType:
        """Create a resource.

        Args:
        ----
            db (AsyncSession): The database session.
            obj_in (Union[CreateSchemaType, dict[str, Any]]): The object to create.
            uow (Optional[UnitOfWork]): The unit of work to use for the transaction.

        Returns:
        -------
            ModelType: The created object. Inside a unit of work it is flushed, so its
                ID is populated, but not committed.
        """
        if not isinstance(obj_in, dict):
            obj_in = obj_in.model_dump(exclude_unset=True, mode="python")
        obj_in = _to_column_values(obj_in)

        db_obj = self.model(**obj_in)
        db.add(db_obj)

        if uow:
            await db.flush()
        else:
            await db.commit()
            await db.refresh(db_obj)

        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, dict[str, Any]],
        uow: Optional[UnitOfWork] = None,
    ) -> ModelType:
        """Update a resource.

        Args:
        ----
            db (AsyncSession): The database session.
            db_obj (ModelType): The object to update.
            obj_in (Union[UpdateSchemaType, dict[str, Any]]): The new object data.
            uow (Optional[UnitOfWork]): The unit of work to use for the transaction.

        Returns:
        -------
            ModelType: The updated object.
        """
        if not isinstance(obj_in, dict):
            obj_in = obj_in.model_dump(exclude_unset=True, mode="python")
        obj_in = _to_column_values(obj_in)

        for field, value in obj_in.items():
            setattr(db_obj, field, value)

        if uow:
            await db.flush()
        else:
            await db.commit()
            await db.refresh(db_obj)

        return db_obj
