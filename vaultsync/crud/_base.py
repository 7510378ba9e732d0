"""Base class for CRUD operations."""

from typing import Any, Generic, Optional, Type, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from vaultsync.core.exceptions import NotFoundException
from vaultsync.db.unit_of_work import UnitOfWork
from vaultsync.models._base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Base class for CRUD operations.

    Authorization happens before the data layer is reached; these methods only
    read and write rows. Writes commit immediately unless a unit of work is passed,
    in which case they run on the unit of work's session and are flushed but not
    committed.
    """

    def __init__(self, model: Type[ModelType]):
        """Initialize the CRUD object.

        Args:
        ----
            model (Type[ModelType]): The model to be used in the CRUD operations.

        """
        self.model = model

    def _select(self) -> Select:
        """Base query; subclasses add ordering or joins."""
        return select(self.model)

    @staticmethod
    def _session(db: AsyncSession, uow: Optional[UnitOfWork]) -> AsyncSession:
        return uow.session if uow else db

    async def get(self, db: AsyncSession, id: UUID) -> Optional[ModelType]:
        """Get a single object by ID.

        Args:
        ----
            db (AsyncSession): The database session.
            id (UUID): The UUID of the object to get.

        Returns:
        -------
            Optional[ModelType]: The object with the given ID, None if it does not exist.

        """
        result = await db.execute(self._select().where(self.model.id == id))
        return result.unique().scalar_one_or_none()

    async def find(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
        *,
        uow: Optional[UnitOfWork] = None,
    ) -> list[ModelType]:
        """Get all objects whose columns equal the given values.

        Args:
        ----
            db (AsyncSession): The database session.
            filters (dict[str, Any]): Column name to value.
            uow (Optional[UnitOfWork]): Run inside this unit of work's transaction.

        Returns:
        -------
            list[ModelType]: The matching objects.

        """
        session = self._session(db, uow)
        result = await session.execute(self._select().filter_by(**filters))
        return list(result.unique().scalars().all())

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: Union[CreateSchemaType, dict[str, Any]],
        uow: Optional[UnitOfWork] = None,
    ) -> ModelType:
        """Create a new object.

        Args:
        ----
            db (AsyncSession): The database session.
            obj_in (Union[CreateSchemaType, dict[str, Any]]): The object to create.
            uow (Optional[UnitOfWork]): The unit of work to use for the transaction.

        Returns:
        -------
            ModelType: The created object.

        """
        if not isinstance(obj_in, dict):
            obj_in = obj_in.model_dump(exclude_unset=True)

        session = self._session(db, uow)
        db_obj = self.model(**obj_in)
        session.add(db_obj)

        if uow:
            await session.flush()
        else:
            await session.commit()
            await session.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, dict[str, Any]],
        uow: Optional[UnitOfWork] = None,
    ) -> ModelType:
        """Update an object, replacing every given field.

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
            obj_in = obj_in.model_dump(exclude_unset=True)

        for field, value in obj_in.items():
            setattr(db_obj, field, value)

        session = self._session(db, uow)
        if uow:
            await session.flush()
        else:
            await session.commit()
            await session.refresh(db_obj)
        return db_obj

    async def remove(
        self,
        db: AsyncSession,
        *,
        id: UUID,
        uow: Optional[UnitOfWork] = None,
    ) -> ModelType:
        """Delete an object.

        Args:
        ----
            db (AsyncSession): The database session.
            id (UUID): The UUID of the object to delete.
            uow (Optional[UnitOfWork]): The unit of work to use for the transaction.

        Returns:
        -------
            ModelType: The deleted object.

        Raises:
        ------
            NotFoundException: If the object does not exist.

        """
        session = self._session(db, uow)
        result = await session.execute(self._select().where(self.model.id == id))
        db_obj = result.unique().scalar_one_or_none()
        if db_obj is None:
            raise NotFoundException(f"{self.model.__name__} not found")

        await session.delete(db_obj)

        if uow:
            # Later reads in the same transaction must not see the row
            await session.flush()
        else:
            await session.commit()
        return db_obj
