"""Unit of work for database transactions."""

from sqlalchemy.ext.asyncio import AsyncSession


class UnitOfWork:
    """Unit of work for database transactions.

    CRUD calls commit on their own unless they are handed a unit of work. Inside
    one, nothing is committed until the context manager exits cleanly; any
    exception rolls the whole transaction back and propagates.

    Usage:
    -----
    ```python
    async with UnitOfWork(db) as uow:
        await crud.integration.remove(db, id=integration_id, uow=uow)
        await uow.session.flush()
        remaining = await crud.integration.find(db, {"integration_auth_id": auth_id}, uow=uow)
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
        """Commit the transaction, unless it already finished."""
        if not self._committed and not self._rolledback:
            await self.session.commit()
            self._committed = True

    async def rollback(self) -> None:
        """Roll back the transaction, unless it already finished."""
        if not self._committed and not self._rolledback:
            await self.session.rollback()
            self._rolledback = True

    async def __aenter__(self) -> "UnitOfWork":
        """Enter the context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Commit on a clean exit, roll back when an exception is propagating."""
        if exc_type is not None:
            await self.rollback()
        else:
            await self.commit()
