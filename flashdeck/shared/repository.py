"""Base repository with the async persistence primitives every table needs."""

import uuid
from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import safe

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    """Repository over a single SQLAlchemy model.

    Writes only flush; committing is left to the request-scoped session
    so that several repository calls share one transaction.

    Example:
        class DeckRepository(BaseRepository[Deck]):
            model = Deck

        repo = DeckRepository(session)
        deck = await repo.get_by_id(deck_id)
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def get_by_id(self, id: uuid.UUID) -> ModelT | None:
        """Get a record by its primary key.

        Args:
            id: The UUID of the record.

        Returns:
            The model instance if found, None otherwise.
        """
        return await self._session.get(self.model, id)

    async def get_many_by_ids(self, ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, ModelT]:
        """Fetch several records in one query, keyed by id."""
        unique_ids = set(ids)
        if not unique_ids:
            return {}
        stmt = select(self.model).where(self.model.id.in_(unique_ids))  # type: ignore[attr-defined]
        result = await self._session.execute(stmt)
        return {row.id: row for row in result.scalars().all()}  # type: ignore[attr-defined]

    @safe
    async def add(self, instance: ModelT) -> ModelT:
        """Persist a new instance and load server-generated columns.

        Raises:
            DuplicateResourceError: A unique constraint was violated.
        """
        self._session.add(instance)
        await self._session.flush()
        await self._session.refresh(instance)
        return instance

    @safe
    async def save(self, instance: ModelT) -> ModelT:
        """Flush pending changes of an already persistent instance."""
        await self._session.flush()
        await self._session.refresh(instance)
        return instance

    @safe
    async def delete(self, instance: ModelT) -> None:
        await self._session.delete(instance)
        await self._session.flush()

    async def count(self, stmt: Select[Any]) -> int:
        """Count rows produced by an arbitrary select."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        return (await self._session.scalar(count_stmt)) or 0

    async def fetch_page(self, stmt: Select[Any], offset: int, limit: int) -> Sequence[ModelT]:
        result = await self._session.execute(stmt.offset(offset).limit(limit))
        return result.scalars().all()
