from abc import ABC, abstractmethod
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession


class AbstractRepository(ABC):
    """
    Minimal, framework-agnostic repository contract.

    Repositories only flush; committing is the caller's job so that one
    logical operation spanning several aggregates is a single transaction
    (see `transaction()`).
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @abstractmethod
    async def insert(self, obj): ...

    @abstractmethod
    async def update(self, entity_id, obj): ...

    @abstractmethod
    async def delete(self, entity_id) -> bool: ...

    @abstractmethod
    async def get(self, entity_id): ...

    @abstractmethod
    async def list(self, **filters): ...

    @asynccontextmanager
    async def transaction(self):
        """Commit on success, roll back on any error. Repositories sharing the session join it."""
        try:
            yield self.db
            await self.db.commit()
        except BaseException:
            await self.db.rollback()
            raise
