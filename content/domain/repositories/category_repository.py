from __future__ import annotations

from typing import Iterable, List, Optional, Sequence
from uuid import UUID, uuid4

from sqlalchemy import delete, exists, select, update as sa_update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from content.domain.models.category import Category, content_categories
from shared.abstracts.abstract_repository import AbstractRepository


class CategoryRepository(AbstractRepository):
    # ---------- Query helpers ----------

    def _insert(self, table):
        insert_fn = sqlite_insert if self.db.get_bind().dialect.name == "sqlite" else pg_insert
        return insert_fn(table)

    async def get_by_name(self, name: str) -> Optional[Category]:
        res = await self.db.execute(select(Category).where(Category.name == name))
        return res.scalars().first()

    async def ensure_by_name(self, name: str) -> Category:
        """
        Return the category with this exact name, creating it on first use.
        The insert is a no-op when a concurrent request created the name after
        our lookup, so both callers end up with the same row.
        """
        existing = await self.get_by_name(name)
        if existing:
            return existing
        await self.db.execute(
            self._insert(Category.__table__)
            .values(id=uuid4(), name=name)
            .on_conflict_do_nothing(index_elements=["name"])
        )
        res = await self.db.execute(
            select(Category)
            .where(Category.name == name)
            .execution_options(populate_existing=True)
        )
        return res.scalars().one()

    # ---------- Link management (no lazy collection access) ----------

    async def link(self, category_id: UUID, content_id: UUID) -> None:
        """Add the pair to the link table; adding an existing pair is a no-op."""
        values = {"content_id": content_id, "category_id": category_id}
        await self.db.execute(self._insert(content_categories).values(**values).on_conflict_do_nothing())

    async def unlink_content(self, content_id: UUID) -> List[UUID]:
        """Drop every link of a content; returns the category ids it belonged to."""
        res = await self.db.execute(
            select(content_categories.c.category_id).where(
                content_categories.c.content_id == content_id
            )
        )
        category_ids = [row[0] for row in res.all()]
        await self.db.execute(
            delete(content_categories).where(content_categories.c.content_id == content_id)
        )
        return category_ids

    async def delete_if_empty(self, category_ids: Iterable[UUID]) -> List[UUID]:
        """Delete the given categories that no longer have any content. Returns the deleted ids."""
        idlist = list(category_ids)
        if not idlist:
            return []
        has_links = exists().where(content_categories.c.category_id == Category.id)
        res = await self.db.execute(
            select(Category.id).where(Category.id.in_(idlist), ~has_links)
        )
        empty = [row[0] for row in res.all()]
        if empty:
            await self.db.execute(delete(Category).where(Category.id.in_(empty)))
        return empty

    # ---------- AbstractRepository CRUD ----------

    async def insert(self, obj: Category) -> Category:
        if obj.id is None:
            obj.id = uuid4()
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def get(self, entity_id: UUID) -> Optional[Category]:
        res = await self.db.execute(select(Category).where(Category.id == entity_id))
        return res.scalars().first()

    async def update(self, entity_id: UUID, obj: Category) -> Optional[Category]:
        await self.db.execute(
            sa_update(Category)
            .where(Category.id == entity_id)
            .values(name=obj.name)
        )
        return await self.get(entity_id)

    async def delete(self, entity_id: UUID) -> bool:
        res = await self.db.execute(delete(Category).where(Category.id == entity_id))
        return bool(getattr(res, "rowcount", 0))

    async def list(self, **filters) -> Sequence[Category]:
        res = await self.db.execute(select(Category).order_by(Category.name.asc()))
        return res.scalars().all()
