from datetime import datetime, timezone
from typing import Sequence, Optional, List
from uuid import UUID

from sqlalchemy import select, delete, update as sa_update
from sqlalchemy.orm import selectinload

from content.domain.models.content import Content
from content.domain.entities import ContentCreate, ContentUpdate
from shared.abstracts.abstract_repository import AbstractRepository

EDITABLE_FIELDS = ("path", "title", "description", "price", "file_url")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentRepository(AbstractRepository):

    def _select(self):
        # eager-load what the DTO needs; populate_existing refreshes rows already in the session
        return (
            select(Content)
            .options(
                selectinload(Content.creator),
                selectinload(Content.categories),
            )
            .execution_options(populate_existing=True)
        )

    async def insert(self, payload: ContentCreate, creator_id: UUID) -> Content:
        obj = Content(
            path=payload.path,
            title=payload.title,
            description=payload.description,
            price=payload.price,
            file_url=payload.file_url,
            creator_id=creator_id,
            views=0,
            date=_utcnow(),
        )
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def get(self, content_id: UUID) -> Optional[Content]:
        res = await self.db.execute(self._select().where(Content.id == content_id))
        return res.scalars().first()

    async def get_by_path(self, path: str) -> Optional[Content]:
        res = await self.db.execute(self._select().where(Content.path == path))
        return res.scalars().first()

    async def update(self, content_id: UUID, payload: ContentUpdate) -> Optional[Content]:
        data = payload.model_dump(include=set(EDITABLE_FIELDS))
        res = await self.db.execute(
            sa_update(Content)
            .where(Content.id == content_id)
            .values(**data, date=_utcnow())
        )
        if not getattr(res, "rowcount", 0):
            return None
        return await self.get(content_id)

    async def increment_views(self, content_id: UUID) -> None:
        """Single-statement increment so concurrent readers never lose a count."""
        await self.db.execute(
            sa_update(Content)
            .where(Content.id == content_id)
            .values(views=Content.views + 1)
        )

    async def delete(self, content_id: UUID) -> bool:
        res = await self.db.execute(delete(Content).where(Content.id == content_id))
        # rowcount can be None on some DBs; coerce safely
        return bool(getattr(res, "rowcount", 0))

    async def list(self, **filters) -> Sequence[Content]:
        stmt = self._select().order_by(Content.created_at.desc(), Content.path.asc())
        res = await self.db.execute(stmt)
        return res.scalars().unique().all()

    async def list_ids_by_creator(self, creator_id: UUID) -> List[UUID]:
        res = await self.db.execute(select(Content.id).where(Content.creator_id == creator_id))
        return [row[0] for row in res.all()]
