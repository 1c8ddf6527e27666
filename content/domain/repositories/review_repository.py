from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select

from content.domain.entities.review import ReviewCreate
from content.domain.models.review import Review
from shared.abstracts.abstract_repository import AbstractRepository


class ReviewRepository(AbstractRepository):
    async def insert(self, content_id: UUID, author_id: UUID, payload: ReviewCreate) -> Review:
        obj = Review(content_id=content_id, author_id=author_id, rating=payload.rating, body=payload.body)
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def get(self, review_id: UUID) -> Optional[Review]:
        res = await self.db.execute(select(Review).where(Review.id == review_id))
        return res.scalars().first()

    async def list(self, **filters) -> Sequence[Review]:
        stmt = select(Review)
        if filters.get("content_id"):
            stmt = stmt.where(Review.content_id == filters["content_id"])
        if filters.get("author_id"):
            stmt = stmt.where(Review.author_id == filters["author_id"])
        res = await self.db.execute(stmt.order_by(Review.created_at.asc()))
        return res.scalars().all()

    async def list_ids_by_author(self, author_id: UUID) -> List[UUID]:
        res = await self.db.execute(select(Review.id).where(Review.author_id == author_id))
        return [row[0] for row in res.all()]

    async def delete_for_content(self, content_id: UUID) -> int:
        res = await self.db.execute(delete(Review).where(Review.content_id == content_id))
        return int(getattr(res, "rowcount", 0) or 0)

    async def delete(self, review_id: UUID) -> bool:
        res = await self.db.execute(delete(Review).where(Review.id == review_id))
        return bool(getattr(res, "rowcount", 0))

    async def update(self, entity_id: UUID, obj: Review) -> Optional[Review]:
        raise NotImplementedError("Reviews are immutable")
