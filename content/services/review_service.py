from typing import List
from uuid import UUID

from content.domain.entities.review import ReviewCreate, ReviewOut
from shared.abstracts.abstract_repository import AbstractRepository
from shared.exceptions import NotFoundError


class ReviewService:
    def __init__(self, repo: AbstractRepository, contents_repo: AbstractRepository):
        self.repo = repo
        self.contents_repo = contents_repo

    async def add(self, path: str, author_id: UUID, payload: ReviewCreate) -> ReviewOut:
        async with self.repo.transaction():
            content = await self._content_or_404(path)
            review = await self.repo.insert(content.id, author_id, payload)
        return ReviewOut.model_validate(review)

    async def list_for(self, path: str) -> List[ReviewOut]:
        content = await self._content_or_404(path)
        rows = await self.repo.list(content_id=content.id)
        return [ReviewOut.model_validate(r) for r in rows]

    async def _content_or_404(self, path: str):
        content = await self.contents_repo.get_by_path(path)
        if not content:
            raise NotFoundError("content_not_found", path=path)
        return content
