import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from content.domain.entities.content import ContentCreate, ContentUpdate
from shared.abstracts.abstract_repository import AbstractRepository
from shared.entities.content import ContentOut, CreatorOut
from shared.exceptions import ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


class ContentService:
    """
    Content lifecycle and the links that hang off it.

    Every mutation spans several aggregates (content, its category links,
    reviews) and runs as one transaction on the shared session:
    - create: insert content, ensure the category, link both sides.
    - edit: replace editable fields and refresh `date`; links untouched.
    - delete: resolve the content first, then drop reviews, links, the
      content, and any category left without contents.
    User membership is never written: it is derived from `creator_id`.
    """

    def __init__(
        self,
        repo: AbstractRepository,                 # ContentRepository
        categories_repo: AbstractRepository,      # CategoryRepository
        reviews_repo: AbstractRepository,         # ReviewRepository
    ):
        self.repo = repo
        self.categories_repo = categories_repo
        self.reviews_repo = reviews_repo

    # ---------- Mutations ----------

    async def create(self, payload: ContentCreate, creator_id: UUID) -> ContentOut:
        category_name = (payload.category or "").strip()
        try:
            async with self.repo.transaction():
                obj = await self.repo.insert(payload, creator_id)
                if category_name:
                    category = await self.categories_repo.ensure_by_name(category_name)
                    await self.categories_repo.link(category.id, obj.id)
        except IntegrityError:
            raise ConflictError("path_taken", path=payload.path)

        logger.info("Created content %s (%s) for user %s", payload.path, obj.id, creator_id)
        return _to_detail_dto(await self.repo.get(obj.id))

    async def edit(self, path: str, payload: ContentUpdate, requester_id: UUID) -> ContentOut:
        try:
            async with self.repo.transaction():
                obj = await self._get_owned(path, requester_id)
                updated = await self.repo.update(obj.id, payload)
        except IntegrityError:
            raise ConflictError("path_taken", path=payload.path)

        logger.info("Edited content %s -> %s", path, updated.path)
        return _to_detail_dto(updated)

    async def delete(self, path: str, requester_id: UUID) -> bool:
        async with self.repo.transaction():
            obj = await self._get_owned(path, requester_id)
            content_id = obj.id

            removed_reviews = await self.reviews_repo.delete_for_content(content_id)
            category_ids = await self.categories_repo.unlink_content(content_id)
            await self.repo.delete(content_id)
            removed_categories = await self.categories_repo.delete_if_empty(category_ids)

        logger.info(
            "Deleted content %s (%s): reviews removed=%d, empty categories removed=%d",
            path, content_id, removed_reviews, len(removed_categories),
        )
        return True

    # ---------- Queries ----------

    async def view(self, path: str) -> ContentOut:
        """Detail read; counts as one view."""
        async with self.repo.transaction():
            obj = await self._get_or_404(path)
            await self.repo.increment_views(obj.id)
        return _to_detail_dto(await self.repo.get(obj.id))

    async def get_for_edit(self, path: str, requester_id: UUID) -> ContentOut:
        obj = await self._get_owned(path, requester_id)
        return _to_detail_dto(obj)

    async def list(self) -> Sequence[ContentOut]:
        rows = await self.repo.list()
        return [_to_detail_dto(row) for row in rows]

    # ---------- Internal helpers ----------

    async def _get_or_404(self, path: str):
        obj = await self.repo.get_by_path(path)
        if not obj:
            raise NotFoundError("content_not_found", path=path)
        return obj

    async def _get_owned(self, path: str, requester_id: UUID):
        obj = await self._get_or_404(path)
        if obj.creator_id != requester_id:
            raise ForbiddenError("not_owner", path=path)
        return obj


# --- local helper ---
def _to_detail_dto(obj) -> ContentOut:
    return ContentOut(
        id=obj.id,
        path=obj.path,
        title=obj.title,
        description=obj.description,
        price=obj.price,
        file_url=obj.file_url,
        views=obj.views,
        creator=(CreatorOut.model_validate(obj.creator) if obj.creator else None),
        categories=sorted(c.name for c in (obj.categories or [])),
        date=obj.date,
        created_at=obj.created_at,
    )
