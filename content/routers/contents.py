from typing import List
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user
from app.core.database.db import get_session
from content.domain.entities.content import ContentCreate, ContentUpdate
from content.domain.repositories import CategoryRepository, ContentRepository, ReviewRepository
from content.services.content_service import ContentService
from shared.entities.content import ContentOut
from users.models.user import User

router = APIRouter(prefix="/v1/contents", tags=["contents"])

async def get_services(db: AsyncSession = Depends(get_session)) -> ContentService:
    return ContentService(ContentRepository(db), CategoryRepository(db), ReviewRepository(db))


def _location(path: str) -> str:
    return f"{router.prefix}/{path}"


_CONTENT_EXAMPLE = {
    "id": "7e6f5a20-5a62-4e25-9b02-8a8af5f1a901",
    "path": "intro-guide",
    "title": "Intro guide",
    "description": "Everything you need to get started.",
    "price": 9.5,
    "file_url": "https://contents.s3.us-east-1.amazonaws.com/content/3f2a_cover.png",
    "views": 3,
    "creator": {"id": "5d2a8c1f-6c53-4b1a-9f9a-c5f1f3e3c0d1", "name": "Dana"},
    "categories": ["design"],
    "date": "2025-08-14T20:12:44Z",
    "created_at": "2025-08-14T20:12:44Z",
}


@router.get(
    "",
    summary="List all contents",
    description="Returns every content item, unfiltered and unpaginated. **Auth:** none.",
    response_model=List[ContentOut],
    responses={
        200: {
            "description": "All content items.",
            "content": {"application/json": {"examples": {"list": {"value": [_CONTENT_EXAMPLE]}}}},
        },
    },
)
async def list_contents(services: ContentService = Depends(get_services)):
    return await services.list()


@router.post(
    "",
    summary="Create content",
    description=(
        "Creates a content item owned by the caller.\n\n"
        "If `category` names a category that does not exist yet, it is created. "
        "The new item is linked to the category and to its creator in the same transaction.\n\n"
        "The `Location` header points at the new item."
    ),
    response_model=ContentOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Content created."},
        401: {"description": "Not authenticated."},
        409: {"description": "Path already in use."},
    },
)
async def create_content(
    payload: ContentCreate,
    response: Response,
    user: User = Depends(get_current_user),
    services: ContentService = Depends(get_services),
):
    obj = await services.create(payload, creator_id=user.id)
    response.headers["Location"] = _location(obj.path)
    return obj


@router.get(
    "/{path}",
    summary="Get content by path",
    description="Fetches a single content item with creator name and category names. Each call counts one view.",
    response_model=ContentOut,
    responses={
        200: {
            "description": "Content found.",
            "content": {"application/json": {"examples": {"content": {"value": _CONTENT_EXAMPLE}}}},
        },
        404: {
            "description": "Content not found.",
            "content": {"application/json": {"examples": {"not_found": {"value": {"code": "NOT_FOUND", "message": "content_not_found", "details": {"path": "missing"}}}}}},
        },
    },
)
async def get_content(
    path: str = Path(..., description="Content path slug"),
    services: ContentService = Depends(get_services),
):
    return await services.view(path)


@router.get(
    "/{path}/edit",
    summary="Get content for editing (owner only)",
    description="Same payload as the detail read, without counting a view.",
    response_model=ContentOut,
    responses={
        401: {"description": "Not authenticated."},
        403: {"description": "Caller does not own this content."},
        404: {"description": "Content not found."},
    },
)
async def get_content_for_edit(
    path: str = Path(..., description="Content path slug"),
    user: User = Depends(get_current_user),
    services: ContentService = Depends(get_services),
):
    return await services.get_for_edit(path, requester_id=user.id)


@router.post(
    "/{path}/edit",
    summary="Edit content (owner only)",
    description=(
        "Replaces `path`, `title`, `description`, `price` and `file_url`, and refreshes `date`. "
        "Category and creator links are left as they are. "
        "The `Location` header points at the (possibly renamed) item."
    ),
    response_model=ContentOut,
    responses={
        401: {"description": "Not authenticated."},
        403: {"description": "Caller does not own this content."},
        404: {"description": "Content not found."},
        409: {"description": "New path already in use."},
    },
)
async def edit_content(
    payload: ContentUpdate,
    response: Response,
    path: str = Path(..., description="Current content path slug"),
    user: User = Depends(get_current_user),
    services: ContentService = Depends(get_services),
):
    obj = await services.edit(path, payload, requester_id=user.id)
    response.headers["Location"] = _location(obj.path)
    return obj


@router.delete(
    "/{path}",
    summary="Delete content (owner only)",
    description=(
        "Deletes the content, its reviews and its category links. "
        "Categories left without any content are deleted too. Returns `{ \"success\": true }`."
    ),
    responses={
        200: {
            "description": "Deleted.",
            "content": {"application/json": {"examples": {"ok": {"value": {"success": True}}}}},
        },
        401: {"description": "Not authenticated."},
        403: {"description": "Caller does not own this content."},
        404: {"description": "Content not found."},
    },
)
async def delete_content(
    path: str = Path(..., description="Content path slug"),
    user: User = Depends(get_current_user),
    services: ContentService = Depends(get_services),
):
    ok = await services.delete(path, requester_id=user.id)
    return {"success": ok}
