from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user
from app.core.database.db import get_session
from content.domain.entities.review import ReviewCreate, ReviewOut
from content.domain.repositories import ContentRepository, ReviewRepository
from content.services.review_service import ReviewService
from users.models.user import User

router = APIRouter(prefix="/v1/contents/{path}/reviews", tags=["reviews"])

async def get_service(db: AsyncSession = Depends(get_session)) -> ReviewService:
    return ReviewService(ReviewRepository(db), ContentRepository(db))


@router.get(
    "",
    summary="List reviews of a content item",
    response_model=List[ReviewOut],
    responses={404: {"description": "Content not found."}},
)
async def list_reviews(
    path: str = Path(..., description="Content path slug"),
    svc: ReviewService = Depends(get_service),
):
    return await svc.list_for(path)


@router.post(
    "",
    summary="Review a content item",
    response_model=ReviewOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"description": "Not authenticated."},
        404: {"description": "Content not found."},
    },
)
async def add_review(
    payload: ReviewCreate,
    path: str = Path(..., description="Content path slug"),
    user: User = Depends(get_current_user),
    svc: ReviewService = Depends(get_service),
):
    return await svc.add(path, user.id, payload)
