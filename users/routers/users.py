from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database.db import get_session
from app.core.auth import get_current_user
from content.domain.repositories import ContentRepository, ReviewRepository
from users.entities.user import UserCreate, UserDetailOut, UserOut
from users.models.user import User
from users.repositories.user_repository import UserRepository
from users.services.user_service import UserService

router = APIRouter(prefix="/v1/users", tags=["users"])

def get_user_service(db: AsyncSession = Depends(get_session)) -> UserService:
    return UserService(UserRepository(db=db), ContentRepository(db=db), ReviewRepository(db=db))

@router.post(
    "",
    summary="Register a user",
    description="Creates an account that can then log in through `/v1/auth/token`.",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "User created.",
            "content": {
                "application/json": {
                    "examples": {
                        "created": {
                            "value": {
                                "id": "5d2a8c1f-6c53-4b1a-9f9a-c5f1f3e3c0d1",
                                "email": "dana@example.com",
                                "name": "Dana",
                                "is_active": True,
                                "created_at": "2025-08-14T20:30:15Z",
                            },
                        }
                    }
                }
            },
        },
        409: {
            "description": "Email already exists.",
            "content": {"application/json": {"examples": {"conflict": {"value": {"code": "CONFLICT", "message": "email_exists", "details": {}}}}}},
        },
    },
)
async def register_user(payload: UserCreate, svc: UserService = Depends(get_user_service)):
    return await svc.register(payload)

@router.get(
    "/me",
    summary="Current user",
    description="Returns the caller with the ids of the contents they own and the reviews they wrote.",
    response_model=UserDetailOut,
    responses={401: {"description": "Not authenticated."}},
)
async def me(user: User = Depends(get_current_user), svc: UserService = Depends(get_user_service)):
    return await svc.detail(user)
