from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database.db import get_session
from users.entities.auth import LoginIn, TokenOut
from users.repositories.user_repository import UserRepository
from users.services.auth_service import AuthService

router = APIRouter(
    prefix="/v1/auth",
    tags=["auth"],
)

def get_auth_service(db: AsyncSession = Depends(get_session)) -> AuthService:
    return AuthService(UserRepository(db))

@router.post(
    "/token",
    summary="Issue JWT access token",
    description=(
        "Authenticates a user with email and password and returns a short‑lived JWT access token.\n\n"
        "### Notes\n"
        "- Send it as `Authorization: Bearer <token>` to create, edit or delete content, and to upload images.\n"
        "- Invalid credentials or an inactive account give **401 Unauthorized**.\n"
    ),
    response_model=TokenOut,
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Authentication succeeded; JWT returned.",
            "content": {
                "application/json": {
                    "examples": {
                        "success": {
                            "summary": "Successful login",
                            "value": {"access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...", "token_type": "bearer"},
                        }
                    }
                }
            },
        },
        401: {
            "description": "Invalid email or password, or user is inactive.",
            "content": {"application/json": {"examples": {"invalid_credentials": {"value": {"detail": "invalid_credentials"}}}}},
        },
    },
)
async def issue_token(
    payload: LoginIn,
    svc: AuthService = Depends(get_auth_service),
):
    try:
        token = await svc.login(payload.email, payload.password)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid_credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenOut(access_token=token)
