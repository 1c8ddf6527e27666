import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from app.core.security import hash_password
from shared.abstracts.abstract_repository import AbstractRepository
from shared.exceptions import ConflictError
from users.entities.user import UserCreate, UserDetailOut, UserOut
from users.models.user import User

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, users_repo: AbstractRepository, contents_repo: AbstractRepository, reviews_repo: AbstractRepository):
        self.users = users_repo
        self.contents = contents_repo
        self.reviews = reviews_repo

    async def register(self, payload: UserCreate) -> User:
        if await self.users.get_by_email(payload.email):
            raise ConflictError("email_exists")
        try:
            async with self.users.transaction():
                user = await self.users.create(payload.email, payload.name, hash_password(payload.password))
        except IntegrityError:
            raise ConflictError("email_exists")
        logger.info("Registered user %s", user.id)
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.users.get_by_email(email)

    async def detail(self, user: User) -> UserDetailOut:
        """The user with owned contents and authored reviews, both derived by query."""
        return UserDetailOut(
            **UserOut.model_validate(user).model_dump(),
            contents=await self.contents.list_ids_by_creator(user.id),
            reviews=await self.reviews.list_ids_by_author(user.id),
        )
