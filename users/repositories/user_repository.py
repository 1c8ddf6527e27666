from typing import Optional, Sequence
from uuid import UUID
from sqlalchemy import select

from shared.abstracts.abstract_repository import AbstractRepository
from users.models.user import User

class UserRepository(AbstractRepository):
    async def get(self, user_id: UUID) -> Optional[User]:
        res = await self.db.execute(select(User).where(User.id == user_id))
        return res.scalars().first()

    async def get_by_email(self, email: str) -> Optional[User]:
        res = await self.db.execute(select(User).where(User.email == email))
        return res.scalars().first()

    async def insert(self, obj: User) -> User:
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def create(self, email: str, name: str, password_hash: str) -> User:
        return await self.insert(User(email=email, name=name, password_hash=password_hash))

    async def update(self, entity_id: UUID, obj: User) -> Optional[User]:
        raise NotImplementedError("User profile updates are not supported")

    async def delete(self, entity_id: UUID) -> bool:
        raise NotImplementedError("User deletion is not supported")

    async def list(self, **filters) -> Sequence[User]:
        res = await self.db.execute(select(User).order_by(User.created_at.asc()))
        return res.scalars().all()
