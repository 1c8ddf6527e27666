from pydantic import BaseModel, EmailStr, constr
from uuid import UUID
from datetime import datetime
from typing import List

class UserCreate(BaseModel):
    email: EmailStr
    name: constr(min_length=1, max_length=120)
    password: constr(min_length=8)

class UserOut(BaseModel):
    id: UUID
    email: EmailStr
    name: str
    is_active: bool
    created_at: datetime | None = None
    class Config:
        from_attributes = True

class UserDetailOut(UserOut):
    # ids of owned contents and authored reviews
    contents: List[UUID] = []
    reviews: List[UUID] = []
