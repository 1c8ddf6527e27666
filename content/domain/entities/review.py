from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    body: str | None = None


class ReviewOut(BaseModel):
    id: UUID
    content_id: UUID
    author_id: UUID
    rating: int
    body: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
