from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from content.domain.entities.content import ContentBase


class CreatorOut(BaseModel):
    id: UUID
    name: str

    class Config:
        from_attributes = True


class ContentOut(ContentBase):
    id: UUID
    views: int = 0
    creator: Optional[CreatorOut] = None
    categories: List[str] = []
    date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
