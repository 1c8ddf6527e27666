from __future__ import annotations
from datetime import datetime
from uuid import uuid4, UUID

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base
from content.domain.models.category import content_categories


class Content(Base):
    __tablename__ = "contents"

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    path: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    file_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # owner; User.contents is derived from this column
    creator_id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)

    # authoring time: set on create, refreshed on every edit
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    creator = relationship("User", back_populates="contents")
    categories = relationship("Category", secondary=content_categories, back_populates="contents")
    reviews = relationship("Review", back_populates="content")
