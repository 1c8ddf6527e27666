from content.domain.repositories.category_repository import CategoryRepository
from content.domain.repositories.content_repository import ContentRepository
from content.domain.repositories.review_repository import ReviewRepository

__all__ = ["CategoryRepository", "ContentRepository", "ReviewRepository"]
