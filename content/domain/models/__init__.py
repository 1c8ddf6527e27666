from content.domain.models.category import Category, content_categories
from content.domain.models.content import Content
from content.domain.models.review import Review

__all__ = ["Category", "Content", "Review", "content_categories"]
