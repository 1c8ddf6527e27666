from content.domain.entities.content import ContentBase, ContentCreate, ContentUpdate
from content.domain.entities.image import ImageDeleteIn, ImageDeleteOut, ImageUploadOut
from content.domain.entities.review import ReviewCreate, ReviewOut

__all__ = [
    "ContentBase",
    "ContentCreate",
    "ContentUpdate",
    "ImageDeleteIn",
    "ImageDeleteOut",
    "ImageUploadOut",
    "ReviewCreate",
    "ReviewOut",
]
