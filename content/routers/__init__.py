from content.routers.contents import router as contents_router
from content.routers.images import router as images_router
from content.routers.reviews import router as reviews_router

__all__ = ["contents_router", "images_router", "reviews_router"]
