"""JSON API routers, all mounted under /api."""

from .admin import router as admin_router
from .alumni import router as alumni_router
from .blogs import router as blogs_router
from .gallery import router as gallery_router
from .imagekit import router as imagekit_router
from .media import router as media_router
from .notices import router as notices_router
from .thanks import router as thanks_router

routers = [
    admin_router,
    alumni_router,
    blogs_router,
    gallery_router,
    imagekit_router,
    media_router,
    notices_router,
    thanks_router,
]

__all__ = ["routers"]
