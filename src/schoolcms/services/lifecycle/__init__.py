"""
Resource lifecycle orchestration.

- ResourceLifecycle: blogs, thanks, notices, alumni (one class, per-kind config)
- GalleryService: folders and gallery images
- MediaService: press images
- ImageCleanup: best-effort ImageKit deletion boundary
"""

from .cleanup import ImageCleanup
from .gallery import GalleryService
from .kinds import ALUMNI, BLOG, NOTICE, THANKS
from .manager import RecordStore, ResourceKind, ResourceLifecycle
from .media import MediaService

__all__ = [
    "ALUMNI",
    "BLOG",
    "NOTICE",
    "THANKS",
    "GalleryService",
    "ImageCleanup",
    "MediaService",
    "RecordStore",
    "ResourceKind",
    "ResourceLifecycle",
]
