"""
SchoolCMS Services

Service layer for the CMS:
- DatabaseService / SqlStore: relational persistence (SQLAlchemy async)
- ImageKitClient: external image store
- ResourceLifecycle, GalleryService, MediaService: create/read/delete orchestration
- AdminService: console accounts
"""

from .admin_service import AdminService
from .database import DatabaseService, SqlStore
from .imagekit import ImageKitClient
from .lifecycle import GalleryService, MediaService, ResourceLifecycle

__all__ = [
    "AdminService",
    "DatabaseService",
    "GalleryService",
    "ImageKitClient",
    "MediaService",
    "ResourceLifecycle",
    "SqlStore",
]
