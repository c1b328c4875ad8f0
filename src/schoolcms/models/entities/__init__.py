"""
SchoolCMS Entity Models

Payload schemas (``*Create``) validate what the admin console sends;
record models describe what the API returns. Field names are camelCase
on the wire.

- Blog, Thanks: content posts with embedded ImageKit images
- Notice: announcements with optional expiry
- Folder, GalleryImage: photo gallery folders and their images
- PressImage: press/news media images
- Alumni: alumni directory
- Admin: console accounts
"""

from .admin import AdminCredentials, AdminPublic, AdminRegister
from .alumni import Alumni, AlumniCreate
from .asset import AssetReference, AssetReferenceList
from .blog import Blog, BlogCreate, BlogSummary
from .gallery import FileIdsRequest, Folder, FolderCreate, FolderName, GalleryImage, GalleryImagesCreate
from .media import MediaCreate, PressImage, PressImageInput
from .notice import Notice, NoticeCreate
from .thanks import Thanks, ThanksCreate, ThanksSummary

__all__ = [
    "AdminCredentials",
    "AdminPublic",
    "AdminRegister",
    "Alumni",
    "AlumniCreate",
    "AssetReference",
    "AssetReferenceList",
    "Blog",
    "BlogCreate",
    "BlogSummary",
    "FileIdsRequest",
    "Folder",
    "FolderCreate",
    "FolderName",
    "GalleryImage",
    "GalleryImagesCreate",
    "MediaCreate",
    "Notice",
    "NoticeCreate",
    "PressImage",
    "PressImageInput",
    "Thanks",
    "ThanksCreate",
    "ThanksSummary",
]
