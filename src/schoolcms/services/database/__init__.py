"""
Relational persistence for SchoolCMS.
"""

from .service import DatabaseService
from .store import SqlStore
from .tables import (
    AdminRow,
    AlumniRow,
    Base,
    BlogRow,
    FolderRow,
    GalleryImageRow,
    NoticeRow,
    PressImageRow,
    ThanksRow,
)

__all__ = [
    "DatabaseService",
    "SqlStore",
    "Base",
    "AdminRow",
    "AlumniRow",
    "BlogRow",
    "FolderRow",
    "GalleryImageRow",
    "NoticeRow",
    "PressImageRow",
    "ThanksRow",
]
