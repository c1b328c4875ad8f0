"""
Photo gallery - event folders and the images inside them.

Unlike blogs, a folder's images live in their own table, one row per
image. Creating a folder also stores its thumbnail as the folder's first
gallery image, so deleting the folder cleans the thumbnail up with the
rest.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, StrictInt, field_validator

from ..core import CMSModel
from ..core.core_model import naive_utc
from .asset import AssetReference


class FolderCreate(CMSModel):
    """Payload for POST /api/gallery/addFolder."""

    title: str = Field(..., min_length=1)
    caption: str = Field(..., min_length=1)
    event_date: datetime
    thumbnail_image: AssetReference

    @field_validator("event_date")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return naive_utc(value)

    def to_record(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "slug": self.caption,
            "event_date": self.event_date,
            "thumbnail_image": self.thumbnail_image.to_json(),
        }


class GalleryImagesCreate(CMSModel):
    """Payload for POST /api/gallery/addImages."""

    folder_id: StrictInt = Field(..., gt=0)
    image_array: list[AssetReference] = Field(..., min_length=1)


class FileIdsRequest(CMSModel):
    """Payload naming ImageKit files to delete."""

    file_ids: list[str] = Field(..., min_length=1)

    @field_validator("file_ids")
    @classmethod
    def _non_empty_ids(cls, value: list[str]) -> list[str]:
        if any(not file_id for file_id in value):
            raise ValueError("File ID cannot be empty.")
        return value


class Folder(CMSModel):
    id: int
    title: str
    slug: str
    event_date: datetime
    thumbnail_image: Any = None
    created_at: datetime
    image_count: int | None = None


class FolderName(CMSModel):
    id: int
    title: str


class GalleryImage(CMSModel):
    id: int
    folder_id: int
    file_id: str
    url: str
    width: int = 0
    height: int = 0
    created_at: datetime
