"""
Blog - news posts shown on the website's blog page.

A blog carries rich content plus at least one ImageKit image. Deleting a
blog removes its images from ImageKit on a best-effort basis.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, StrictBool

from ..core import CMSModel
from .asset import AssetReference


class BlogCreate(CMSModel):
    """Payload for POST /api/blogs/uploadBlog."""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    images: list[AssetReference] = Field(..., min_length=1)
    is_featured: StrictBool

    def to_record(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "images": [image.to_json() for image in self.images],
            "is_featured": self.is_featured,
        }


class BlogSummary(CMSModel):
    """Blog as shown in list views (content omitted)."""

    id: int
    title: str
    description: str
    images: Any = Field(default_factory=list, description="Raw stored image list")
    is_featured: bool
    created_at: datetime


class Blog(BlogSummary):
    """Full blog record."""

    content: str
