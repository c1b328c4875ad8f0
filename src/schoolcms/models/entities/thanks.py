"""
Thanks - "special thanks" gallery entries.

Same shape as a blog with stricter length minimums. Listings are ordered
newest first.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, StrictBool

from ..core import CMSModel
from .asset import AssetReference


class ThanksCreate(CMSModel):
    """Payload for POST /api/thanks/addThanks."""

    title: str = Field(..., min_length=5)
    description: str = Field(..., min_length=10)
    content: str = Field(..., min_length=50)
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


class ThanksSummary(CMSModel):
    id: int
    title: str
    description: str
    images: Any = Field(default_factory=list)
    is_featured: bool
    created_at: datetime


class Thanks(ThanksSummary):
    content: str
