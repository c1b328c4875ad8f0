"""Press media - standalone newspaper/press images with unique titles."""

from datetime import datetime

from pydantic import Field, StrictInt

from ..core import CMSModel
from .asset import AssetReference


class PressImageInput(AssetReference):
    title: str = Field(..., min_length=1)
    width: StrictInt = 0
    height: StrictInt = 0


class MediaCreate(CMSModel):
    """Payload for POST /api/news/addMedia."""

    image_array: list[PressImageInput] = Field(..., min_length=1)


class PressImage(CMSModel):
    id: int
    title: str
    file_id: str
    url: str
    width: int = 0
    height: int = 0
    uploaded_at: datetime
