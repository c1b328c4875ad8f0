"""
AssetReference - pointer to a file hosted on ImageKit.

Image-carrying resources embed an ordered list of these as JSON. The
fileId is what ImageKit needs to delete the file; the url is what the
website renders.
"""

from urllib.parse import urlparse

from pydantic import Field, StrictInt, TypeAdapter, field_validator

from ..core import CMSModel


def check_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("URL must be a valid http(s) URL")
    return value


class AssetReference(CMSModel):
    """Metadata for one file in the external image store."""

    file_id: str = Field(..., min_length=1, description="ImageKit file identifier")
    url: str = Field(..., description="Fully-qualified delivery URL")
    width: StrictInt | None = Field(default=None, description="Width in pixels")
    height: StrictInt | None = Field(default=None, description="Height in pixels")

    @field_validator("url")
    @classmethod
    def _valid_url(cls, value: str) -> str:
        return check_url(value)

    def to_json(self) -> dict:
        """Form stored in JSON columns."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


AssetReferenceList = TypeAdapter(list[AssetReference])
