"""Alumni - directory entries for former students."""

from datetime import datetime
from typing import Any

from pydantic import EmailStr, Field, field_validator

from ..core import CMSModel
from .asset import check_url


class AlumniCreate(CMSModel):
    """Payload for POST /api/Addalumni."""

    name: str = Field(..., min_length=1)
    designation: str = Field(..., min_length=1)
    insta_url: str | None = None
    x_url: str | None = None
    linked_in_url: str | None = None
    email: EmailStr | None = None

    @field_validator("insta_url", "x_url", "linked_in_url")
    @classmethod
    def _valid_url(cls, value: str | None) -> str | None:
        return check_url(value) if value is not None else None

    def to_record(self) -> dict[str, Any]:
        return self.model_dump()


class Alumni(CMSModel):
    id: int
    name: str
    designation: str
    insta_url: str | None = None
    x_url: str | None = None
    linked_in_url: str | None = None
    email: str | None = None
    created_at: datetime
