"""Notice - short announcements with an optional expiry date."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from ..core import CMSModel
from ..core.core_model import naive_utc


class NoticeCreate(CMSModel):
    """Payload for POST /api/notices/addNotice."""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    expiry: datetime | None = Field(default=None, description="Accepts ISO dates or datetimes")

    @field_validator("expiry")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return naive_utc(value)

    def to_record(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "expiry": self.expiry,
        }


class Notice(CMSModel):
    id: int
    title: str
    description: str
    expiry: datetime | None = None
    created_at: datetime
