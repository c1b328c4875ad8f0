"""
CMSModel - Base model for all SchoolCMS payloads and records.

Python attributes are snake_case, the wire format is camelCase
(isFeatured, fileId, createdAt) to match what the website frontend sends
and expects. Either spelling is accepted on input.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CMSModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def naive_utc(value: datetime | None) -> datetime | None:
    """Drop tzinfo after converting to UTC; timestamp columns store naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
