"""Admin - accounts allowed into the admin console."""

from pydantic import Field

from ..core import CMSModel


class AdminRegister(CMSModel):
    username: str = Field(..., min_length=5)
    password: str = Field(..., min_length=8)


class AdminCredentials(CMSModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminPublic(CMSModel):
    id: int
    username: str
