"""Resource kinds handled by ResourceLifecycle."""

from ...models.entities import AlumniCreate, BlogCreate, NoticeCreate, ThanksCreate
from .manager import ResourceKind

BLOG = ResourceKind(
    name="blog",
    label="Blog",
    create_schema=BlogCreate,
    summary_fields=("id", "title", "description", "images", "is_featured", "created_at"),
    asset_field="images",
    featured_field="is_featured",
)

THANKS = ResourceKind(
    name="thanks",
    label="Special Thanks",
    create_schema=ThanksCreate,
    summary_fields=("id", "title", "description", "images", "is_featured", "created_at"),
    list_order="created_at",
    list_descending=True,
    asset_field="images",
    featured_field="is_featured",
)

NOTICE = ResourceKind(
    name="notice",
    label="Notice",
    create_schema=NoticeCreate,
    summary_fields=("id", "title", "description", "expiry", "created_at"),
)

ALUMNI = ResourceKind(
    name="alumni",
    label="Alumni",
    create_schema=AlumniCreate,
    summary_fields=(
        "id",
        "name",
        "designation",
        "insta_url",
        "x_url",
        "linked_in_url",
        "email",
        "created_at",
    ),
    search_fields=("name", "designation"),
)
