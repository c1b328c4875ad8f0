"""
ResourceLifecycle - create/read/delete orchestration for one resource type.

Create:
    validate payload -> one store insert -> new id

Delete (three stages, no rollback):
    1. Lookup the record's images by id (missing -> NotFoundError, no ImageKit call)
    2. Parse stored images and bulk delete their fileIds on ImageKit.
       Remote failures are logged and swallowed. Stored images that fail
       to parse follow the corruption policy: SKIP logs and carries on,
       ABORT raises DataCorruptionError and keeps the record.
    3. Delete the local record (the only step whose success means success)

The store and asset store are injected, so the same class drives blogs,
thanks, notices and alumni and runs unchanged against in-memory fakes.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

import pydantic
from loguru import logger
from pydantic import BaseModel

from ...errors import DataCorruptionError, FieldError, NotFoundError, ValidationError
from ...models.entities import AssetReferenceList
from ...settings import CorruptionPolicy
from ..imagekit import AssetStore
from ..validation import validate_payload
from .cleanup import ImageCleanup
from .pagination import page_envelope

SEARCH_LIMIT = 10


class RecordStore(Protocol):
    """Persistence operations the lifecycle layer relies on (see SqlStore)."""

    async def insert(self, fields: dict[str, Any]) -> int: ...

    async def find_by_id(
        self, record_id: int, projection: Sequence[str] | None = None
    ) -> dict[str, Any] | None: ...

    async def find_many(self, projection: Sequence[str] | None = None, **query: Any) -> list[dict[str, Any]]: ...

    async def count(self, **query: Any) -> int: ...

    async def delete_by_id(self, record_id: int) -> dict[str, Any] | None: ...

    async def insert_many(self, rows: list[dict[str, Any]]) -> int: ...

    async def delete_where_in(self, column: str, values: Sequence[Any]) -> int: ...

    async def count_by(self, column: str, values: Sequence[Any]) -> dict[Any, int]: ...


@dataclass(frozen=True)
class ResourceKind:
    """Static description of a resource type."""

    name: str
    label: str
    create_schema: type[BaseModel]
    summary_fields: tuple[str, ...]
    list_order: str | None = None
    list_descending: bool = False
    search_fields: tuple[str, ...] = ("title", "description")
    asset_field: str | None = None
    featured_field: str | None = None


class ResourceLifecycle:
    """Lifecycle manager for one resource kind."""

    def __init__(
        self,
        kind: ResourceKind,
        store: RecordStore,
        assets: AssetStore,
        corruption_policy: CorruptionPolicy = CorruptionPolicy.SKIP,
    ):
        self.kind = kind
        self.store = store
        self.cleanup = ImageCleanup(assets)
        self.corruption_policy = corruption_policy

    def not_found(self, record_id: int) -> NotFoundError:
        return NotFoundError(f"{self.kind.label} with ID {record_id} not found.")

    async def create(self, payload: Any) -> int:
        """
        Validate and persist a new record.

        Raises:
            ValidationError: Payload violates the schema (nothing is written)
            PersistenceError: The insert failed
        """
        validated = validate_payload(self.kind.create_schema, payload)
        record_id = await self.store.insert(validated.to_record())
        logger.info(f"{self.kind.label} created: id={record_id}")
        return record_id

    async def get(self, record_id: int) -> dict[str, Any]:
        record = await self.store.find_by_id(record_id)
        if record is None:
            raise self.not_found(record_id)
        return record

    async def list_all(self) -> list[dict[str, Any]]:
        """All records projected to summary fields, in the kind's list order."""
        return await self.store.find_many(
            self.kind.summary_fields,
            order_by=self.kind.list_order,
            descending=self.kind.list_descending,
        )

    async def page(
        self,
        *,
        page: int = 1,
        limit: int = 9,
        search: str | None = None,
        sort: str = "newest",
        paginate: bool = False,
        featured_only: bool = False,
    ) -> dict[str, Any]:
        """
        Searchable, sortable listing with an offset-pagination envelope.

        Slicing only happens when ``paginate`` is set; meta is always filled
        in from ``page`` and ``limit``.
        """
        query: dict[str, Any] = {}
        if featured_only and self.kind.featured_field:
            query["filters"] = {self.kind.featured_field: True}
        elif search:
            query["search"] = search
            query["search_fields"] = self.kind.search_fields

        data = await self.store.find_many(
            None,
            order_by="created_at",
            descending=sort != "oldest",
            limit=limit if paginate else None,
            offset=(page - 1) * limit,
            **query,
        )
        total = await self.store.count(**query)
        return page_envelope(data, total, page, limit)

    async def search(self, title: str | None) -> list[dict[str, Any]]:
        """Up to ten records whose title contains ``title``, newest first."""
        if not title or not title.strip():
            raise ValidationError(
                [FieldError(field="title", message="Title query parameter is required")],
                "Search query is required",
            )
        return await self.store.find_many(
            None,
            search=title.strip(),
            search_fields=("title",),
            order_by="created_at",
            descending=True,
            limit=SEARCH_LIMIT,
        )

    def file_ids(self, record_id: int, raw_images: Any) -> list[str]:
        """
        fileIds of the stored images, in order.

        Raises:
            DataCorruptionError: Images fail to parse and the policy is ABORT
        """
        if raw_images is None or raw_images == []:
            return []
        try:
            references = AssetReferenceList.validate_python(raw_images)
        except pydantic.ValidationError as e:
            error = DataCorruptionError(self.kind.label, record_id, f"{e.error_count()} schema violation(s)")
            if self.corruption_policy is CorruptionPolicy.ABORT:
                logger.error(f"{error.message}; aborting delete")
                raise error from e
            logger.warning(f"{error.message}; skipping image cleanup")
            return []
        return [reference.file_id for reference in references]

    async def delete(self, record_id: int) -> dict[str, Any]:
        """
        Delete a record after best-effort removal of its ImageKit files.

        Returns:
            The deleted record

        Raises:
            NotFoundError: No record with this id (ImageKit is not called)
            DataCorruptionError: Stored images are malformed under the ABORT policy
            PersistenceError: Lookup or local delete failed
        """
        asset_field = self.kind.asset_field
        projection = ("id", asset_field) if asset_field else ("id",)

        record = await self.store.find_by_id(record_id, projection)
        if record is None:
            raise self.not_found(record_id)

        if asset_field:
            file_ids = self.file_ids(record_id, record.get(asset_field))
            await self.cleanup.run(file_ids, f"{self.kind.name} {record_id}")

        deleted = await self.store.delete_by_id(record_id)
        if deleted is None:
            # Removed by a concurrent request between lookup and delete
            raise self.not_found(record_id)

        logger.info(f"{self.kind.label} deleted: id={record_id}")
        return deleted
