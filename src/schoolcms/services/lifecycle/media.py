"""
MediaService - press/news images.

Each press image is its own row with a unique title and fileId. Adding
skips entries whose title or fileId already exists; deleting removes the
ImageKit files first (best effort) and then the rows.
"""

from typing import Any

from loguru import logger

from ...errors import NotFoundError
from ...models.entities import FileIdsRequest, MediaCreate
from ..imagekit import AssetStore
from ..validation import validate_payload
from .cleanup import ImageCleanup
from .manager import RecordStore


class MediaService:
    def __init__(self, store: RecordStore, assets: AssetStore):
        self.store = store
        self.cleanup = ImageCleanup(assets)

    async def add(self, payload: Any) -> int:
        """
        Store new press images, skipping duplicates.

        Returns:
            Number of rows actually inserted
        """
        validated = validate_payload(MediaCreate, payload)

        existing = await self.store.find_many(("title", "file_id"))
        titles = {row["title"] for row in existing}
        file_ids = {row["file_id"] for row in existing}

        rows = []
        for image in validated.image_array:
            if image.title in titles or image.file_id in file_ids:
                logger.debug(f"Skipping duplicate press image: {image.title} ({image.file_id})")
                continue
            titles.add(image.title)
            file_ids.add(image.file_id)
            rows.append(
                {
                    "title": image.title,
                    "file_id": image.file_id,
                    "url": image.url,
                    "width": image.width,
                    "height": image.height,
                }
            )

        count = await self.store.insert_many(rows)
        logger.info(f"Added {count} press image(s), skipped {len(validated.image_array) - count}")
        return count

    async def delete(self, payload: Any) -> int:
        """
        Raises:
            NotFoundError: None of the fileIds matched a stored image
        """
        validated = validate_payload(FileIdsRequest, payload)
        await self.cleanup.run(validated.file_ids, "press images")

        count = await self.store.delete_where_in("file_id", validated.file_ids)
        if count == 0:
            raise NotFoundError("No matching records found in database to delete.")
        logger.info(f"Deleted {count} press image row(s)")
        return count

    async def list_all(self) -> list[dict[str, Any]]:
        return await self.store.find_many(None, order_by="uploaded_at", descending=True)

    async def get(self, image_id: int) -> dict[str, Any]:
        image = await self.store.find_by_id(image_id)
        if image is None:
            raise NotFoundError("No image found with this ID")
        return image
