"""
GalleryService - photo gallery folders and their images.

Folder assets live at the folder level: each image is a row in
gallery_images pointing at its folder. Deleting a folder therefore
collects fileIds from that table rather than parsing a JSON column, then
follows the same order as every other delete: best-effort ImageKit
cleanup, then local rows.
"""

from typing import Any

from loguru import logger

from ...errors import NotFoundError
from ...models.entities import FileIdsRequest, FolderCreate, GalleryImagesCreate
from ..imagekit import AssetStore
from ..validation import validate_payload
from .cleanup import ImageCleanup
from .manager import RecordStore
from .pagination import page_envelope


class GalleryService:
    """Folder and gallery-image lifecycle."""

    def __init__(self, folders: RecordStore, images: RecordStore, assets: AssetStore):
        self.folders = folders
        self.images = images
        self.cleanup = ImageCleanup(assets)

    async def _require_folder(self, folder_id: int) -> None:
        if await self.folders.find_by_id(folder_id, ("id",)) is None:
            raise NotFoundError(f"Folder with ID {folder_id} not found.")

    async def create_folder(self, payload: Any) -> dict[str, Any]:
        """
        Create a folder and store its thumbnail as the first gallery image.

        Returns:
            {"folder": ..., "galleryImage": ...}
        """
        validated = validate_payload(FolderCreate, payload)
        folder_id = await self.folders.insert(validated.to_record())

        thumbnail = validated.thumbnail_image
        image_id = await self.images.insert(
            {
                "folder_id": folder_id,
                "file_id": thumbnail.file_id,
                "url": thumbnail.url,
                "width": thumbnail.width or 0,
                "height": thumbnail.height or 0,
            }
        )
        logger.info(f"Folder created: id={folder_id} with thumbnail image id={image_id}")
        return {
            "folder": await self.folders.find_by_id(folder_id),
            "galleryImage": await self.images.find_by_id(image_id),
        }

    async def delete_folder(self, folder_id: int) -> None:
        """
        Delete a folder, its gallery images and their ImageKit files.

        Raises:
            NotFoundError: Folder does not exist (ImageKit is not called)
        """
        await self._require_folder(folder_id)

        rows = await self.images.find_many(("file_id",), filters={"folder_id": folder_id}, order_by="id")
        await self.cleanup.run([row["file_id"] for row in rows], f"folder {folder_id}")

        removed = await self.images.delete_where_in("folder_id", [folder_id])
        if await self.folders.delete_by_id(folder_id) is None:
            raise NotFoundError(f"Folder with ID {folder_id} not found.")
        logger.info(f"Folder deleted: id={folder_id} ({removed} image rows)")

    async def add_images(self, payload: Any) -> int:
        validated = validate_payload(GalleryImagesCreate, payload)
        await self._require_folder(validated.folder_id)

        rows = [
            {
                "folder_id": validated.folder_id,
                "file_id": image.file_id,
                "url": image.url,
                "width": image.width or 0,
                "height": image.height or 0,
            }
            for image in validated.image_array
        ]
        count = await self.images.insert_many(rows)
        logger.info(f"Added {count} image(s) to folder {validated.folder_id}")
        return count

    async def delete_images(self, payload: Any) -> int:
        """
        Delete gallery images by fileId: ImageKit first (best effort), then rows.

        Raises:
            NotFoundError: None of the fileIds matched a stored image
        """
        validated = validate_payload(FileIdsRequest, payload)
        await self.cleanup.run(validated.file_ids, "gallery images")

        count = await self.images.delete_where_in("file_id", validated.file_ids)
        if count == 0:
            raise NotFoundError("No records found in database to delete")
        logger.info(f"Deleted {count} gallery image row(s)")
        return count

    async def list_folders(
        self,
        *,
        page: int = 1,
        limit: int = 12,
        search: str | None = None,
        sort: str = "newest",
        paginate: bool = False,
    ) -> dict[str, Any]:
        """Folders ordered by event date with per-folder image counts."""
        query: dict[str, Any] = {}
        if search:
            query = {"search": search, "search_fields": ("title", "slug")}

        folders = await self.folders.find_many(
            None,
            order_by="event_date",
            descending=sort != "oldest",
            limit=limit if paginate else None,
            offset=(page - 1) * limit,
            **query,
        )
        total = await self.folders.count(**query)

        counts = await self.images.count_by("folder_id", [folder["id"] for folder in folders])
        for folder in folders:
            folder["image_count"] = counts.get(folder["id"], 0)
        return page_envelope(folders, total, page, limit)

    async def folder_names(self) -> list[dict[str, Any]]:
        return await self.folders.find_many(("id", "title"))

    async def get_folder(self, folder_id: int) -> dict[str, Any]:
        folder = await self.folders.find_by_id(folder_id)
        if folder is None:
            raise NotFoundError("Folder not found")
        return folder

    async def folder_images(self, folder_id: int) -> list[dict[str, Any]]:
        """Every image in a folder, oldest first."""
        return await self.images.find_many(None, filters={"folder_id": folder_id}, order_by="id")

    async def folder_images_page(
        self, folder_id: int, *, page: int = 1, limit: int = 12, paginate: bool = False
    ) -> dict[str, Any]:
        """Images in a folder, newest first, with a pagination envelope."""
        filters = {"folder_id": folder_id}
        images = await self.images.find_many(
            None,
            filters=filters,
            order_by="id",
            descending=True,
            limit=limit if paginate else None,
            offset=(page - 1) * limit,
        )
        total = await self.images.count(filters=filters)
        return page_envelope(images, total, page, limit)

    async def get_image(self, folder_id: int, image_id: int) -> dict[str, Any]:
        image = await self.images.find_by_id(image_id)
        if image is None or image["folder_id"] != folder_id:
            raise NotFoundError("No image found with this Id")
        return image
