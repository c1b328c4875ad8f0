"""
Tests for GalleryService folder and image lifecycle.
"""

import pytest

from schoolcms.errors import NotFoundError, ValidationError
from schoolcms.services.lifecycle import GalleryService
from tests.fakes import FakeStore, image


def folder_payload(title: str = "Annual Day", event_date: str = "2024-12-20T00:00:00") -> dict:
    return {
        "title": title,
        "caption": title.lower().replace(" ", "-"),
        "eventDate": event_date,
        "thumbnailImage": image(f"{title}-thumb"),
    }


@pytest.fixture
def folders() -> FakeStore:
    return FakeStore()


@pytest.fixture
def images() -> FakeStore:
    return FakeStore(defaults={"width": 0, "height": 0})


@pytest.fixture
def gallery(folders, images, assets) -> GalleryService:
    return GalleryService(folders, images, assets)


class TestFolders:
    @pytest.mark.asyncio
    async def test_create_folder_stores_thumbnail_as_first_image(self, gallery, images):
        created = await gallery.create_folder(folder_payload())

        folder = created["folder"]
        assert folder["slug"] == "annual-day"
        assert created["galleryImage"]["folder_id"] == folder["id"]
        assert created["galleryImage"]["file_id"] == "Annual Day-thumb"
        assert len(images.rows) == 1

    @pytest.mark.asyncio
    async def test_create_folder_validation(self, gallery, folders):
        with pytest.raises(ValidationError) as exc_info:
            await gallery.create_folder({"title": "No date"})
        assert {"caption", "eventDate", "thumbnailImage"} <= set(exc_info.value.fields)
        assert folders.rows == {}

    @pytest.mark.asyncio
    async def test_delete_folder_removes_files_images_and_folder(self, gallery, folders, images, assets):
        created = await gallery.create_folder(folder_payload())
        folder_id = created["folder"]["id"]
        await gallery.add_images({"folderId": folder_id, "imageArray": [image("a"), image("b")]})

        await gallery.delete_folder(folder_id)

        assert assets.calls == [["Annual Day-thumb", "a", "b"]]
        assert folders.rows == {}
        assert images.rows == {}

    @pytest.mark.asyncio
    async def test_delete_unknown_folder(self, gallery, assets):
        with pytest.raises(NotFoundError):
            await gallery.delete_folder(99)
        assert assets.calls == []

    @pytest.mark.asyncio
    async def test_delete_folder_survives_asset_failure(self, folders, images, failing_assets):
        gallery = GalleryService(folders, images, failing_assets)
        created = await gallery.create_folder(folder_payload())

        await gallery.delete_folder(created["folder"]["id"])
        assert folders.rows == {}

    @pytest.mark.asyncio
    async def test_list_folders_by_event_date_with_counts(self, gallery):
        old = await gallery.create_folder(folder_payload("Old Event", "2023-01-01T00:00:00"))
        new = await gallery.create_folder(folder_payload("New Event", "2024-06-01T00:00:00"))
        await gallery.add_images({"folderId": new["folder"]["id"], "imageArray": [image("x")]})

        listing = await gallery.list_folders()

        assert [f["title"] for f in listing["data"]] == ["New Event", "Old Event"]
        assert [f["image_count"] for f in listing["data"]] == [2, 1]
        assert listing["meta"]["totalItems"] == 2

        oldest = await gallery.list_folders(sort="oldest")
        assert oldest["data"][0]["id"] == old["folder"]["id"]

    @pytest.mark.asyncio
    async def test_list_folders_search_and_paginate(self, gallery):
        for n in range(3):
            await gallery.create_folder(folder_payload(f"Trip {n}", f"2024-0{n + 1}-01T00:00:00"))
        await gallery.create_folder(folder_payload("Concert"))

        listing = await gallery.list_folders(search="trip", page=1, limit=2, paginate=True)
        assert [f["title"] for f in listing["data"]] == ["Trip 2", "Trip 1"]
        assert listing["meta"]["totalPages"] == 2

    @pytest.mark.asyncio
    async def test_folder_names_and_get(self, gallery):
        created = await gallery.create_folder(folder_payload())
        folder_id = created["folder"]["id"]

        assert await gallery.folder_names() == [{"id": folder_id, "title": "Annual Day"}]
        assert (await gallery.get_folder(folder_id))["title"] == "Annual Day"
        with pytest.raises(NotFoundError, match="Folder not found"):
            await gallery.get_folder(folder_id + 1)


class TestImages:
    @pytest.mark.asyncio
    async def test_add_images_requires_existing_folder(self, gallery, images):
        with pytest.raises(NotFoundError):
            await gallery.add_images({"folderId": 5, "imageArray": [image("a")]})
        assert images.rows == {}

    @pytest.mark.asyncio
    async def test_delete_images_by_file_id(self, gallery, images, assets):
        created = await gallery.create_folder(folder_payload())
        await gallery.add_images({"folderId": created["folder"]["id"], "imageArray": [image("a"), image("b")]})

        count = await gallery.delete_images({"fileIds": ["a", "missing"]})

        assert count == 1
        assert assets.calls == [["a", "missing"]]
        assert sorted(row["file_id"] for row in images.rows.values()) == ["Annual Day-thumb", "b"]

    @pytest.mark.asyncio
    async def test_delete_images_none_matched(self, gallery):
        with pytest.raises(NotFoundError, match="No records found"):
            await gallery.delete_images({"fileIds": ["ghost"]})

    @pytest.mark.asyncio
    async def test_delete_images_rejects_empty_ids(self, gallery, assets):
        with pytest.raises(ValidationError):
            await gallery.delete_images({"fileIds": [""]})
        assert assets.calls == []

    @pytest.mark.asyncio
    async def test_folder_images_orders(self, gallery):
        created = await gallery.create_folder(folder_payload())
        folder_id = created["folder"]["id"]
        await gallery.add_images({"folderId": folder_id, "imageArray": [image("a"), image("b")]})

        ascending = await gallery.folder_images(folder_id)
        assert [i["file_id"] for i in ascending] == ["Annual Day-thumb", "a", "b"]

        page = await gallery.folder_images_page(folder_id, page=1, limit=2, paginate=True)
        assert [i["file_id"] for i in page["data"]] == ["b", "a"]
        assert page["meta"]["totalItems"] == 3

    @pytest.mark.asyncio
    async def test_get_image_checks_folder(self, gallery):
        first = await gallery.create_folder(folder_payload("First"))
        second = await gallery.create_folder(folder_payload("Second"))
        image_id = first["galleryImage"]["id"]

        assert (await gallery.get_image(first["folder"]["id"], image_id))["id"] == image_id
        with pytest.raises(NotFoundError):
            await gallery.get_image(second["folder"]["id"], image_id)
