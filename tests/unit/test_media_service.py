"""
Tests for MediaService (press images).
"""

import pytest

from schoolcms.errors import NotFoundError, ValidationError
from schoolcms.services.lifecycle import MediaService
from tests.fakes import FakeStore, image


def press(title: str, file_id: str) -> dict:
    return {"title": title, **image(file_id)}


@pytest.fixture
def media_store() -> FakeStore:
    return FakeStore(timestamp_field="uploaded_at")


@pytest.fixture
def media(media_store, assets) -> MediaService:
    return MediaService(media_store, assets)


@pytest.mark.asyncio
async def test_add_skips_duplicate_titles_and_file_ids(media, media_store):
    assert await media.add({"imageArray": [press("Times", "t1"), press("Herald", "h1")]}) == 2

    added = await media.add(
        {"imageArray": [press("Times", "t2"), press("Post", "h1"), press("Gazette", "g1"), press("Gazette", "g2")]}
    )

    assert added == 1
    assert sorted(row["title"] for row in media_store.rows.values()) == ["Gazette", "Herald", "Times"]


@pytest.mark.asyncio
async def test_add_requires_images(media):
    with pytest.raises(ValidationError) as exc_info:
        await media.add({"imageArray": []})
    assert exc_info.value.fields == ["imageArray"]


@pytest.mark.asyncio
async def test_delete_calls_asset_store_then_removes_rows(media, media_store, assets):
    await media.add({"imageArray": [press("Times", "t1"), press("Herald", "h1")]})

    assert await media.delete({"fileIds": ["t1"]}) == 1
    assert assets.calls == [["t1"]]
    assert [row["file_id"] for row in media_store.rows.values()] == ["h1"]


@pytest.mark.asyncio
async def test_delete_nothing_matched(media, assets):
    with pytest.raises(NotFoundError, match="No matching records"):
        await media.delete({"fileIds": ["ghost"]})
    assert assets.calls == [["ghost"]]


@pytest.mark.asyncio
async def test_delete_survives_asset_failure(media_store, failing_assets):
    media = MediaService(media_store, failing_assets)
    await media.add({"imageArray": [press("Times", "t1")]})

    assert await media.delete({"fileIds": ["t1"]}) == 1
    assert media_store.rows == {}


@pytest.mark.asyncio
async def test_list_newest_upload_first_and_get(media):
    await media.add({"imageArray": [press("Times", "t1")]})
    await media.add({"imageArray": [press("Herald", "h1")]})

    listing = await media.list_all()
    assert [row["title"] for row in listing] == ["Herald", "Times"]
    assert (await media.get(listing[0]["id"]))["file_id"] == "h1"

    with pytest.raises(NotFoundError):
        await media.get(999)
