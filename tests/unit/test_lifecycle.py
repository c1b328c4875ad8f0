"""
Tests for ResourceLifecycle create/get/list/delete orchestration.
"""

import inspect

import pytest
from loguru import logger

from schoolcms.errors import DataCorruptionError, NotFoundError, PersistenceError, ValidationError
from schoolcms.services.database import SqlStore
from schoolcms.services.lifecycle import ALUMNI, BLOG, NOTICE, THANKS, RecordStore, ResourceLifecycle
from schoolcms.settings import CorruptionPolicy
from tests.fakes import FakeStore, blog_payload, image, thanks_payload


@pytest.fixture
def blogs(store, assets) -> ResourceLifecycle:
    return ResourceLifecycle(BLOG, store, assets)


@pytest.fixture
def thanks(store, assets) -> ResourceLifecycle:
    return ResourceLifecycle(THANKS, store, assets)


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_then_get_returns_validated_fields(self, blogs):
        blog_id = await blogs.create(blog_payload(isFeatured=True, images=[image("f1"), image("f2")]))

        record = await blogs.get(blog_id)
        assert record["title"] == "Sports Day 2024"
        assert record["is_featured"] is True
        assert [i["fileId"] for i in record["images"]] == ["f1", "f2"]
        assert record["created_at"] is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["title", "description", "content", "images", "isFeatured"])
    async def test_missing_required_field_is_named_and_nothing_written(self, blogs, store, field):
        payload = blog_payload()
        del payload[field]

        with pytest.raises(ValidationError) as exc_info:
            await blogs.create(payload)

        assert field in exc_info.value.fields
        assert store.rows == {}

    @pytest.mark.asyncio
    async def test_every_violation_is_reported(self, thanks):
        payload = thanks_payload(title="abc", description="short", content="too short")

        with pytest.raises(ValidationError) as exc_info:
            await thanks.create(payload)

        assert {"title", "description", "content"} <= set(exc_info.value.fields)

    @pytest.mark.asyncio
    async def test_is_featured_must_be_boolean(self, blogs):
        with pytest.raises(ValidationError) as exc_info:
            await blogs.create(blog_payload(isFeatured="yes"))
        assert exc_info.value.fields == ["isFeatured"]

    @pytest.mark.asyncio
    async def test_empty_image_list_rejected(self, blogs):
        with pytest.raises(ValidationError) as exc_info:
            await blogs.create(blog_payload(images=[]))
        assert exc_info.value.fields == ["images"]

    @pytest.mark.asyncio
    async def test_image_url_must_be_http(self, blogs):
        with pytest.raises(ValidationError) as exc_info:
            await blogs.create(blog_payload(images=[{"fileId": "f1", "url": "not a url"}]))
        assert exc_info.value.fields == ["images.0.url"]

    @pytest.mark.asyncio
    async def test_non_object_payload_rejected(self, blogs):
        with pytest.raises(ValidationError) as exc_info:
            await blogs.create(["not", "an", "object"])
        assert exc_info.value.fields == ["body"]

    @pytest.mark.asyncio
    async def test_store_failure_surfaces_as_persistence_error(self, blogs, store):
        store.fail_on.add("insert")
        with pytest.raises(PersistenceError):
            await blogs.create(blog_payload())

    @pytest.mark.asyncio
    async def test_notice_expiry_optional(self, store, assets):
        notices = ResourceLifecycle(NOTICE, store, assets)
        notice_id = await notices.create({"title": "Holiday", "description": "School closed Friday"})
        assert (await notices.get(notice_id))["expiry"] is None

    @pytest.mark.asyncio
    async def test_alumni_urls_and_email_validated(self, store, assets):
        alumni = ResourceLifecycle(ALUMNI, store, assets)
        with pytest.raises(ValidationError) as exc_info:
            await alumni.create(
                {"name": "A. Student", "designation": "Engineer", "xUrl": "ftp://x", "email": "nope"}
            )
        assert set(exc_info.value.fields) == {"xUrl", "email"}


class TestRead:
    @pytest.mark.asyncio
    async def test_get_unknown_id(self, blogs):
        with pytest.raises(NotFoundError, match="Blog with ID 42 not found"):
            await blogs.get(42)

    @pytest.mark.asyncio
    async def test_list_projects_summary_fields(self, blogs):
        await blogs.create(blog_payload())
        records = await blogs.list_all()
        assert len(records) == 1
        assert "content" not in records[0]
        assert set(records[0]) == set(BLOG.summary_fields)

    @pytest.mark.asyncio
    async def test_thanks_list_newest_first(self, thanks):
        first = await thanks.create(thanks_payload(title="First"))
        second = await thanks.create(thanks_payload(title="Second"))
        assert [r["id"] for r in await thanks.list_all()] == [second, first]

    @pytest.mark.asyncio
    async def test_page_slices_only_when_paginating(self, blogs):
        for n in range(5):
            await blogs.create(blog_payload(title=f"Blog {n}"))

        unpaged = await blogs.page(page=2, limit=2)
        assert len(unpaged["data"]) == 5
        assert unpaged["meta"] == {"totalItems": 5, "totalPages": 3, "currentPage": 2, "pageSize": 2}

        paged = await blogs.page(page=2, limit=2, paginate=True)
        assert [r["title"] for r in paged["data"]] == ["Blog 2", "Blog 1"]

    @pytest.mark.asyncio
    async def test_page_oldest_first(self, blogs):
        for n in range(3):
            await blogs.create(blog_payload(title=f"Blog {n}"))
        page = await blogs.page(sort="oldest")
        assert [r["title"] for r in page["data"]] == ["Blog 0", "Blog 1", "Blog 2"]

    @pytest.mark.asyncio
    async def test_page_search_matches_title_or_description(self, blogs):
        await blogs.create(blog_payload(title="Science Fair"))
        await blogs.create(blog_payload(title="Annual Day", description="Science exhibits on stage"))
        await blogs.create(blog_payload(title="Sports", description="Races"))

        page = await blogs.page(search="science")
        assert page["meta"]["totalItems"] == 2

    @pytest.mark.asyncio
    async def test_featured_only(self, blogs):
        await blogs.create(blog_payload(title="Plain"))
        await blogs.create(blog_payload(title="Star", isFeatured=True))
        page = await blogs.page(featured_only=True)
        assert [r["title"] for r in page["data"]] == ["Star"]

    @pytest.mark.asyncio
    async def test_search_requires_title(self, blogs):
        with pytest.raises(ValidationError) as exc_info:
            await blogs.search("  ")
        assert exc_info.value.fields == ["title"]

    @pytest.mark.asyncio
    async def test_search_caps_results(self, blogs):
        for n in range(12):
            await blogs.create(blog_payload(title=f"Match {n}"))
        results = await blogs.search("match")
        assert len(results) == 10
        assert results[0]["title"] == "Match 11"


class TestDelete:
    @pytest.mark.asyncio
    async def test_unknown_id_never_calls_asset_store(self, thanks, assets):
        with pytest.raises(NotFoundError):
            await thanks.delete(5)
        assert assets.calls == []

    @pytest.mark.asyncio
    async def test_bulk_delete_receives_every_file_id_in_order(self, blogs, store, assets):
        blog_id = await blogs.create(blog_payload(images=[image("a"), image("b"), image("c")]))

        deleted = await blogs.delete(blog_id)

        assert assets.calls == [["a", "b", "c"]]
        assert deleted["id"] == blog_id
        assert blog_id not in store.rows

    @pytest.mark.asyncio
    async def test_asset_store_failure_does_not_block_local_delete(self, store, failing_assets):
        blogs = ResourceLifecycle(BLOG, store, failing_assets)
        blog_id = await blogs.create(blog_payload(images=[image("a"), image("b")]))

        await blogs.delete(blog_id)

        assert failing_assets.calls == [["a", "b"]]
        assert blog_id not in store.rows

    @pytest.mark.asyncio
    async def test_unexpected_asset_error_is_also_swallowed(self, store, assets):
        assets.error = RuntimeError("connection reset")
        blogs = ResourceLifecycle(BLOG, store, assets)
        blog_id = await blogs.create(blog_payload())

        await blogs.delete(blog_id)
        assert store.rows == {}

    @pytest.mark.asyncio
    async def test_corrupted_images_abort_keeps_record(self, store, assets):
        store.put({"id": 7, "title": "t", "description": "d", "content": "c", "images": "not-an-array", "is_featured": False})
        blogs = ResourceLifecycle(BLOG, store, assets, CorruptionPolicy.ABORT)

        with pytest.raises(DataCorruptionError) as exc_info:
            await blogs.delete(7)

        assert exc_info.value.record_id == 7
        assert 7 in store.rows
        assert assets.calls == []

    @pytest.mark.asyncio
    async def test_corrupted_images_skip_deletes_record(self, store, assets):
        store.put({"id": 7, "title": "t", "description": "d", "content": "c", "images": "not-an-array", "is_featured": False})
        blogs = ResourceLifecycle(BLOG, store, assets, CorruptionPolicy.SKIP)

        await blogs.delete(7)

        assert 7 not in store.rows
        assert assets.calls == []

    @pytest.mark.asyncio
    async def test_policy_applies_to_thanks_too(self, store, assets):
        store.put({"id": 3, "title": "t", "description": "d", "content": "c", "images": [{"url": "x"}], "is_featured": False})
        thanks = ResourceLifecycle(THANKS, store, assets, CorruptionPolicy.ABORT)

        with pytest.raises(DataCorruptionError):
            await thanks.delete(3)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("stored", [{}, "", 0, False])
    async def test_falsy_non_list_images_abort(self, store, assets, stored):
        store.put({"id": 9, "title": "t", "description": "d", "content": "c", "images": stored, "is_featured": False})
        blogs = ResourceLifecycle(BLOG, store, assets, CorruptionPolicy.ABORT)

        with pytest.raises(DataCorruptionError) as exc_info:
            await blogs.delete(9)

        assert exc_info.value.record_id == 9
        assert 9 in store.rows
        assert assets.calls == []

    @pytest.mark.asyncio
    async def test_falsy_non_list_images_skip_logs_and_deletes(self, store, assets):
        store.put({"id": 9, "title": "t", "description": "d", "content": "c", "images": {}, "is_featured": False})
        blogs = ResourceLifecycle(BLOG, store, assets, CorruptionPolicy.SKIP)
        messages = []
        sink = logger.add(messages.append, level="WARNING")
        try:
            await blogs.delete(9)
        finally:
            logger.remove(sink)

        assert 9 not in store.rows
        assert assets.calls == []
        assert any("Corrupted images for Blog 9" in str(message) for message in messages)

    @pytest.mark.asyncio
    async def test_missing_images_skip_asset_call(self, store, assets):
        store.put({"id": 2, "title": "t", "description": "d", "content": "c", "images": None, "is_featured": False})
        blogs = ResourceLifecycle(BLOG, store, assets, CorruptionPolicy.ABORT)

        await blogs.delete(2)
        assert 2 not in store.rows
        assert assets.calls == []

    @pytest.mark.asyncio
    async def test_empty_images_skip_asset_call(self, store, assets):
        store.put({"id": 1, "title": "t", "description": "d", "content": "c", "images": [], "is_featured": False})
        blogs = ResourceLifecycle(BLOG, store, assets, CorruptionPolicy.ABORT)

        await blogs.delete(1)
        assert assets.calls == []

    @pytest.mark.asyncio
    async def test_notice_delete_has_no_asset_step(self, store, assets):
        notices = ResourceLifecycle(NOTICE, store, assets)
        notice_id = await notices.create({"title": "Exam", "description": "Timetable out"})

        await notices.delete(notice_id)
        assert assets.calls == []
        assert store.rows == {}

    @pytest.mark.asyncio
    async def test_local_delete_failure_propagates(self, blogs, store, assets):
        blog_id = await blogs.create(blog_payload())
        store.fail_on.add("delete_by_id")

        with pytest.raises(PersistenceError):
            await blogs.delete(blog_id)
        assert assets.calls == [["f1"]]

    @pytest.mark.asyncio
    async def test_record_vanishing_between_lookup_and_delete(self, blogs, store):
        blog_id = await blogs.create(blog_payload())
        original = store.delete_by_id

        async def already_gone(record_id):
            await original(record_id)
            return None

        store.delete_by_id = already_gone
        with pytest.raises(NotFoundError):
            await blogs.delete(blog_id)


class TestThanksScenario:
    @pytest.mark.asyncio
    async def test_create_thanks_newest_is_listed_first(self, thanks):
        await thanks.create(thanks_payload(title="Older"))
        thanks_id = await thanks.create(thanks_payload())

        record = await thanks.get(thanks_id)
        assert record["title"] == "Thank"
        assert record["is_featured"] is True
        assert (await thanks.list_all())[0]["id"] == thanks_id


def _parameters(method) -> list[tuple]:
    return [(p.name, p.kind, p.default) for p in inspect.signature(method).parameters.values()]


def test_fake_store_mirrors_sql_store_signatures():
    methods = [name for name, value in vars(RecordStore).items() if inspect.iscoroutinefunction(value)]
    assert len(methods) == 8

    for name in methods:
        fake, real = getattr(FakeStore, name), getattr(SqlStore, name)
        assert inspect.iscoroutinefunction(fake), name
        assert _parameters(fake) == _parameters(real), name
