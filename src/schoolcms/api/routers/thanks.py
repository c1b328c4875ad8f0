"""
Special Thanks API Router.

Endpoints:
    POST /api/thanks/addThanks              - Create an entry (admin)
    POST /api/thanks/deleteThanks/{id}      - Delete an entry and its images (admin)
    GET  /api/thanks/thanks                 - All entries, newest first
    GET  /api/thanks/fetchThanks            - Paginated/searchable listing
    GET  /api/thanks/fetchFeatured          - Featured entries
    GET  /api/thanks/search?title=          - Up to 10 title matches (admin)
    GET  /api/thanks/{id}                   - One entry with content
"""

from typing import Any, Literal

from fastapi import APIRouter, Body, Depends, Query

from ..deps import get_thanks_lifecycle, require_admin
from ...models.entities import Thanks, ThanksSummary
from ...services import ResourceLifecycle
from ...services.validation import parse_record_id

router = APIRouter(prefix="/api/thanks", tags=["thanks"])


def _page(envelope: dict[str, Any]) -> dict[str, Any]:
    return {**envelope, "data": [Thanks.model_validate(row) for row in envelope["data"]]}


@router.post("/addThanks", status_code=201)
async def add_thanks(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    thanks: ResourceLifecycle = Depends(get_thanks_lifecycle),
) -> dict:
    thanks_id = await thanks.create(payload)
    return {"message": "Special Thanks created successfully", "id": thanks_id}


@router.post("/deleteThanks/{thanks_id}")
async def delete_thanks(
    thanks_id: str,
    admin: dict = Depends(require_admin),
    thanks: ResourceLifecycle = Depends(get_thanks_lifecycle),
) -> dict:
    record_id = parse_record_id(thanks_id)
    await thanks.delete(record_id)
    return {"message": f"Special Thanks with ID {record_id} deleted successfully"}


@router.get("/thanks")
async def list_thanks(thanks: ResourceLifecycle = Depends(get_thanks_lifecycle)) -> dict:
    records = await thanks.list_all()
    return {"thanks": [ThanksSummary.model_validate(row) for row in records]}


@router.get("/fetchThanks")
async def fetch_thanks_page(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=9, ge=1, le=100),
    search: str | None = Query(default=None),
    sort: Literal["newest", "oldest"] = Query(default="newest"),
    paginate: bool = Query(default=False),
    thanks: ResourceLifecycle = Depends(get_thanks_lifecycle),
) -> dict:
    envelope = await thanks.page(page=page, limit=limit, search=search, sort=sort, paginate=paginate)
    return _page(envelope)


@router.get("/fetchFeatured")
async def fetch_featured(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=3, ge=1, le=100),
    paginate: bool = Query(default=False),
    thanks: ResourceLifecycle = Depends(get_thanks_lifecycle),
) -> dict:
    envelope = await thanks.page(page=page, limit=limit, paginate=paginate, featured_only=True)
    return _page(envelope)


@router.get("/search")
async def search_thanks(
    title: str | None = Query(default=None),
    admin: dict = Depends(require_admin),
    thanks: ResourceLifecycle = Depends(get_thanks_lifecycle),
) -> dict:
    records = await thanks.search(title)
    return {"thanks": [Thanks.model_validate(row) for row in records]}


@router.get("/{thanks_id}")
async def get_thanks(thanks_id: str, thanks: ResourceLifecycle = Depends(get_thanks_lifecycle)) -> dict:
    record = await thanks.get(parse_record_id(thanks_id))
    return {"thanks": Thanks.model_validate(record)}
