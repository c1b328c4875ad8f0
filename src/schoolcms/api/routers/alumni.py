"""
Alumni API Router.

Endpoints:
    POST /api/Addalumni    - Add an alumni entry (admin)
    GET  /api/alumni       - Alumni directory, optional search on name/designation
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from ..deps import get_alumni_lifecycle, require_admin
from ...models.entities import Alumni
from ...services import ResourceLifecycle

router = APIRouter(prefix="/api", tags=["alumni"])


@router.post("/Addalumni", status_code=201)
async def add_alumni(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    alumni: ResourceLifecycle = Depends(get_alumni_lifecycle),
) -> dict:
    alumni_id = await alumni.create(payload)
    return {"message": "Alumni added successfully", "id": alumni_id}


@router.get("/alumni")
async def list_alumni(
    search: str | None = Query(default=None),
    alumni: ResourceLifecycle = Depends(get_alumni_lifecycle),
) -> dict:
    if search:
        envelope = await alumni.page(search=search)
        records = envelope["data"]
    else:
        records = await alumni.list_all()
    return {"alumni": [Alumni.model_validate(row) for row in records]}
