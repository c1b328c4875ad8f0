"""
Notices API Router.

Endpoints:
    POST /api/notices/addNotice            - Create a notice (admin)
    POST /api/notices/deleteNotice/{id}    - Delete a notice (admin)
    GET  /api/notices/getNotices           - All notices
    GET  /api/notices/{id}                 - One notice
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from ..deps import get_notice_lifecycle, require_admin
from ...models.entities import Notice
from ...services import ResourceLifecycle
from ...services.validation import parse_record_id

router = APIRouter(prefix="/api/notices", tags=["notices"])


@router.post("/addNotice", status_code=201)
async def add_notice(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    notices: ResourceLifecycle = Depends(get_notice_lifecycle),
) -> dict:
    notice_id = await notices.create(payload)
    return {"message": "Notice created successfully", "id": notice_id}


@router.post("/deleteNotice/{notice_id}")
async def delete_notice(
    notice_id: str,
    admin: dict = Depends(require_admin),
    notices: ResourceLifecycle = Depends(get_notice_lifecycle),
) -> dict:
    record_id = parse_record_id(notice_id)
    await notices.delete(record_id)
    return {"message": f"Notice with ID {record_id} deleted successfully"}


@router.get("/getNotices")
async def get_notices(notices: ResourceLifecycle = Depends(get_notice_lifecycle)) -> dict:
    records = await notices.list_all()
    return {"notices": [Notice.model_validate(row) for row in records]}


@router.get("/{notice_id}")
async def get_notice(notice_id: str, notices: ResourceLifecycle = Depends(get_notice_lifecycle)) -> dict:
    record = await notices.get(parse_record_id(notice_id))
    return {"notice": Notice.model_validate(record)}
