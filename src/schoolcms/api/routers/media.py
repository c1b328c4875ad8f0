"""
Press media API Router.

Endpoints:
    POST /api/news/addMedia        - Add press images, duplicates skipped (admin)
    POST /api/news/deleteMedia     - Delete press images by fileIds (admin)
    GET  /api/news/media           - All press images, newest upload first
    GET  /api/news/media/{id}      - One press image
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from ..deps import get_media_service, require_admin
from ...models.entities import PressImage
from ...services import MediaService
from ...services.validation import parse_record_id

router = APIRouter(prefix="/api/news", tags=["media"])


@router.post("/addMedia", status_code=201)
async def add_media(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    media: MediaService = Depends(get_media_service),
) -> dict:
    count = await media.add(payload)
    return {"message": f"{count} image(s) added successfully", "count": count}


@router.post("/deleteMedia")
async def delete_media(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    media: MediaService = Depends(get_media_service),
) -> dict:
    count = await media.delete(payload)
    return {"message": "Images deleted successfully", "count": count}


@router.get("/media")
async def list_media(media: MediaService = Depends(get_media_service)) -> dict:
    images = await media.list_all()
    return {"images": [PressImage.model_validate(row) for row in images]}


@router.get("/media/{image_id}")
async def get_media(image_id: str, media: MediaService = Depends(get_media_service)) -> dict:
    image = await media.get(parse_record_id(image_id))
    return {"image": PressImage.model_validate(image)}
