"""
ImageKit API Router.

Endpoints:
    GET /api/upload-auth - Signed parameters for a browser-side ImageKit upload (admin)
"""

from fastapi import APIRouter, Depends

from ..deps import get_imagekit, require_admin
from ...services.imagekit import ImageKitClient

router = APIRouter(prefix="/api", tags=["imagekit"])


@router.get("/upload-auth")
async def upload_auth(
    admin: dict = Depends(require_admin),
    imagekit: ImageKitClient = Depends(get_imagekit),
) -> dict:
    return imagekit.upload_auth()
