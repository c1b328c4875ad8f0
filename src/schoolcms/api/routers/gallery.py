"""
Gallery API Router.

Endpoints:
    POST   /api/gallery/addFolder                     - Create a folder + thumbnail image (admin)
    POST   /api/gallery/addImages                     - Add images to a folder (admin)
    DELETE /api/gallery/deleteFolder/{id}             - Delete folder, images and files (admin)
    POST   /api/gallery/deleteImages                  - Delete images by fileIds (admin)
    GET    /api/gallery/getFolders                    - Folders with image counts
    GET    /api/gallery/getFolderNames                - id/title pairs
    GET    /api/gallery/folders/{id}                  - One folder
    GET    /api/gallery/{id}/getImages                - All images in a folder
    GET    /api/gallery/{id}/images                   - Paginated images in a folder
    GET    /api/gallery/{id}/images/{imageId}         - One image
"""

from typing import Any, Literal

from fastapi import APIRouter, Body, Depends, Query

from ..deps import get_gallery_service, require_admin
from ...models.entities import Folder, FolderName, GalleryImage
from ...services import GalleryService
from ...services.validation import parse_record_id

router = APIRouter(prefix="/api/gallery", tags=["gallery"])


@router.post("/addFolder", status_code=201)
async def add_folder(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    gallery: GalleryService = Depends(get_gallery_service),
) -> dict:
    created = await gallery.create_folder(payload)
    folder = Folder.model_validate(created["folder"])
    return {
        "message": "Folder created successfully",
        "id": folder.id,
        "folder": folder,
        "galleryImage": GalleryImage.model_validate(created["galleryImage"]),
    }


@router.post("/addImages", status_code=201)
async def add_images(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    gallery: GalleryService = Depends(get_gallery_service),
) -> dict:
    count = await gallery.add_images(payload)
    return {"message": f"{count} image(s) added successfully", "count": count}


@router.delete("/deleteFolder/{folder_id}")
async def delete_folder(
    folder_id: str,
    admin: dict = Depends(require_admin),
    gallery: GalleryService = Depends(get_gallery_service),
) -> dict:
    record_id = parse_record_id(folder_id)
    await gallery.delete_folder(record_id)
    return {"message": f"Folder with ID {record_id} deleted successfully"}


@router.post("/deleteImages")
async def delete_images(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    gallery: GalleryService = Depends(get_gallery_service),
) -> dict:
    count = await gallery.delete_images(payload)
    return {"message": "Images deleted successfully", "count": count}


@router.get("/getFolders")
async def get_folders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=12, ge=1, le=100),
    search: str | None = Query(default=None),
    sort: Literal["newest", "oldest"] = Query(default="newest"),
    paginate: bool = Query(default=False),
    gallery: GalleryService = Depends(get_gallery_service),
) -> dict:
    envelope = await gallery.list_folders(page=page, limit=limit, search=search, sort=sort, paginate=paginate)
    return {**envelope, "data": [Folder.model_validate(row) for row in envelope["data"]]}


@router.get("/getFolderNames")
async def get_folder_names(gallery: GalleryService = Depends(get_gallery_service)) -> dict:
    names = await gallery.folder_names()
    return {"folders": [FolderName.model_validate(row) for row in names]}


@router.get("/folders/{folder_id}")
async def get_folder(folder_id: str, gallery: GalleryService = Depends(get_gallery_service)) -> dict:
    folder = await gallery.get_folder(parse_record_id(folder_id))
    return {"folder": Folder.model_validate(folder)}


@router.get("/{folder_id}/getImages")
async def get_folder_images(folder_id: str, gallery: GalleryService = Depends(get_gallery_service)) -> dict:
    images = await gallery.folder_images(parse_record_id(folder_id))
    return {"images": [GalleryImage.model_validate(row) for row in images]}


@router.get("/{folder_id}/images")
async def get_folder_images_page(
    folder_id: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=12, ge=1, le=100),
    paginate: bool = Query(default=False),
    gallery: GalleryService = Depends(get_gallery_service),
) -> dict:
    envelope = await gallery.folder_images_page(
        parse_record_id(folder_id), page=page, limit=limit, paginate=paginate
    )
    return {**envelope, "data": [GalleryImage.model_validate(row) for row in envelope["data"]]}


@router.get("/{folder_id}/images/{image_id}")
async def get_image(
    folder_id: str, image_id: str, gallery: GalleryService = Depends(get_gallery_service)
) -> dict:
    image = await gallery.get_image(parse_record_id(folder_id), parse_record_id(image_id, "imageId"))
    return {"image": GalleryImage.model_validate(image)}
