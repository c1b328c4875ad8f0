"""
FastAPI dependencies.

Services are built per request from what create_app() put on app.state:
- app.state.db        DatabaseService (engine + session factory)
- app.state.assets    AssetStore used for image cleanup
- app.state.imagekit  ImageKitClient used for upload credentials
- app.state.settings  Settings the app was created with

Admin access is a signed session cookie holding {"id", "username"}; every
check re-reads the account so deleted admins lose access immediately.
"""

from typing import Any

from fastapi import Depends, Request

from ..errors import AuthenticationError
from ..services import AdminService, GalleryService, MediaService, ResourceLifecycle, SqlStore
from ..services.database import (
    AdminRow,
    AlumniRow,
    BlogRow,
    FolderRow,
    GalleryImageRow,
    NoticeRow,
    PressImageRow,
    ThanksRow,
)
from ..services.imagekit import ImageKitClient
from ..services.lifecycle import ALUMNI, BLOG, NOTICE, THANKS, ResourceKind
from ..services.admin_service import public

SESSION_KEY = "admin"


def _store(request: Request, table) -> SqlStore:
    return SqlStore(request.app.state.db, table)


def _lifecycle(kind: ResourceKind, table):
    def dependency(request: Request) -> ResourceLifecycle:
        state = request.app.state
        return ResourceLifecycle(
            kind,
            _store(request, table),
            state.assets,
            state.settings.lifecycle.corruption_policy,
        )

    dependency.__name__ = f"get_{kind.name}_lifecycle"
    return dependency


get_blog_lifecycle = _lifecycle(BLOG, BlogRow)
get_thanks_lifecycle = _lifecycle(THANKS, ThanksRow)
get_notice_lifecycle = _lifecycle(NOTICE, NoticeRow)
get_alumni_lifecycle = _lifecycle(ALUMNI, AlumniRow)


def get_gallery_service(request: Request) -> GalleryService:
    return GalleryService(
        _store(request, FolderRow),
        _store(request, GalleryImageRow),
        request.app.state.assets,
    )


def get_media_service(request: Request) -> MediaService:
    return MediaService(_store(request, PressImageRow), request.app.state.assets)


def get_admin_service(request: Request) -> AdminService:
    return AdminService(_store(request, AdminRow))


def get_imagekit(request: Request) -> ImageKitClient:
    return request.app.state.imagekit


async def current_admin(request: Request, admins: AdminService) -> dict[str, Any]:
    """
    Resolve the admin behind the session cookie.

    Raises:
        AuthenticationError: No session, or the account no longer exists
    """
    session_admin = request.session.get(SESSION_KEY)
    if not session_admin:
        raise AuthenticationError("Not authorized, no session found")

    admin = await admins.get_by_username(session_admin.get("username", ""))
    if admin is None:
        request.session.pop(SESSION_KEY, None)
        raise AuthenticationError("User not found (invalid session)")
    return public(admin)


async def require_admin(
    request: Request, admins: AdminService = Depends(get_admin_service)
) -> dict[str, Any]:
    """Dependency guarding every mutating endpoint."""
    return await current_admin(request, admins)
