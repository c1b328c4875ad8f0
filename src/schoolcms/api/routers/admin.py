"""
Admin API Router.

Session endpoints for the admin console.

Endpoints:
    POST /api/admin/login          - Check credentials and open a session
    POST /api/admin/logout         - Clear the session
    POST /api/admin/isAuthorized   - 200 with the admin when the session is valid, else 401
    POST /api/admin/register       - Create another admin account (admin only)
    POST /api/admin/delete         - Delete an account after re-checking its password (admin only)

Design Pattern:
- The session cookie only stores {"id", "username"}
- Every protected call re-reads the account (see deps.current_admin)
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from loguru import logger

from ..deps import SESSION_KEY, current_admin, get_admin_service, require_admin
from ...models.entities import AdminPublic
from ...services import AdminService

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login")
async def login(
    request: Request,
    payload: Any = Body(None),
    admins: AdminService = Depends(get_admin_service),
) -> dict:
    admin = await admins.authenticate(payload)
    request.session[SESSION_KEY] = admin
    logger.info(f"Admin {admin['username']} logged in")
    return {"message": "Login successful", "user": AdminPublic.model_validate(admin)}


@router.post("/logout")
async def logout(request: Request) -> dict:
    request.session.clear()
    return {"message": "Logged out successfully"}


@router.post("/isAuthorized")
async def is_authorized(request: Request, admins: AdminService = Depends(get_admin_service)) -> dict:
    admin = await current_admin(request, admins)
    return {"authenticated": True, "user": AdminPublic.model_validate(admin)}


@router.post("/register", status_code=201)
async def register(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    admins: AdminService = Depends(get_admin_service),
) -> dict:
    created = await admins.register(payload)
    logger.info(f"Admin {admin['username']} registered {created['username']}")
    return {"message": "Admin registered successfully", "id": created["id"]}


@router.post("/delete")
async def delete(
    request: Request,
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    admins: AdminService = Depends(get_admin_service),
) -> dict:
    deleted = await admins.delete(payload)
    if deleted["id"] == admin["id"]:
        request.session.clear()
    return {"message": "Admin deleted successfully"}
