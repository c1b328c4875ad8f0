"""
Admin console - server-rendered pages for managing site content.

Pages:
    GET  /admin/login                       - Login form
    POST /admin/login                       - Check credentials, open session
    POST /admin/logout                      - Close session
    GET  /admin                             - Dashboard with per-section counts
    GET  /admin/{section}                   - Records with delete buttons
    GET  /admin/{section}/new               - Create form
    POST /admin/{section}/new               - Submit create form
    POST /admin/{section}/{id}/delete       - Delete one record

Every page except login runs the same authorization check as
POST /api/admin/isAuthorized; a failed check redirects to /admin/login.

Images are referenced by ImageKit fileId and URL. The browser uploads the
file to ImageKit (credentials from GET /api/upload-auth) and the form only
carries the result.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from loguru import logger

from .deps import (
    SESSION_KEY,
    current_admin,
    get_admin_service,
    get_alumni_lifecycle,
    get_blog_lifecycle,
    get_gallery_service,
    get_media_service,
    get_notice_lifecycle,
    get_thanks_lifecycle,
)
from .errors import error_body
from ..errors import AuthenticationError, NotFoundError, SchoolCMSError, ValidationError
from ..services import AdminService

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

router = APIRouter(prefix="/admin", tags=["console"], include_in_schema=False)

LOGIN_PATH = "/admin/login"


class LoginRequired(Exception):
    """Raised by console pages when the session check fails."""


async def login_redirect(request: Request, exc: LoginRequired) -> RedirectResponse:
    return RedirectResponse(LOGIN_PATH, status_code=303)


async def console_admin(request: Request, admins: AdminService = Depends(get_admin_service)) -> dict[str, Any]:
    try:
        return await current_admin(request, admins)
    except AuthenticationError as e:
        logger.debug(f"Console access denied for {request.url.path}: {e.message}")
        raise LoginRequired() from e


# =============================================================================
# Sections
# =============================================================================


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    kind: str = "text"
    required: bool = True


@dataclass(frozen=True)
class Section:
    name: str
    title: str
    columns: tuple[str, ...]
    fields: tuple[FormField, ...]
    build: Callable[[Mapping[str, Any]], dict[str, Any]]
    deletable: bool = True


IMAGE_FIELDS = (
    FormField("imageFileId", "ImageKit fileId"),
    FormField("imageUrl", "Image URL", "url"),
)

POST_FIELDS = (
    FormField("title", "Title"),
    FormField("description", "Description", "textarea"),
    FormField("content", "Content", "textarea"),
    FormField("isFeatured", "Featured", "checkbox", required=False),
    *IMAGE_FIELDS,
)


def _text(form: Mapping[str, Any], name: str) -> str:
    return str(form.get(name) or "").strip()


def _optional(form: Mapping[str, Any], name: str) -> str | None:
    return _text(form, name) or None


def _datetime(form: Mapping[str, Any], name: str) -> str | None:
    value = _text(form, name)
    if len(value) == 10:
        # <input type="date"> sends YYYY-MM-DD
        value = f"{value}T00:00:00"
    return value or None


def _image(form: Mapping[str, Any]) -> dict[str, str]:
    return {"fileId": _text(form, "imageFileId"), "url": _text(form, "imageUrl")}


def _post(form: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "title": _text(form, "title"),
        "description": _text(form, "description"),
        "content": _text(form, "content"),
        "isFeatured": form.get("isFeatured") == "on",
        "images": [_image(form)],
    }


def _notice(form: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "title": _text(form, "title"),
        "description": _text(form, "description"),
        "expiry": _datetime(form, "expiry"),
    }


def _folder(form: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "title": _text(form, "title"),
        "caption": _text(form, "caption"),
        "eventDate": _datetime(form, "eventDate"),
        "thumbnailImage": _image(form),
    }


def _media(form: Mapping[str, Any]) -> dict[str, Any]:
    return {"imageArray": [{"title": _text(form, "title"), **_image(form)}]}


def _alumni(form: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "name": _text(form, "name"),
        "designation": _text(form, "designation"),
        "instaUrl": _optional(form, "instaUrl"),
        "xUrl": _optional(form, "xUrl"),
        "linkedInUrl": _optional(form, "linkedInUrl"),
        "email": _optional(form, "email"),
    }


SECTIONS = {
    section.name: section
    for section in (
        Section("blogs", "Blogs", ("id", "title", "is_featured", "created_at"), POST_FIELDS, _post),
        Section("thanks", "Special Thanks", ("id", "title", "is_featured", "created_at"), POST_FIELDS, _post),
        Section(
            "notices",
            "Notices",
            ("id", "title", "expiry", "created_at"),
            (
                FormField("title", "Title"),
                FormField("description", "Description", "textarea"),
                FormField("expiry", "Expiry", "date", required=False),
            ),
            _notice,
        ),
        Section(
            "folders",
            "Gallery Folders",
            ("id", "title", "event_date", "image_count"),
            (
                FormField("title", "Title"),
                FormField("caption", "Caption"),
                FormField("eventDate", "Event date", "date"),
                *IMAGE_FIELDS,
            ),
            _folder,
        ),
        Section(
            "media",
            "Press Media",
            ("id", "title", "file_id", "uploaded_at"),
            (FormField("title", "Title"), *IMAGE_FIELDS),
            _media,
        ),
        Section(
            "alumni",
            "Alumni",
            ("id", "name", "designation", "email"),
            (
                FormField("name", "Name"),
                FormField("designation", "Designation"),
                FormField("instaUrl", "Instagram URL", "url", required=False),
                FormField("xUrl", "X URL", "url", required=False),
                FormField("linkedInUrl", "LinkedIn URL", "url", required=False),
                FormField("email", "Email", "email", required=False),
            ),
            _alumni,
            deletable=False,
        ),
    )
}

LIFECYCLES = {
    "blogs": get_blog_lifecycle,
    "thanks": get_thanks_lifecycle,
    "notices": get_notice_lifecycle,
    "alumni": get_alumni_lifecycle,
}


def _section(name: str) -> Section:
    section = SECTIONS.get(name)
    if section is None:
        raise NotFoundError(f"Unknown section: {name}")
    return section


async def _rows(request: Request, section: Section) -> list[dict[str, Any]]:
    if section.name == "folders":
        envelope = await get_gallery_service(request).list_folders()
        return envelope["data"]
    if section.name == "media":
        return await get_media_service(request).list_all()
    return await LIFECYCLES[section.name](request).list_all()


async def _create(request: Request, section: Section, payload: dict[str, Any]) -> None:
    if section.name == "folders":
        await get_gallery_service(request).create_folder(payload)
    elif section.name == "media":
        await get_media_service(request).add(payload)
    else:
        await LIFECYCLES[section.name](request).create(payload)


async def _delete(request: Request, section: Section, record_id: int) -> None:
    if section.name == "folders":
        await get_gallery_service(request).delete_folder(record_id)
    elif section.name == "media":
        media = get_media_service(request)
        image = await media.get(record_id)
        await media.delete({"fileIds": [image["file_id"]]})
    else:
        await LIFECYCLES[section.name](request).delete(record_id)


def _render(request: Request, name: str, context: dict[str, Any], status_code: int = 200):
    context = {"sections": SECTIONS.values(), **context}
    return templates.TemplateResponse(request, name, context, status_code=status_code)


# =============================================================================
# Pages
# =============================================================================


@router.get("/login")
async def login_page(request: Request):
    return _render(request, "login.html", {"error": None})


@router.post("/login")
async def login_submit(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    admins: AdminService = Depends(get_admin_service),
):
    try:
        admin = await admins.authenticate({"username": username, "password": password})
    except (AuthenticationError, ValidationError):
        return _render(request, "login.html", {"error": "Invalid credentials"}, status_code=401)

    request.session[SESSION_KEY] = admin
    return RedirectResponse("/admin", status_code=303)


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return RedirectResponse(LOGIN_PATH, status_code=303)


@router.get("")
async def dashboard(request: Request, admin: dict = Depends(console_admin)):
    counts = {name: len(await _rows(request, section)) for name, section in SECTIONS.items()}
    return _render(request, "dashboard.html", {"admin": admin, "counts": counts})


@router.get("/{section_name}")
async def section_page(
    request: Request,
    section_name: str,
    message: str | None = None,
    admin: dict = Depends(console_admin),
):
    section = _section(section_name)
    rows = await _rows(request, section)
    return _render(
        request,
        "section.html",
        {"admin": admin, "section": section, "rows": rows, "message": message},
    )


@router.get("/{section_name}/new")
async def new_page(request: Request, section_name: str, admin: dict = Depends(console_admin)):
    section = _section(section_name)
    return _render(request, "form.html", {"admin": admin, "section": section, "values": {}, "errors": []})


@router.post("/{section_name}/new")
async def new_submit(request: Request, section_name: str, admin: dict = Depends(console_admin)):
    section = _section(section_name)
    form = await request.form()
    try:
        await _create(request, section, section.build(form))
    except ValidationError as e:
        return _render(
            request,
            "form.html",
            {"admin": admin, "section": section, "values": dict(form), "errors": e.errors},
            status_code=400,
        )
    logger.info(f"Console: {admin['username']} created a record in {section.name}")
    return RedirectResponse(f"/admin/{section.name}?message=Created", status_code=303)


@router.post("/{section_name}/{record_id}/delete")
async def delete_submit(
    request: Request,
    section_name: str,
    record_id: int,
    admin: dict = Depends(console_admin),
):
    section = _section(section_name)
    if not section.deletable:
        raise NotFoundError(f"{section.title} records cannot be deleted")
    try:
        await _delete(request, section, record_id)
        message = "Deleted"
    except SchoolCMSError as e:
        message = error_body(e)["message"]
    logger.info(f"Console: {admin['username']} delete {section.name} {record_id}: {message}")
    return RedirectResponse(f"/admin/{section.name}?message={message}", status_code=303)
