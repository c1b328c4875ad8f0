"""
Blogs API Router.

Endpoints:
    POST   /api/blogs/uploadBlog          - Create a blog (admin)
    POST   /api/blogs/deleteBlog          - Delete a blog, id in body as blogId (admin)
    DELETE /api/blogs/deleteBlog/{id}     - Delete a blog (admin)
    GET    /api/blogs/fetchBlog           - All blogs, summary fields
    GET    /api/blogs/fetchBlog/{id}      - One blog with content
    GET    /api/blogs/fetchBlogs          - Paginated/searchable listing
    GET    /api/blogs/fetchFeatured       - Featured blogs, newest first
    GET    /api/blogs/search?title=       - Up to 10 title matches
"""

from typing import Any, Literal

from fastapi import APIRouter, Body, Depends, Query

from ..deps import get_blog_lifecycle, require_admin
from ...models.entities import Blog, BlogSummary
from ...services import ResourceLifecycle
from ...services.validation import parse_record_id

router = APIRouter(prefix="/api/blogs", tags=["blogs"])


def _page(envelope: dict[str, Any]) -> dict[str, Any]:
    return {**envelope, "data": [Blog.model_validate(row) for row in envelope["data"]]}


@router.post("/uploadBlog", status_code=201)
async def upload_blog(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    blogs: ResourceLifecycle = Depends(get_blog_lifecycle),
) -> dict:
    blog_id = await blogs.create(payload)
    return {"message": "Blog uploaded successfully", "id": blog_id}


@router.post("/deleteBlog")
async def delete_blog_from_body(
    payload: Any = Body(None),
    admin: dict = Depends(require_admin),
    blogs: ResourceLifecycle = Depends(get_blog_lifecycle),
) -> dict:
    raw_id = payload.get("blogId") if isinstance(payload, dict) else None
    blog_id = parse_record_id(raw_id, "blogId")
    await blogs.delete(blog_id)
    return {"message": f"Blog with ID {blog_id} deleted successfully"}


@router.delete("/deleteBlog/{blog_id}")
async def delete_blog(
    blog_id: str,
    admin: dict = Depends(require_admin),
    blogs: ResourceLifecycle = Depends(get_blog_lifecycle),
) -> dict:
    record_id = parse_record_id(blog_id)
    await blogs.delete(record_id)
    return {"message": f"Blog with ID {record_id} deleted successfully"}


@router.get("/fetchBlog")
async def fetch_blogs(blogs: ResourceLifecycle = Depends(get_blog_lifecycle)) -> dict:
    records = await blogs.list_all()
    return {"blogs": [BlogSummary.model_validate(row) for row in records]}


@router.get("/fetchBlog/{blog_id}")
async def fetch_blog(blog_id: str, blogs: ResourceLifecycle = Depends(get_blog_lifecycle)) -> dict:
    record = await blogs.get(parse_record_id(blog_id))
    return {"blog": Blog.model_validate(record)}


@router.get("/fetchBlogs")
async def fetch_blogs_page(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=9, ge=1, le=100),
    search: str | None = Query(default=None),
    sort: Literal["newest", "oldest"] = Query(default="newest"),
    paginate: bool = Query(default=False),
    blogs: ResourceLifecycle = Depends(get_blog_lifecycle),
) -> dict:
    envelope = await blogs.page(page=page, limit=limit, search=search, sort=sort, paginate=paginate)
    return _page(envelope)


@router.get("/fetchFeatured")
async def fetch_featured(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=3, ge=1, le=100),
    paginate: bool = Query(default=False),
    blogs: ResourceLifecycle = Depends(get_blog_lifecycle),
) -> dict:
    envelope = await blogs.page(page=page, limit=limit, paginate=paginate, featured_only=True)
    return _page(envelope)


@router.get("/search")
async def search_blogs(
    title: str | None = Query(default=None),
    blogs: ResourceLifecycle = Depends(get_blog_lifecycle),
) -> dict:
    records = await blogs.search(title)
    return {"blogs": [Blog.model_validate(row) for row in records]}
