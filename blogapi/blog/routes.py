from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends, Query

from blogapi import config
from blogapi.blog import mutations, queries
from blogapi.blog.repository import get_repository
from blogapi.blog.stats import blog_stats
from blogapi.models.schemas import (
    BlogCreate,
    BlogDetail,
    BlogStats,
    BlogSummary,
    LikeRequest,
    LikeResult,
)
from blogapi.utils.errors import InvalidIdError, operation_boundary

router = APIRouter()


def _doc_to_dict(doc):
    if not doc:
        return None
    doc = dict(doc)
    doc["id"] = str(doc["_id"])
    doc.pop("_id", None)
    return doc


def _dump(model, doc):
    if not doc:
        return None
    return model.model_validate(_doc_to_dict(doc)).model_dump(by_alias=True, mode="json")


def _object_id(blog_id: str) -> ObjectId:
    try:
        return ObjectId(blog_id)
    except (InvalidId, TypeError):
        raise InvalidIdError()


def _page_response(blogs, pagination, **echo):
    data = {"blogs": [_dump(BlogSummary, d) for d in blogs]}
    data.update(echo)
    data["pagination"] = pagination.model_dump(by_alias=True)
    return {"success": True, "data": data}


@router.get("")
@router.get("/", include_in_schema=False)
def list_blogs(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    repo=Depends(get_repository),
):
    with operation_boundary("Error fetching blogs"):
        query = queries.build_list_query(page, limit, sort_by, config.MAX_PAGE_LIMIT)
        blogs, pagination = queries.run_query(repo, query)
    return _page_response(blogs, pagination)


@router.get("/stats")
def get_stats(repo=Depends(get_repository)):
    with operation_boundary("Error fetching blog statistics"):
        stats = blog_stats(repo)
    stats["most_liked_blog"] = _doc_to_dict(stats["most_liked_blog"])
    stats["recent_blog"] = _doc_to_dict(stats["recent_blog"])
    data = BlogStats.model_validate(stats).model_dump(by_alias=True, mode="json")
    return {"success": True, "data": data}


@router.get("/search")
def search_blogs(
    q: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    repo=Depends(get_repository),
):
    with operation_boundary("Error searching blogs"):
        query = queries.build_search_query(q, page, limit, config.MAX_PAGE_LIMIT)
        blogs, pagination = queries.run_query(repo, query)
    return _page_response(blogs, pagination, searchQuery=q)


@router.get("/tag/{tag}")
def list_by_tag(
    tag: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    repo=Depends(get_repository),
):
    with operation_boundary("Error fetching blogs by tag"):
        query = queries.build_tag_query(tag, page, limit, sort_by, config.MAX_PAGE_LIMIT)
        blogs, pagination = queries.run_query(repo, query)
    return _page_response(blogs, pagination, tag=tag)


@router.get("/author/{author}")
def list_by_author(
    author: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    repo=Depends(get_repository),
):
    with operation_boundary("Error fetching blogs by author"):
        query = queries.build_author_query(author, page, limit, sort_by, config.MAX_PAGE_LIMIT)
        blogs, pagination = queries.run_query(repo, query)
    return _page_response(blogs, pagination, author=author)


@router.get("/{blog_id}")
def get_blog(blog_id: str, repo=Depends(get_repository)):
    oid = _object_id(blog_id)
    with operation_boundary("Error fetching blog"):
        doc = queries.get_blog(repo, oid)
    return {"success": True, "data": _dump(BlogDetail, doc)}


@router.post("", status_code=201)
@router.post("/", status_code=201, include_in_schema=False)
def create_blog(payload: BlogCreate, repo=Depends(get_repository)):
    with operation_boundary("Error creating blog"):
        doc = mutations.create_blog(repo, payload, allow_publish=config.ALLOW_PUBLISH_ON_CREATE)
    return {
        "success": True,
        "message": "Blog created successfully",
        "data": _dump(BlogDetail, doc),
    }


@router.put("/{blog_id}/likes")
def update_blog_likes(
    blog_id: str,
    payload: Optional[LikeRequest] = None,
    repo=Depends(get_repository),
):
    oid = _object_id(blog_id)
    action = payload.action if payload else None
    with operation_boundary("Error updating blog likes"):
        updated_id, upvotes = mutations.set_like_action(repo, oid, action)
    return {
        "success": True,
        "message": f"Blog {action}d successfully",
        "data": LikeResult(id=str(updated_id), upvotes=upvotes).model_dump(by_alias=True),
    }
