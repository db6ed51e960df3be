from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Required fields are checked by the mutation engine so that a missing one
# is reported as a named ValidationError rather than a schema error.
class BlogCreate(CamelModel):
    heading: Optional[str] = None
    author: Optional[str] = None
    body: Optional[str] = None
    tags: Optional[List[str]] = None
    is_published: bool = False


class LikeRequest(BaseModel):
    action: Optional[str] = None


class BlogSummary(CamelModel):
    id: str
    heading: str
    author: str
    body: str
    created_at: datetime
    upvotes: int = 0
    tags: List[str] = []


class BlogDetail(BlogSummary):
    is_published: bool
    updated_at: Optional[datetime] = None


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_blogs: int
    has_next_page: bool
    has_prev_page: bool


class LikeResult(CamelModel):
    id: str
    upvotes: int


class MostLikedBlog(CamelModel):
    id: str
    heading: str
    upvotes: int
    author: str


class RecentBlog(CamelModel):
    id: str
    heading: str
    created_at: datetime
    author: str


class BlogStats(CamelModel):
    total_blogs: int
    total_upvotes: int
    most_liked_blog: Optional[MostLikedBlog] = None
    recent_blog: Optional[RecentBlog] = None
