"""Query builder for blog listings.

Turns raw request parameters (page, limit, sortBy and at most one filter
dimension: tag, author or free text) into a bounded ``BlogQuery`` and runs
it against the repository as a page fetch plus a count under the same
filter.

Malformed paging input never fails a request: it falls back to defaults.
Only a text search without a search string is rejected.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pymongo import DESCENDING

from blogapi.config import MAX_PAGE_LIMIT
from blogapi.models.schemas import Pagination
from blogapi.utils.errors import MissingQueryError, NotFoundError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

PUBLISHED = {"is_published": True}

LIST_PROJECTION = {
    "heading": 1,
    "author": 1,
    "body": 1,
    "created_at": 1,
    "upvotes": 1,
    "tags": 1,
}

TEXT_SCORE = {"$meta": "textScore"}

_LEADING_INT = re.compile(r"\s*([+-]?)(\d+)")

# Largest value the storage engine accepts for skip
INT64_MAX = 2 ** 63 - 1


class SortBy(str, Enum):
    RECENT = "recent"
    POPULAR = "popular"


SORT_ORDERS = {
    SortBy.POPULAR: [("upvotes", DESCENDING), ("created_at", DESCENDING)],
    SortBy.RECENT: [("created_at", DESCENDING), ("upvotes", DESCENDING)],
}

SEARCH_SORT = [("score", TEXT_SCORE), ("created_at", DESCENDING)]


@dataclass(frozen=True)
class BlogQuery:
    filter: dict
    sort: list
    page: int
    limit: int
    projection: dict = field(default_factory=lambda: dict(LIST_PROJECTION))

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def parse_int(value, default: int) -> int:
    """Read a leading integer the lenient way: "12abc" -> 12, "3.7" -> 3.

    Missing, non-numeric and zero values give ``default``. Values beyond
    64 bits saturate at ``INT64_MAX``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return default
        sign, digits = match.groups()
        digits = digits.lstrip("0")
        if len(digits) > 19:
            parsed = INT64_MAX
        else:
            parsed = int(digits or "0")
        if sign == "-":
            parsed = -parsed
    parsed = max(min(parsed, INT64_MAX), -INT64_MAX)
    return parsed or default


def normalize_page(page) -> int:
    return max(parse_int(page, DEFAULT_PAGE), 1)


def normalize_limit(limit, max_limit: Optional[int] = None) -> int:
    ceiling = max_limit if max_limit is not None else MAX_PAGE_LIMIT
    return min(max(parse_int(limit, DEFAULT_LIMIT), 1), ceiling)


def resolve_sort(sort_by) -> list:
    """`popular` ranks by upvotes, anything else by recency."""
    try:
        key = SortBy(sort_by)
    except ValueError:
        key = SortBy.RECENT
    return list(SORT_ORDERS[key])


def published(extra: Optional[dict] = None) -> dict:
    criteria = dict(PUBLISHED)
    if extra:
        criteria.update(extra)
    return criteria


def tag_filter(tag: str) -> dict:
    return published({"tags": {"$in": [tag]}})


def author_filter(author: str) -> dict:
    # Literal, case-insensitive containment
    return published({"author": {"$regex": re.escape(author), "$options": "i"}})


def text_filter(q: str) -> dict:
    return published({"$text": {"$search": q}})


def _paged(criteria: dict, sort: list, page, limit, max_limit, projection=None) -> BlogQuery:
    limit = normalize_limit(limit, max_limit)
    # Far-off pages stay far off but keep skip within 64 bits
    page = min(normalize_page(page), INT64_MAX // limit + 1)
    query = BlogQuery(filter=criteria, sort=sort, page=page, limit=limit)
    if projection:
        query.projection.update(projection)
    return query


def build_list_query(page=None, limit=None, sort_by=None, max_limit=None) -> BlogQuery:
    return _paged(published(), resolve_sort(sort_by), page, limit, max_limit)


def build_tag_query(tag: str, page=None, limit=None, sort_by=None, max_limit=None) -> BlogQuery:
    return _paged(tag_filter(tag), resolve_sort(sort_by), page, limit, max_limit)


def build_author_query(author: str, page=None, limit=None, sort_by=None, max_limit=None) -> BlogQuery:
    return _paged(author_filter(author), resolve_sort(sort_by), page, limit, max_limit)


def build_search_query(q: Optional[str], page=None, limit=None, max_limit=None) -> BlogQuery:
    """Relevance first, then recency. ``sortBy`` does not apply to search."""
    if q is None or not q.strip():
        raise MissingQueryError()
    return _paged(
        text_filter(q.strip()),
        list(SEARCH_SORT),
        page,
        limit,
        max_limit,
        projection={"score": TEXT_SCORE},
    )


def paginate(total: int, page: int, limit: int) -> Pagination:
    total_pages = -(-total // limit)
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_blogs=total,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def run_query(repository, query: BlogQuery) -> Tuple[List[dict], Pagination]:
    blogs = repository.find(
        query.filter,
        sort=query.sort,
        skip=query.skip,
        limit=query.limit,
        projection=query.projection,
    )
    total = repository.count(query.filter)
    return blogs, paginate(total, query.page, query.limit)


def get_blog(repository, blog_id) -> dict:
    blog = repository.find_one({"_id": blog_id, **PUBLISHED})
    if blog is None:
        raise NotFoundError("Blog not found or not published")
    return blog
