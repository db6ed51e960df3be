"""Create a blog and move its upvote counter.

All checks run before anything is written. The counter is changed with an
atomic conditional ``$inc`` so it never drops below zero and concurrent
likes are not lost.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Tuple

from blogapi.blog.queries import PUBLISHED
from blogapi.models.schemas import BlogCreate
from blogapi.utils.errors import (
    ForbiddenError,
    InvalidActionError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MIN_BODY_LENGTH = 50
MAX_HEADING_LENGTH = 100


class LikeAction(str, Enum):
    LIKE = "like"
    UNLIKE = "unlike"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _required(value, field: str) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError("Heading, author, and body are required fields", field=field)
    return text


def _clean_tags(tags) -> list:
    return [t.strip() for t in tags or [] if t and t.strip()]


def create_blog(repository, payload: BlogCreate, allow_publish: bool = True) -> dict:
    heading = _required(payload.heading, "heading")
    author = _required(payload.author, "author")
    body = _required(payload.body, "body")

    if len(body) < MIN_BODY_LENGTH:
        raise ValidationError(
            f"Blog body must be at least {MIN_BODY_LENGTH} characters long", field="body"
        )
    if len(heading) > MAX_HEADING_LENGTH:
        raise ValidationError(
            f"Blog heading must be at most {MAX_HEADING_LENGTH} characters long", field="heading"
        )

    now = _utcnow()
    doc = {
        "heading": heading,
        "author": author,
        "body": body,
        "tags": _clean_tags(payload.tags),
        "upvotes": 0,
        "is_published": bool(payload.is_published) and allow_publish,
        "created_at": now,
        "updated_at": now,
    }
    saved = repository.save(doc)
    logger.info("Created blog %s", saved["_id"], extra={"blog_id": str(saved["_id"])})
    return saved


def set_like_action(repository, blog_id, action) -> Tuple[object, int]:
    """Apply ``like`` or ``unlike`` to a published blog and return (id, upvotes).

    ``unlike`` at zero upvotes is a no-op, not an error.
    """
    try:
        action = LikeAction(action)
    except ValueError:
        raise InvalidActionError()

    blog = repository.find_one({"_id": blog_id}, {"is_published": 1, "upvotes": 1})
    if blog is None:
        raise NotFoundError("Blog not found")
    if not blog.get("is_published"):
        raise ForbiddenError("Cannot like unpublished blog")

    criteria = {"_id": blog_id, **PUBLISHED}
    if action is LikeAction.LIKE:
        delta = 1
    else:
        delta = -1
        criteria["upvotes"] = {"$gt": 0}

    updated = repository.increment(
        criteria, "upvotes", delta,
        set_fields={"updated_at": _utcnow()},
        projection={"upvotes": 1},
    )
    if updated is None and action is LikeAction.UNLIKE:
        # Already at zero
        updated = repository.find_one({"_id": blog_id, **PUBLISHED}, {"upvotes": 1})
    if updated is None:
        raise NotFoundError("Blog not found")

    logger.info(
        "Blog %s %sd, upvotes=%s", blog_id, action.value, updated["upvotes"],
        extra={"blog_id": str(blog_id), "action": action.value},
    )
    return updated["_id"], updated["upvotes"]
