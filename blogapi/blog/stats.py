from pymongo import ASCENDING, DESCENDING

from blogapi.blog.queries import published

# Ties go to the earliest created blog, then the lowest id
MOST_LIKED_SORT = [("upvotes", DESCENDING), ("created_at", ASCENDING), ("_id", ASCENDING)]
MOST_RECENT_SORT = [("created_at", DESCENDING), ("_id", ASCENDING)]


def blog_stats(repository) -> dict:
    """Point-in-time summary over published blogs."""
    criteria = published()
    return {
        "total_blogs": repository.count(criteria),
        "total_upvotes": repository.sum_field(criteria, "upvotes"),
        "most_liked_blog": repository.find_one(
            criteria, {"heading": 1, "upvotes": 1, "author": 1}, sort=MOST_LIKED_SORT,
        ),
        "recent_blog": repository.find_one(
            criteria, {"heading": 1, "created_at": 1, "author": 1}, sort=MOST_RECENT_SORT,
        ),
    }
