import logging

from pymongo import ASCENDING, DESCENDING, TEXT, MongoClient

from blogapi.config import DB_NAME, MONGO_URI

logger = logging.getLogger(__name__)

if not MONGO_URI or not DB_NAME:
    raise Exception("Set DATABASE_URL and MONGO_DB_NAME in your .env")

# Create single global client (reuse)
client = MongoClient(MONGO_URI)
db = client[DB_NAME]

BLOG_TEXT_INDEX = "heading_text_body_text"


# FastAPI dependency (simple)
def get_db():
    return db


def ensure_indexes(database=None):
    """Create the indexes the blog queries rely on. Idempotent."""
    database = database if database is not None else db
    blogs = database.blogs
    blogs.create_index([("heading", TEXT), ("body", TEXT)], name=BLOG_TEXT_INDEX)
    blogs.create_index([("is_published", ASCENDING), ("created_at", DESCENDING)])
    blogs.create_index([("is_published", ASCENDING), ("upvotes", DESCENDING)])
    blogs.create_index([("tags", ASCENDING)])
    logger.info("Blog indexes ensured on %s.blogs", database.name)
