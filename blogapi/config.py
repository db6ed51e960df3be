import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


MONGO_URI = os.getenv("DATABASE_URL")
DB_NAME = os.getenv("MONGO_DB_NAME")

# Hard ceiling on page size, requests above it are clamped
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))

# When false, blogs are always stored unpublished regardless of the payload
ALLOW_PUBLISH_ON_CREATE = _env_bool("ALLOW_PUBLISH_ON_CREATE", True)

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")
