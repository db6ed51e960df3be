"""Root conftest: shared test configuration."""

import os

# The connection module refuses to import without these
os.environ.setdefault("DATABASE_URL", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB_NAME", "blogs_test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from blogapi.blog.repository import get_repository  # noqa: E402
from blogapi.main import app  # noqa: E402
from fake_repository import FakeBlogRepository  # noqa: E402


@pytest.fixture
def repo():
    return FakeBlogRepository()


@pytest.fixture
def client(repo):
    """Test client with storage swapped for the in-memory repository."""
    app.dependency_overrides[get_repository] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()
