"""Mutation engine: create validation and the like/unlike counter.

Invariants:
    - Validation happens before anything is written
    - body >= 50 and heading <= 100 after trimming
    - upvotes never drops below zero; unlike at zero is a no-op
    - Only published blogs can be liked
"""

import pytest
from bson import ObjectId

from blogapi.blog import mutations
from blogapi.models.schemas import BlogCreate
from blogapi.utils.errors import (
    ForbiddenError,
    InvalidActionError,
    NotFoundError,
    ValidationError,
)


def _payload(**overrides):
    fields = {"heading": "T", "author": "A", "body": "x" * 60}
    fields.update(overrides)
    return BlogCreate(**fields)


class TestCreate:
    def test_defaults(self, repo):
        doc = mutations.create_blog(repo, _payload())
        assert doc["upvotes"] == 0
        assert doc["tags"] == []
        assert doc["is_published"] is False
        assert doc["created_at"] == doc["updated_at"]
        assert isinstance(doc["_id"], ObjectId)
        assert len(repo.docs) == 1

    def test_trims_fields_and_tags(self, repo):
        doc = mutations.create_blog(
            repo, _payload(heading="  T  ", author=" A ", body="  " + "y" * 50 + "  ",
                           tags=[" go ", "", "  ", "web"]),
        )
        assert doc["heading"] == "T"
        assert doc["author"] == "A"
        assert doc["body"] == "y" * 50
        assert doc["tags"] == ["go", "web"]

    def test_body_of_49_chars_is_rejected(self, repo):
        with pytest.raises(ValidationError) as exc:
            mutations.create_blog(repo, _payload(body="x" * 49))
        assert exc.value.field == "body"
        assert repo.docs == []

    def test_body_of_50_chars_is_accepted(self, repo):
        doc = mutations.create_blog(repo, _payload(body="x" * 50))
        assert len(doc["body"]) == 50

    def test_body_length_counts_after_trim(self, repo):
        with pytest.raises(ValidationError):
            mutations.create_blog(repo, _payload(body=" " * 10 + "x" * 45))

    @pytest.mark.parametrize("field", ["heading", "author", "body"])
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_required_fields(self, repo, field, value):
        with pytest.raises(ValidationError) as exc:
            mutations.create_blog(repo, _payload(**{field: value}))
        assert exc.value.field == field
        assert repo.docs == []

    def test_heading_over_100_chars_is_rejected(self, repo):
        with pytest.raises(ValidationError) as exc:
            mutations.create_blog(repo, _payload(heading="h" * 101))
        assert exc.value.field == "heading"
        mutations.create_blog(repo, _payload(heading="h" * 100))

    def test_publish_on_create(self, repo):
        assert mutations.create_blog(repo, _payload(is_published=True))["is_published"] is True

    def test_publish_on_create_disabled(self, repo):
        doc = mutations.create_blog(repo, _payload(is_published=True), allow_publish=False)
        assert doc["is_published"] is False


class TestLikes:
    def test_like_then_unlike_restores_count(self, repo):
        blog = repo.add(upvotes=7)
        _, up = mutations.set_like_action(repo, blog["_id"], "like")
        assert up == 8
        _, up = mutations.set_like_action(repo, blog["_id"], "unlike")
        assert up == 7

    def test_unlike_at_zero_is_a_noop(self, repo):
        blog = repo.add(upvotes=0)
        blog_id, up = mutations.set_like_action(repo, blog["_id"], "unlike")
        assert blog_id == blog["_id"]
        assert up == 0
        assert repo.get(blog["_id"])["upvotes"] == 0

    def test_like_refreshes_updated_at_only(self, repo):
        blog = repo.add()
        created = blog["created_at"]
        mutations.set_like_action(repo, blog["_id"], "like")
        stored = repo.get(blog["_id"])
        assert stored["created_at"] == created
        assert stored["updated_at"] > created

    @pytest.mark.parametrize("action", [None, "", "LIKE", "upvote", "likes"])
    def test_invalid_action(self, repo, action):
        blog = repo.add(upvotes=3)
        with pytest.raises(InvalidActionError):
            mutations.set_like_action(repo, blog["_id"], action)
        assert repo.get(blog["_id"])["upvotes"] == 3

    def test_missing_blog(self, repo):
        with pytest.raises(NotFoundError):
            mutations.set_like_action(repo, ObjectId(), "like")

    def test_unpublished_blog_cannot_be_liked(self, repo):
        blog = repo.add(is_published=False, upvotes=2)
        with pytest.raises(ForbiddenError):
            mutations.set_like_action(repo, blog["_id"], "like")
        assert repo.get(blog["_id"])["upvotes"] == 2
