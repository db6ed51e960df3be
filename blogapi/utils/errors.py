"""Error hierarchy for the blogs API.

Every error knows its HTTP status and renders the response envelope
``{"success": false, "message": ..., "error": ...}``. Checks owned by the
core (validation, missing records, forbidden transitions) raise the typed
errors directly; anything else is turned into ``PersistenceError`` by
``operation_boundary``.
"""

import logging
from contextlib import contextmanager
from typing import Optional

logger = logging.getLogger(__name__)


class BlogError(Exception):
    """Base exception for all blogs API errors."""

    http_status = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_response(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.error:
            body["error"] = self.error
        return body


class ValidationError(BlogError):
    """Required input missing or malformed."""

    http_status = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_response(self) -> dict:
        body = super().to_response()
        if self.field:
            body["field"] = self.field
        return body


class MissingQueryError(ValidationError):
    def __init__(self, message: str = "Search query is required"):
        super().__init__(message, field="q")


class InvalidIdError(ValidationError):
    def __init__(self, message: str = "Invalid blog ID"):
        super().__init__(message, field="id")


class InvalidActionError(BlogError):
    http_status = 400

    def __init__(self, message: str = 'Action must be either "like" or "unlike"'):
        super().__init__(message)


class NotFoundError(BlogError):
    http_status = 404


class ForbiddenError(BlogError):
    http_status = 403


class PersistenceError(BlogError):
    """Storage failure or unexpected exception inside an operation."""

    http_status = 500


@contextmanager
def operation_boundary(message: str):
    """Report any non-domain failure raised inside the block as a PersistenceError.

    ``message`` is the generic, operation-specific text shown to the client;
    the underlying exception's description goes into ``error``.
    """
    try:
        yield
    except BlogError:
        raise
    except Exception as exc:
        logger.error("%s: %s", message, exc, exc_info=True)
        raise PersistenceError(message, str(exc)) from exc
