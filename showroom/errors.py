"""Error taxonomy shared by the catalog layer and the HTTP surface.

Catalog functions raise these; `showroom.api.server` turns them into the
`{success: false, message, errors?}` envelope with the matching status code.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ShowroomError(Exception):
    status_code: int = 500
    default_message: str = "Server error"

    def __init__(
        self,
        message: str | None = None,
        *,
        errors: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.errors = errors
        self.headers = headers
        super().__init__(self.message)


class ValidationError(ShowroomError):
    status_code = 400
    default_message = "Validation errors"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message}])


class Unauthenticated(ShowroomError):
    status_code = 401
    default_message = "Not authorized"

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class Forbidden(ShowroomError):
    status_code = 403
    default_message = "Admin access required"


class NotFound(ShowroomError):
    status_code = 404
    default_message = "Not found"


class Conflict(ShowroomError):
    status_code = 409
    default_message = "Conflict"


class ServerError(ShowroomError):
    status_code = 500
