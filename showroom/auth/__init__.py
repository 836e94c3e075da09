"""Authentication / authorization helpers.

Auth is intentionally lightweight:

- A `users` collection (email/password hash + role + isActive)
- JWT access tokens presented as `Authorization: Bearer <token>`

Public catalog reads never require a token; every write goes through
`require_admin`.
"""

from .deps import get_current_user, require_admin
from .crud import bootstrap_admin_if_needed, create_user

__all__ = [
    "get_current_user",
    "require_admin",
    "bootstrap_admin_if_needed",
    "create_user",
]
