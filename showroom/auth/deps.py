from __future__ import annotations

from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from showroom.errors import Forbidden, ServerError, Unauthenticated

from .crud import get_user_by_id, public_user
from .security import decode_access_token, token_matches_user


_bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> Unauthenticated:
    return Unauthenticated(detail)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Dict[str, Any]:
    """Authenticate a request from its `Authorization: Bearer <jwt>` header.

    The resolved (public) user is what downstream handlers receive; there is no
    refresh or revocation, token expiry is the only cutoff.
    """

    cfg = getattr(request.app.state, "cfg", None)
    db = getattr(request.app.state, "db", None)
    if cfg is None or db is None:
        raise ServerError("server_context_missing")

    token: str | None = None
    if credentials is not None and credentials.credentials:
        token = credentials.credentials

    if not token:
        raise _unauthorized("Not authorized, no token")

    try:
        payload = decode_access_token(token=token, secret=cfg.AUTH_JWT_SECRET)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Not authorized, token expired")
    except jwt.InvalidTokenError:
        raise _unauthorized("Not authorized, token invalid")

    sub = payload.get("sub")
    if not sub:
        raise _unauthorized("Not authorized, token invalid")

    doc = get_user_by_id(db, sub)
    if doc is None:
        raise _unauthorized("Not authorized, user not found")
    if not doc.get("isActive", True):
        raise _unauthorized("Not authorized, user inactive")
    if not token_matches_user(payload, doc):
        raise _unauthorized("Not authorized, token invalid")

    return public_user(doc)


def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if user.get("role") != "admin":
        raise Forbidden("Admin access required")
    return user
