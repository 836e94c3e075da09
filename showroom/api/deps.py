from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from fastapi import Request
from pymongo.database import Database

from showroom.config import Config
from showroom.errors import ServerError
from showroom.util.documents import public_doc


def get_cfg(request: Request) -> Config:
    cfg = getattr(request.app.state, "cfg", None)
    if cfg is None:
        raise ServerError("server_config_missing")
    return cfg


def get_db(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise ServerError("database_not_connected")
    return db


def ok(data: Any = None, *, message: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """Success envelope: {success: true, message?, data?, ...extra}."""
    body: Dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    body.update(extra)
    if data is not None:
        body["data"] = data
    return body


def docs(items: Iterable[Dict[str, Any]]) -> list:
    return [public_doc(d) for d in items]
