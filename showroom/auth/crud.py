from __future__ import annotations

from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from showroom.config import Config
from showroom.errors import Conflict, ValidationError
from showroom.models import clean_email
from showroom.schema import USERS
from showroom.util.documents import public_doc, try_object_id
from showroom.util.time import utcnow

from .security import hash_password, verify_password


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def public_user(doc: Dict[str, Any]) -> Dict[str, Any]:
    d = dict(doc)
    d.pop("password", None)
    u = public_doc(d) or {}
    # Convenience flag used by the admin UI for gating.
    u["isAdmin"] = u.get("role") == "admin"
    return u


def get_user_by_email(db: Database, email: str) -> Optional[Dict[str, Any]]:
    e = normalize_email(email)
    if not e:
        return None
    return db[USERS].find_one({"email": e})


def get_user_by_id(db: Database, user_id: Any) -> Optional[Dict[str, Any]]:
    oid = try_object_id(user_id)
    if oid is None:
        return None
    return db[USERS].find_one({"_id": oid})


def verify_user_credentials(db: Database, email: str, password: str) -> Optional[Dict[str, Any]]:
    doc = get_user_by_email(db, email)
    if doc is None:
        return None
    if not doc.get("isActive", True):
        return None
    if not verify_password(password, str(doc.get("password") or "")):
        return None
    return doc


def create_user(
    db: Database,
    *,
    name: str,
    email: str,
    password: str,
    role: str = "user",
    is_active: bool = True,
) -> Dict[str, Any]:
    e = normalize_email(email)
    if not e:
        raise ValueError("email_blank")
    try:
        e = clean_email(e)
    except ValueError:
        raise ValueError("email_invalid")
    if role not in ("admin", "user"):
        raise ValueError("invalid_role")

    if db[USERS].find_one({"email": e}, {"_id": 1}) is not None:
        raise ValueError("email_exists")

    now = utcnow()
    doc = {
        "name": (name or "").strip() or e,
        "email": e,
        "password": hash_password(password),
        "role": role,
        "isActive": bool(is_active),
        "lastLoginAt": None,
        "createdAt": now,
        "updatedAt": now,
    }
    try:
        res = db[USERS].insert_one(doc)
    except DuplicateKeyError:
        raise ValueError("email_exists")
    doc["_id"] = res.inserted_id
    return public_user(doc)


def touch_last_login(db: Database, user_id: ObjectId) -> None:
    now = utcnow()
    db[USERS].update_one({"_id": user_id}, {"$set": {"lastLoginAt": now, "updatedAt": now}})


def update_profile(db: Database, user_id: ObjectId, *, name: str | None = None, email: str | None = None) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    if name is not None:
        fields["name"] = name.strip()
    if email is not None:
        try:
            e = clean_email(email)
        except ValueError as exc:
            raise ValidationError.for_field("email", str(exc))
        clash = db[USERS].find_one({"email": e, "_id": {"$ne": user_id}}, {"_id": 1})
        if clash is not None:
            raise Conflict("Email is already in use")
        fields["email"] = e

    if fields:
        fields["updatedAt"] = utcnow()
        db[USERS].update_one({"_id": user_id}, {"$set": fields})

    doc = db[USERS].find_one({"_id": user_id})
    assert doc is not None
    return public_user(doc)


def change_password(db: Database, user_id: ObjectId, *, current_password: str, new_password: str) -> None:
    doc = db[USERS].find_one({"_id": user_id})
    if doc is None or not verify_password(current_password, str(doc.get("password") or "")):
        raise ValidationError.for_field("currentPassword", "Current password is incorrect")
    db[USERS].update_one(
        {"_id": user_id},
        {"$set": {"password": hash_password(new_password), "updatedAt": utcnow()}},
    )


def bootstrap_admin_if_needed(db: Database, cfg: Config) -> Optional[Dict[str, Any]]:
    """Create the configured admin account if it doesn't exist yet.

    Controlled via environment variables so a fresh deployment has a deterministic way
    to log in to the admin panel.

    - ADMIN_EMAIL (default: admin@carshowroom.com)
    - ADMIN_PASSWORD
    - ADMIN_NAME

    Returns the created user, or None when nothing was created.
    """

    email = normalize_email(getattr(cfg, "ADMIN_EMAIL", "") or "")
    password = getattr(cfg, "ADMIN_PASSWORD", None) or ""

    # If env explicitly clears these, don't create anything.
    if not email or not password:
        return None

    if db[USERS].find_one({"email": email, "role": "admin"}, {"_id": 1}) is not None:
        return None

    try:
        return create_user(
            db,
            name=getattr(cfg, "ADMIN_NAME", "") or "Admin",
            email=email,
            password=password,
            role="admin",
        )
    except ValueError:
        # Email taken by a non-admin account; leave it alone.
        return None
