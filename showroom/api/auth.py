from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from pymongo.database import Database

from showroom.auth import get_current_user
from showroom.auth.crud import (
    change_password,
    public_user,
    touch_last_login,
    update_profile,
    verify_user_credentials,
)
from showroom.auth.security import create_access_token
from showroom.config import Config
from showroom.errors import Unauthenticated
from showroom.models import ChangePasswordRequest, LoginRequest, ProfileUpdateRequest
from showroom.util.documents import parse_object_id

from .deps import get_cfg, get_db, ok


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/admin/login")
def admin_login(
    payload: LoginRequest,
    db: Database = Depends(get_db),
    cfg: Config = Depends(get_cfg),
) -> Dict[str, Any]:
    doc = verify_user_credentials(db, payload.email, payload.password)
    # Same answer for unknown email, wrong password, inactive and non-admin accounts.
    if doc is None or doc.get("role") != "admin":
        raise Unauthenticated("Invalid credentials")

    touch_last_login(db, doc["_id"])

    token = create_access_token(
        secret=cfg.AUTH_JWT_SECRET,
        user_id=str(doc["_id"]),
        email=str(doc["email"]),
        role=str(doc["role"]),
        expires_minutes=int(cfg.AUTH_TOKEN_EXPIRE_MINUTES),
    )
    return ok(message="Login successful", token=token, user=public_user(doc))


@router.get("/me")
def auth_me(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return ok(user=user)


@router.put("/profile")
def auth_update_profile(
    payload: ProfileUpdateRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> Dict[str, Any]:
    u = update_profile(
        db,
        parse_object_id(user["_id"], what="User"),
        name=payload.name,
        email=str(payload.email) if payload.email is not None else None,
    )
    return ok(message="Profile updated successfully", user=u)


@router.put("/change-password")
def auth_change_password(
    payload: ChangePasswordRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> Dict[str, Any]:
    change_password(
        db,
        parse_object_id(user["_id"], what="User"),
        current_password=payload.currentPassword,
        new_password=payload.newPassword,
    )
    return ok(message="Password changed successfully")
