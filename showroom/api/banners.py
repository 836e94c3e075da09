from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from showroom.auth import require_admin
from showroom.catalog import banners as banner_store
from showroom.models import BannerCreate, BannerUpdate, ReorderRequest, StatusRequest
from showroom.util.documents import public_doc

from .deps import docs, get_db, ok


router = APIRouter(prefix="/banners", tags=["banners"])


@router.get("")
def list_banners(active: Optional[bool] = None, db: Database = Depends(get_db)) -> Dict[str, Any]:
    items = banner_store.list_banners(db, active=active)
    return ok(docs(items), count=len(items))


@router.patch("/reorder")
def reorder_banners(
    payload: ReorderRequest,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    result = banner_store.reorder_banners(db, payload.orderedIds)
    return ok(result, message="Banners reordered successfully")


@router.get("/{banner_id}")
def get_banner(banner_id: str, db: Database = Depends(get_db)) -> Dict[str, Any]:
    return ok(public_doc(banner_store.get_banner(db, banner_id)))


@router.post("", status_code=201)
def create_banner(
    payload: BannerCreate,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = banner_store.create_banner(db, payload)
    return ok(public_doc(doc), message="Banner created successfully")


@router.put("/{banner_id}")
def update_banner(
    banner_id: str,
    payload: BannerUpdate,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = banner_store.update_banner(db, banner_id, payload)
    return ok(public_doc(doc), message="Banner updated successfully")


@router.delete("/{banner_id}")
def delete_banner(
    banner_id: str,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    banner_store.delete_banner(db, banner_id)
    return ok(message="Banner deleted successfully")


@router.patch("/{banner_id}/status")
def update_banner_status(
    banner_id: str,
    payload: StatusRequest,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = banner_store.set_banner_status(db, banner_id, payload.isActive)
    verb = "activated" if payload.isActive else "deactivated"
    return ok(public_doc(doc), message=f"Banner {verb} successfully")
