from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from showroom.auth import require_admin
from showroom.catalog import brands as brand_store
from showroom.models import BrandCreate, BrandUpdate, StatusRequest
from showroom.util.documents import public_doc

from .deps import docs, get_db, ok


router = APIRouter(prefix="/brands", tags=["brands"])


@router.get("")
def list_brands(
    active: Optional[bool] = None,
    search: Optional[str] = None,
    db: Database = Depends(get_db),
) -> Dict[str, Any]:
    items = brand_store.list_brands(db, active=active, search=search)
    return ok(docs(items), count=len(items))


@router.get("/name/{name}")
def get_brand_by_name(name: str, db: Database = Depends(get_db)) -> Dict[str, Any]:
    return ok(public_doc(brand_store.get_brand_by_name(db, name)))


@router.get("/{brand_id}")
def get_brand(brand_id: str, db: Database = Depends(get_db)) -> Dict[str, Any]:
    return ok(public_doc(brand_store.get_brand_with_live_count(db, brand_id)))


@router.post("", status_code=201)
def create_brand(
    payload: BrandCreate,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = brand_store.create_brand(db, payload)
    return ok(public_doc(doc), message="Brand created successfully")


@router.put("/{brand_id}")
def update_brand(
    brand_id: str,
    payload: BrandUpdate,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = brand_store.update_brand(db, brand_id, payload)
    return ok(public_doc(doc), message="Brand updated successfully")


@router.delete("/{brand_id}")
def delete_brand(
    brand_id: str,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    brand_store.delete_brand(db, brand_id)
    return ok(message="Brand deleted successfully")


@router.patch("/{brand_id}/status")
def update_brand_status(
    brand_id: str,
    payload: StatusRequest,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = brand_store.set_brand_status(db, brand_id, payload.isActive)
    verb = "activated" if payload.isActive else "deactivated"
    return ok(public_doc(doc), message=f"Brand {verb} successfully")


@router.patch("/{brand_id}/update-car-count")
def update_brand_car_count(
    brand_id: str,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = brand_store.recompute_car_count(db, brand_id)
    return ok(public_doc(doc), message="Car count updated successfully")
