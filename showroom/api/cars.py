from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from showroom.auth import require_admin
from showroom.catalog import cars as car_store
from showroom.models import CarCreate, CarStatusRequest, CarUpdate
from showroom.util.documents import public_doc

from .deps import docs, get_db, ok


router = APIRouter(prefix="/cars", tags=["cars"])


@router.get("")
def list_cars(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    brand: Optional[str] = None,
    category: Optional[str] = None,
    minPrice: Optional[float] = Query(None, ge=0),
    maxPrice: Optional[float] = Query(None, ge=0),
    year: Optional[int] = None,
    fuelType: Optional[str] = None,
    transmission: Optional[str] = None,
    status: Optional[str] = None,
    featured: Optional[bool] = None,
    sort: str = Query("createdAt"),
    db: Database = Depends(get_db),
) -> Dict[str, Any]:
    items, meta = car_store.list_cars(
        db,
        page=page,
        limit=limit,
        sort=sort,
        search=search,
        brand=brand,
        category=category,
        min_price=minPrice,
        max_price=maxPrice,
        year=year,
        fuel_type=fuelType,
        transmission=transmission,
        status=status,
        featured=featured,
    )
    return ok(docs(items), **meta)


@router.get("/featured/list")
def list_featured_cars(
    limit: int = Query(6, ge=1, le=50),
    db: Database = Depends(get_db),
) -> Dict[str, Any]:
    items = car_store.list_featured(db, limit=limit)
    return ok(docs(items), count=len(items))


@router.get("/stats/overview")
def car_stats(
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    return ok(car_store.car_stats(db))


@router.get("/{car_id}")
def get_car(car_id: str, db: Database = Depends(get_db)) -> Dict[str, Any]:
    return ok(public_doc(car_store.view_car(db, car_id)))


@router.post("", status_code=201)
def create_car(
    payload: CarCreate,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = car_store.create_car(db, payload)
    return ok(public_doc(doc), message="Car created successfully")


@router.put("/{car_id}")
def update_car(
    car_id: str,
    payload: CarUpdate,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = car_store.update_car(db, car_id, payload)
    return ok(public_doc(doc), message="Car updated successfully")


@router.delete("/{car_id}")
def delete_car(
    car_id: str,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    car_store.delete_car(db, car_id)
    return ok(message="Car deleted successfully")


@router.patch("/{car_id}/status")
def update_car_status(
    car_id: str,
    payload: CarStatusRequest,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = car_store.set_car_status(db, car_id, payload.status)
    return ok(public_doc(doc), message=f"Car status updated to {payload.status}")


@router.patch("/{car_id}/featured")
def toggle_car_featured(
    car_id: str,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = car_store.toggle_featured(db, car_id)
    where = "added to" if doc.get("isFeatured") else "removed from"
    return ok(public_doc(doc), message=f"Car {where} featured list")
