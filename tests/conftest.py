from __future__ import annotations

from typing import Any, Dict

import mongomock
import pytest
from fastapi.testclient import TestClient

from showroom.api.server import create_app
from showroom.config import Config


ADMIN_EMAIL = "admin@showroom.test"
ADMIN_PASSWORD = "admin-pass-123"
JWT_SECRET = "test-secret"


def car_payload(**overrides: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "name": "Toyota Camry 2024",
        "brand": "Toyota",
        "model": "Camry",
        "year": 2024,
        "price": 25000,
        "description": "Midsize sedan.",
        "images": ["/uploads/cars/car-1.jpg"],
        "specifications": {
            "engine": "2.5L 4-Cylinder",
            "fuelType": "Petrol",
            "transmission": "Automatic",
            "seating": 5,
            "fuelEconomy": "28/39 mpg",
            "color": "Silver",
        },
        "features": ["Apple CarPlay"],
        "category": "Sedan",
    }
    body.update(overrides)
    return body


def brand_payload(name: str, **overrides: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"name": name, "logo": f"/uploads/brands/{name.lower()}.png"}
    body.update(overrides)
    return body


@pytest.fixture
def cfg(tmp_path) -> Config:
    return Config(
        MONGODB_DB="showroom_test",
        API_PREFIX="/api",
        APP_ENV="test",
        AUTH_JWT_SECRET=JWT_SECRET,
        AUTH_TOKEN_EXPIRE_MINUTES=60,
        BOOTSTRAP_ADMIN=True,
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        ADMIN_NAME="Test Admin",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        UPLOAD_MAX_BYTES=4096,
        UPLOAD_MAX_FILES=3,
        CORS_ALLOW_ORIGINS="",
    )


@pytest.fixture
def db():
    return mongomock.MongoClient()["showroom_test"]


@pytest.fixture
def app(cfg, db):
    return create_app(cfg, db=db)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers(client) -> Dict[str, str]:
    r = client.post("/api/auth/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def make_brand(client, admin_headers):
    def _make(name: str, **overrides: Any) -> Dict[str, Any]:
        r = client.post("/api/brands", json=brand_payload(name, **overrides), headers=admin_headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture
def make_car(client, admin_headers):
    def _make(**overrides: Any) -> Dict[str, Any]:
        r = client.post("/api/cars", json=car_payload(**overrides), headers=admin_headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture
def brand_count(client):
    def _count(brand_id: str) -> int:
        # The stored (cached) counter, not the live count returned by GET /brands/:id.
        r = client.get("/api/brands")
        for b in r.json()["data"]:
            if b["_id"] == brand_id:
                return b["carCount"]
        raise AssertionError(f"brand {brand_id} not listed")

    return _count
