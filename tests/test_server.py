from fastapi.testclient import TestClient

from showroom.api.server import create_app
from showroom.catalog import cars as car_store


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "OK"
    assert body["message"] == "Car Showroom API is running"
    assert body["timestamp"].endswith("Z")


def test_root_lists_endpoints(client):
    body = client.get("/").json()
    assert body["success"] is True
    assert body["endpoints"]["cars"] == "/api/cars"


def test_unknown_route(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Route not found"}


def test_malformed_json_body(client, admin_headers):
    r = client.post(
        "/api/brands",
        content=b"{not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_unhandled_error_is_a_generic_500(cfg, db, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(car_store, "list_featured", boom)
    with TestClient(create_app(cfg, db=db), raise_server_exceptions=False) as c:
        r = c.get("/api/cars/featured/list")
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Server error"}


def test_development_500_includes_traceback(cfg, db, monkeypatch):
    from dataclasses import replace

    def boom(*args, **kwargs):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(car_store, "list_featured", boom)
    dev = replace(cfg, APP_ENV="development")
    with TestClient(create_app(dev, db=db), raise_server_exceptions=False) as c:
        r = c.get("/api/cars/featured/list")
    assert r.status_code == 500
    assert "kaboom" in r.json()["error"]


def test_custom_prefix(cfg, db):
    from dataclasses import replace

    with TestClient(create_app(replace(cfg, API_PREFIX="/v2"), db=db)) as c:
        assert c.get("/v2/health").status_code == 200
        assert c.get("/api/health").status_code == 404
