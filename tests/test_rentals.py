import pytest
from bson import ObjectId


def _rental(name, **extra):
    body = {
        "name": name,
        "brand": "Toyota",
        "model": "Corolla",
        "engine": "1.8L",
        "fuel": "Petrol",
        "topSpeed": "180 km/h",
        "color": "White",
        "availableDate": "2025-06-01",
        "pricePerDay": 50,
    }
    body.update(extra)
    return body


@pytest.fixture
def fleet(client, admin_headers):
    out = {}
    for body in (
        _rental("Corolla Daily", pricePerDay=40),
        _rental("Civic Weekender", brand="Honda", model="Civic", pricePerDay=55, description="Sporty compact"),
        _rental("Model 3", brand="Tesla", model="Model 3", fuel="Electric", pricePerDay=120),
    ):
        r = client.post("/api/rentals", json=body, headers=admin_headers)
        assert r.status_code == 201, r.text
        out[body["name"]] = r.json()["data"]
    return out


def _names(r):
    assert r.status_code == 200, r.text
    return [x["name"] for x in r.json()["data"]]


def test_create_rental(fleet):
    corolla = fleet["Corolla Daily"]
    assert corolla["availableDate"] == "2025-06-01T00:00:00.000Z"
    assert corolla["dailyRate"] == corolla["pricePerDay"] == 40


def test_create_requires_fields(client, admin_headers):
    r = client.post("/api/rentals", json={"name": "Nope"}, headers=admin_headers)
    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert {"brand", "engine", "availableDate", "pricePerDay"} <= fields


def test_list_and_filters(client, fleet):
    assert sorted(_names(client.get("/api/rentals"))) == ["Civic Weekender", "Corolla Daily", "Model 3"]
    assert _names(client.get("/api/rentals", params={"brand": "Honda"})) == ["Civic Weekender"]
    assert _names(client.get("/api/rentals", params={"search": "sporty"})) == ["Civic Weekender"]
    assert sorted(_names(client.get("/api/rentals", params={"minPrice": 50}))) == ["Civic Weekender", "Model 3"]
    assert _names(client.get("/api/rentals", params={"maxPrice": 45})) == ["Corolla Daily"]


def test_sort_and_order(client, fleet):
    r = client.get("/api/rentals", params={"sort": "pricePerDay", "order": "asc"})
    assert _names(r) == ["Corolla Daily", "Civic Weekender", "Model 3"]
    r = client.get("/api/rentals", params={"sort": "pricePerDay"})
    assert _names(r) == ["Model 3", "Civic Weekender", "Corolla Daily"]


def test_unknown_sort_field_falls_back(client, fleet):
    r = client.get("/api/rentals", params={"sort": "$where"})
    assert len(_names(r)) == 3


def test_paging(client, fleet):
    body = client.get("/api/rentals", params={"limit": 2, "page": 2}).json()
    assert body["count"] == 1
    assert body["total"] == 3
    assert body["totalPages"] == 2
    assert body["currentPage"] == 2


def test_get_update_delete(client, fleet, admin_headers):
    rid = fleet["Model 3"]["_id"]
    assert client.get(f"/api/rentals/{rid}").json()["data"]["name"] == "Model 3"

    r = client.put(f"/api/rentals/{rid}", json={"pricePerDay": 99.5}, headers=admin_headers)
    assert r.json()["message"] == "Rental updated successfully"
    assert r.json()["data"]["dailyRate"] == 99.5

    r = client.delete(f"/api/rentals/{rid}", headers=admin_headers)
    assert r.json()["message"] == "Rental deleted successfully"
    r = client.get(f"/api/rentals/{rid}")
    assert r.status_code == 404
    assert r.json()["message"] == "Rental not found"


def test_update_unknown(client, admin_headers):
    r = client.put(f"/api/rentals/{ObjectId()}", json={"pricePerDay": 1}, headers=admin_headers)
    assert r.status_code == 404


def test_stats(client, fleet, admin_headers):
    r = client.get("/api/rentals/stats/overview", headers=admin_headers)
    assert r.status_code == 200
    stats = r.json()["data"]
    assert stats["overview"]["totalRentals"] == 3
    assert stats["overview"]["minPrice"] == 40
    assert stats["overview"]["maxPrice"] == 120
    assert stats["overview"]["averagePrice"] == pytest.approx(215 / 3)
    assert len(stats["brandStats"]) == 3
    assert sum(m["count"] for m in stats["monthlyStats"]) == 3


def test_stats_empty(client, admin_headers):
    stats = client.get("/api/rentals/stats/overview", headers=admin_headers).json()["data"]
    assert stats["overview"] == {"totalRentals": 0, "averagePrice": 0, "minPrice": 0, "maxPrice": 0}
    assert stats["brandStats"] == []
    assert stats["monthlyStats"] == []
