from bson import ObjectId


def _banner(title, **extra):
    body = {"title": title, "image": f"/uploads/banners/{title.lower()}.jpg"}
    body.update(extra)
    return body


def test_create_applies_defaults(client, admin_headers):
    r = client.post("/api/banners", json=_banner("Summer"), headers=admin_headers)
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Banner created successfully"
    data = body["data"]
    assert data["buttonText"] == "Learn More"
    assert data["buttonLink"] == "/cars"
    assert data["isActive"] is True
    assert data["order"] == 0
    assert data["createdAt"].endswith("Z")


def test_create_requires_admin(client):
    r = client.post("/api/banners", json=_banner("Summer"))
    assert r.status_code == 401


def test_create_validation(client, admin_headers):
    r = client.post("/api/banners", json={"title": "x" * 101}, headers=admin_headers)
    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert {"title", "image"} <= fields


def test_list_sorted_by_order_then_newest(client, admin_headers):
    client.post("/api/banners", json=_banner("Late", order=2), headers=admin_headers)
    client.post("/api/banners", json=_banner("First", order=0), headers=admin_headers)
    client.post("/api/banners", json=_banner("Hidden", order=1, isActive=False), headers=admin_headers)

    r = client.get("/api/banners")
    assert r.status_code == 200
    assert [b["title"] for b in r.json()["data"]] == ["First", "Hidden", "Late"]
    assert r.json()["count"] == 3

    active = client.get("/api/banners", params={"active": "true"}).json()["data"]
    assert [b["title"] for b in active] == ["First", "Late"]


def test_get_update_delete(client, admin_headers):
    bid = client.post("/api/banners", json=_banner("Promo"), headers=admin_headers).json()["data"]["_id"]

    assert client.get(f"/api/banners/{bid}").json()["data"]["title"] == "Promo"

    r = client.put(f"/api/banners/{bid}", json={"subtitle": "Limited time"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["data"]["subtitle"] == "Limited time"
    assert r.json()["data"]["title"] == "Promo"

    r = client.delete(f"/api/banners/{bid}", headers=admin_headers)
    assert r.json() == {"success": True, "message": "Banner deleted successfully"}
    assert client.get(f"/api/banners/{bid}").status_code == 404


def test_missing_and_malformed_ids(client, admin_headers):
    r = client.get(f"/api/banners/{ObjectId()}")
    assert r.status_code == 404
    assert r.json()["message"] == "Banner not found"
    assert client.get("/api/banners/not-an-id").status_code == 404
    assert client.delete(f"/api/banners/{ObjectId()}", headers=admin_headers).status_code == 404


def test_status_toggle(client, admin_headers):
    bid = client.post("/api/banners", json=_banner("Promo"), headers=admin_headers).json()["data"]["_id"]

    r = client.patch(f"/api/banners/{bid}/status", json={"isActive": False}, headers=admin_headers)
    assert r.json()["message"] == "Banner deactivated successfully"
    assert r.json()["data"]["isActive"] is False

    r = client.patch(f"/api/banners/{bid}/status", json={"isActive": True}, headers=admin_headers)
    assert r.json()["message"] == "Banner activated successfully"


def test_reorder(client, admin_headers):
    ids = [
        client.post("/api/banners", json=_banner(t), headers=admin_headers).json()["data"]["_id"]
        for t in ("A", "B", "C")
    ]
    gone = str(ObjectId())
    r = client.patch(
        "/api/banners/reorder",
        json={"orderedIds": [ids[2], ids[0], gone, ids[1]]},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["data"] == {"updated": 3, "missing": [gone]}

    titles = [b["title"] for b in client.get("/api/banners").json()["data"]]
    assert titles == ["C", "A", "B"]


def test_reorder_rejects_bad_ids(client, admin_headers):
    bid = client.post("/api/banners", json=_banner("A"), headers=admin_headers).json()["data"]["_id"]
    r = client.patch("/api/banners/reorder", json={"orderedIds": [bid, "nope", bid]}, headers=admin_headers)
    assert r.status_code == 400
    assert [e["field"] for e in r.json()["errors"]] == ["orderedIds[1]", "orderedIds[2]"]
