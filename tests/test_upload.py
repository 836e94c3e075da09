from pathlib import Path

import pytest

from showroom.errors import ValidationError
from showroom.uploads import storage

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _png(name="photo.png", data=PNG, ctype="image/png"):
    return (name, data, ctype)


def test_help_is_public(client):
    r = client.get("/api/upload")
    assert r.status_code == 200
    assert r.json()["message"] == "Upload API is working"


def test_single_upload_and_serve(client, cfg, admin_headers):
    r = client.post("/api/upload/single", params={"type": "brands"}, files={"image": _png()}, headers=admin_headers)
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["filename"].startswith("brand-")
    assert data["filename"].endswith(".png")
    assert data["originalName"] == "photo.png"
    assert data["url"] == f"/uploads/brands/{data['filename']}"
    assert data["size"] == len(PNG)
    assert (Path(cfg.UPLOAD_DIR) / "brands" / data["filename"]).read_bytes() == PNG

    served = client.get(data["url"])
    assert served.status_code == 200
    assert served.content == PNG


def test_single_defaults_to_cars(client, admin_headers):
    r = client.post("/api/upload/single", files={"image": _png()}, headers=admin_headers)
    assert r.json()["data"]["type"] == "cars"


def test_single_requires_admin(client):
    r = client.post("/api/upload/single", files={"image": _png()})
    assert r.status_code == 401


def test_single_without_file(client, admin_headers):
    r = client.post("/api/upload/single", data={"other": "x"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "No file uploaded"


def test_rejects_non_image(client, admin_headers):
    r = client.post(
        "/api/upload/single",
        files={"image": ("notes.txt", b"hello", "text/plain")},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Only image files are allowed!"


def test_rejects_oversize(client, cfg, admin_headers):
    big = b"\x00" * (cfg.UPLOAD_MAX_BYTES + 1)
    r = client.post("/api/upload/single", files={"image": _png(data=big)}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "File too large. Maximum size is 4KB"


def test_rejects_unknown_type(client, admin_headers):
    r = client.post("/api/upload/single", params={"type": "users"}, files={"image": _png()}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "type"


def test_multiple_upload(client, admin_headers):
    files = [("images", _png("a.png")), ("images", _png("b.jpg", ctype="image/jpeg"))]
    r = client.post("/api/upload/multiple", params={"type": "cars"}, files=files, headers=admin_headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "2 images uploaded successfully"
    assert body["type"] == "cars"
    assert [x["originalName"] for x in body["data"]] == ["a.png", "b.jpg"]


def test_multiple_is_all_or_nothing(client, cfg, admin_headers):
    files = [("images", _png("a.png")), ("images", ("b.txt", b"nope", "text/plain"))]
    r = client.post("/api/upload/multiple", files=files, headers=admin_headers)
    assert r.status_code == 400
    assert list((Path(cfg.UPLOAD_DIR) / "cars").iterdir()) == []


def test_multiple_limits_file_count(client, cfg, admin_headers):
    files = [("images", _png(f"{i}.png")) for i in range(cfg.UPLOAD_MAX_FILES + 1)]
    r = client.post("/api/upload/multiple", files=files, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == f"Too many files. Maximum is {cfg.UPLOAD_MAX_FILES}"


def test_multiple_without_files(client, admin_headers):
    r = client.post("/api/upload/multiple", data={"other": "x"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "No files uploaded"


def test_info_and_delete(client, admin_headers):
    name = client.post(
        "/api/upload/single", params={"type": "banners"}, files={"image": _png()}, headers=admin_headers
    ).json()["data"]["filename"]

    r = client.get(f"/api/upload/info/banners/{name}")
    assert r.status_code == 200
    info = r.json()["data"]
    assert info["size"] == len(PNG)
    assert info["url"] == f"/uploads/banners/{name}"
    assert info["modifiedAt"].endswith("Z")

    r = client.delete(f"/api/upload/banners/{name}", headers=admin_headers)
    assert r.json()["message"] == "File deleted successfully"

    r = client.get(f"/api/upload/info/banners/{name}")
    assert r.status_code == 404
    assert r.json()["message"] == "File not found"


def test_legacy_routes_use_cars_dir(client, admin_headers):
    name = client.post("/api/upload/single", files={"image": _png()}, headers=admin_headers).json()["data"]["filename"]
    assert client.get(f"/api/upload/info/{name}").status_code == 200

    r = client.delete(f"/api/upload/{name}", headers=admin_headers)
    assert r.json()["message"] == "Image deleted successfully"
    assert client.delete(f"/api/upload/{name}", headers=admin_headers).status_code == 404


def test_delete_requires_admin(client):
    assert client.delete("/api/upload/cars/whatever.png").status_code == 401


@pytest.mark.parametrize("bad", ["..", "", "a\\b", "a\x00b"])
def test_filename_guard(tmp_path, bad):
    with pytest.raises(ValidationError):
        storage.image_info(tmp_path, "cars", bad)


def test_make_filename_keeps_extension():
    name = storage.make_filename("banners", "Hero Shot.JPG")
    assert name.startswith("banner-")
    assert name.endswith(".jpg")
