from bson import ObjectId

from conftest import brand_payload


def test_create_brand(client, admin_headers):
    r = client.post("/api/brands", json=brand_payload("Toyota", country="Japan", foundedYear=1937), headers=admin_headers)
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["name"] == "Toyota"
    assert data["carCount"] == 0
    assert data["isActive"] is True


def test_duplicate_name_is_case_insensitive(client, make_brand, admin_headers):
    make_brand("Toyota")
    r = client.post("/api/brands", json=brand_payload("toyota"), headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["message"] == "Brand with this name already exists"


def test_founded_year_bounds(client, admin_headers):
    r = client.post("/api/brands", json=brand_payload("Old", foundedYear=1700), headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "foundedYear"
    r = client.post("/api/brands", json=brand_payload("Future", foundedYear=3000), headers=admin_headers)
    assert r.status_code == 400


def test_list_filters_and_sort(client, make_brand, admin_headers):
    make_brand("Toyota", order=2, description="Reliable cars")
    make_brand("BMW", order=1)
    b = make_brand("Audi", order=1)
    client.patch(f"/api/brands/{b['_id']}/status", json={"isActive": False}, headers=admin_headers)

    names = [x["name"] for x in client.get("/api/brands").json()["data"]]
    assert names == ["Audi", "BMW", "Toyota"]

    active = [x["name"] for x in client.get("/api/brands", params={"active": "true"}).json()["data"]]
    assert active == ["BMW", "Toyota"]

    found = client.get("/api/brands", params={"search": "reliable"}).json()["data"]
    assert [x["name"] for x in found] == ["Toyota"]


def test_get_by_id_and_name(client, make_brand, make_car):
    brand = make_brand("Toyota")
    make_car(name="Camry")
    make_car(name="Corolla")

    r = client.get(f"/api/brands/{brand['_id']}")
    assert r.status_code == 200
    assert r.json()["data"]["carCount"] == 2

    r = client.get("/api/brands/name/TOYOTA")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["name"] == "Toyota"
    assert {c["name"] for c in data["cars"]} == {"Camry", "Corolla"}


def test_get_unknown(client):
    assert client.get(f"/api/brands/{ObjectId()}").json()["message"] == "Brand not found"
    assert client.get("/api/brands/name/Nope").status_code == 404


def test_rename_cascades_to_cars(client, make_brand, make_car, admin_headers, brand_count):
    brand = make_brand("Toyota")
    car = make_car()

    r = client.put(f"/api/brands/{brand['_id']}", json={"name": "Toyota Motors"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Toyota Motors"

    assert client.get(f"/api/cars/{car['_id']}").json()["data"]["brand"] == "Toyota Motors"
    assert brand_count(brand["_id"]) == 1


def test_rename_to_taken_name(client, make_brand, admin_headers):
    make_brand("Toyota")
    honda = make_brand("Honda")
    r = client.put(f"/api/brands/{honda['_id']}", json={"name": "TOYOTA"}, headers=admin_headers)
    assert r.status_code == 409


def test_update_keeps_own_name(client, make_brand, admin_headers):
    brand = make_brand("Toyota")
    r = client.put(f"/api/brands/{brand['_id']}", json={"name": "Toyota", "country": "Japan"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["data"]["country"] == "Japan"


def test_delete_blocked_while_cars_reference_it(client, make_brand, make_car, admin_headers):
    brand = make_brand("Toyota")
    car = make_car()

    r = client.delete(f"/api/brands/{brand['_id']}", headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["message"] == "Cannot delete brand. 1 cars are associated with this brand."

    client.delete(f"/api/cars/{car['_id']}", headers=admin_headers)
    r = client.delete(f"/api/brands/{brand['_id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Brand deleted successfully"


def test_status_toggle(client, make_brand, admin_headers):
    brand = make_brand("Toyota")
    r = client.patch(f"/api/brands/{brand['_id']}/status", json={"isActive": False}, headers=admin_headers)
    assert r.json()["message"] == "Brand deactivated successfully"
    assert r.json()["data"]["isActive"] is False


def test_update_car_count_repairs_drift(client, db, make_brand, make_car, admin_headers, brand_count):
    brand = make_brand("Toyota")
    make_car()
    make_car()
    db["brands"].update_one({"_id": ObjectId(brand["_id"])}, {"$set": {"carCount": 17}})

    r = client.patch(f"/api/brands/{brand['_id']}/update-car-count", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Car count updated successfully"
    assert r.json()["data"]["carCount"] == 2
    assert brand_count(brand["_id"]) == 2
