"""End-to-end requests through the Flask app: wizard catalog steps, booking, errors."""

import pytest

from booking_app import create_app
from booking_app.models.tables import BookingRow


def _book(client, vid, start="2031-06-01", end="2031-06-05", **overrides):
    body = {"firstName": "Ada", "lastName": "Lovelace", "vehicleId": vid, "startDate": start, "endDate": end}
    body.update(overrides)
    return client.post("/api/bookings", json=body)


def test_health(client):
    r = client.get("/api")
    assert r.status_code == 200
    assert r.get_json()["status"] == "OK"


def test_unknown_route(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.get_json() == {"success": False, "message": "Route not found"}


def test_wizard_catalog_steps(client, catalog):
    r = client.get("/api/vehicles/types?wheels=4")
    assert r.status_code == 200
    assert [t["name"] for t in r.get_json()["data"]] == ["Sedan"]

    r = client.get(f"/api/vehicles/type/{catalog['sedan']}")
    assert [v["name"] for v in r.get_json()["data"]] == ["Honda Accord", "Toyota Camry"]

    r = client.get(f"/api/vehicles/{catalog['camry']}")
    assert r.get_json()["data"]["vehicleType"]["name"] == "Sedan"

    r = client.get("/api/vehicles/types/all")
    assert {t["name"] for t in r.get_json()["data"]} == {"Sedan", "Cruiser"}


@pytest.mark.parametrize("url,status", [
    ("/api/vehicles/types?wheels=3", 400),
    ("/api/vehicles/types?wheels=abc", 400),
    ("/api/vehicles/type/abc", 400),
    ("/api/vehicles/abc", 400),
    ("/api/vehicles/9999", 404),
])
def test_catalog_bad_requests(client, catalog, url, status):
    r = client.get(url)
    assert r.status_code == status
    assert r.get_json()["success"] is False


def test_create_booking_flow(client, catalog):
    r = _book(client, catalog["camry"])
    assert r.status_code == 201
    body = r.get_json()
    assert body["success"] is True
    assert body["message"] == "Booking created successfully"
    data = body["data"]
    assert data["startDate"] == "2031-06-01T00:00:00Z"
    assert data["vehicle"]["vehicleType"]["name"] == "Sedan"

    r = client.get(f"/api/bookings/{data['id']}")
    assert r.status_code == 200
    assert r.get_json()["data"]["lastName"] == "Lovelace"

    r = client.get("/api/bookings")
    assert [b["id"] for b in r.get_json()["data"]] == [data["id"]]


def test_adjacent_ok_overlap_conflicts(client, catalog):
    vid = catalog["camry"]
    assert _book(client, vid).status_code == 201
    assert _book(client, vid, start="2031-06-05", end="2031-06-10").status_code == 201

    r = _book(client, vid, start="2031-06-04", end="2031-06-06")
    assert r.status_code == 409
    body = r.get_json()
    assert body["kind"] == "conflict"
    assert body["message"] == "Vehicle is not available for the selected dates"
    assert len(body["conflictingBookings"]) == 2


@pytest.mark.parametrize("overrides,status,kind", [
    ({"vehicleId": 9999}, 404, "not_found"),
    ({"vehicleId": 10**20}, 404, "not_found"),
    ({"startDate": "2031-06-10", "endDate": "2031-06-01"}, 400, "invalid_interval"),
    ({"startDate": "2001-01-01", "endDate": "2001-01-05"}, 400, "past_date"),
])
def test_core_errors_map_to_status(client, catalog, overrides, status, kind):
    r = _book(client, catalog["camry"], **overrides)
    assert r.status_code == status
    assert r.get_json()["kind"] == kind


@pytest.mark.parametrize("overrides,field", [
    ({"firstName": ""}, "firstName"),
    ({"firstName": "A"}, "firstName"),
    ({"lastName": "x" * 51}, "lastName"),
    ({"vehicleId": "abc"}, "vehicleId"),
    ({"vehicleId": 0}, "vehicleId"),
    ({"startDate": "not-a-date"}, "startDate"),
    ({"endDate": None}, "endDate"),
    ({"endDate": "9999-12-31T23:00:00-05:00"}, "endDate"),
])
def test_validation_errors(client, catalog, overrides, field):
    r = _book(client, catalog["camry"], **overrides)
    assert r.status_code == 400
    body = r.get_json()
    assert body["message"] == "Validation failed"
    assert field in [e["field"] for e in body["errors"]]


def test_non_json_body_rejected(client):
    r = client.post("/api/bookings", data="firstName=Ada")
    assert r.status_code == 400
    assert r.get_json()["message"] == "Validation failed"


def test_booking_not_found_and_bad_id(client, catalog):
    assert client.get("/api/bookings/777").status_code == 404
    assert client.get("/api/bookings/abc").status_code == 400


def test_availability_endpoint(client, catalog):
    vid = catalog["camry"]
    _book(client, vid)

    r = client.get(f"/api/bookings/availability/check?vehicleId={vid}&startDate=2031-06-04&endDate=2031-06-06")
    assert r.status_code == 200
    data = r.get_json()["data"]
    assert data["isAvailable"] is False
    assert len(data["conflictingBookings"]) == 1

    r = client.get(f"/api/bookings/availability/check?vehicleId={vid}&startDate=2031-06-05T00:00:00Z&endDate=2031-06-07")
    assert r.get_json()["data"]["isAvailable"] is True


@pytest.mark.parametrize("qs,status", [
    ("vehicleId=1&startDate=2031-06-01", 400),
    ("vehicleId=x&startDate=2031-06-01&endDate=2031-06-02", 400),
    ("vehicleId=1&startDate=junk&endDate=2031-06-02", 400),
    ("vehicleId=9999&startDate=2031-06-01&endDate=2031-06-02", 404),
    ("vehicleId=1&startDate=2031-06-05&endDate=2031-06-01", 400),
    ("vehicleId=1&startDate=2031-06-01&endDate=9999-12-31T23:00:00-05:00", 400),
    ("vehicleId=99999999999999999999&startDate=2031-06-01&endDate=2031-06-02", 404),
])
def test_availability_endpoint_errors(client, catalog, qs, status):
    r = client.get(f"/api/bookings/availability/check?{qs}")
    assert r.status_code == status


def test_naive_inputs_use_configured_timezone(store, catalog):
    app = create_app({"TESTING": True, "APP_TIMEZONE": "Pacific/Auckland"}, store=store)
    with app.test_client() as c:
        r = _book(c, catalog["scout"], start="2031-06-01T10:00", end="2031-06-02T10:00")
    assert r.status_code == 201
    # NZST is UTC+12 in June
    assert r.get_json()["data"]["startDate"] == "2031-05-31T22:00:00Z"


def test_storage_failure_is_500(client, store, catalog):
    BookingRow.__table__.drop(store.engine)
    r = _book(client, catalog["camry"])
    assert r.status_code == 500
    body = r.get_json()
    assert body["kind"] == "storage"
    assert body["message"] == "Internal Server Error"


def test_unknown_timezone_rejected(store):
    with pytest.raises(ValueError):
        create_app({"APP_TIMEZONE": "Mars/Olympus"}, store=store)


def test_non_string_name_gets_its_own_message(client, catalog):
    r = _book(client, catalog["camry"], firstName=42)
    assert r.status_code == 400
    errors = {e["field"]: e["message"] for e in r.get_json()["errors"]}
    assert errors["firstName"] == "First name must be a string"


@pytest.mark.parametrize("url", [
    "/api/vehicles/99999999999999999999",
    "/api/bookings/99999999999999999999",
])
def test_out_of_range_ids_are_not_found(client, catalog, url):
    r = client.get(url)
    assert r.status_code == 404
    assert r.get_json()["success"] is False
