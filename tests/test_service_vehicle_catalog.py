import pytest

from booking_app.exceptions import VehicleNotFoundError
from booking_app.services.vehicle_service import VehicleService


@pytest.fixture
def svc(store):
    return VehicleService(store)


def test_types_filtered_by_wheels(svc, catalog):
    assert [t.name for t in svc.vehicle_types()] == ["Cruiser", "Sedan"]
    assert [t.name for t in svc.vehicle_types(4)] == ["Sedan"]
    assert [t.name for t in svc.vehicle_types(2)] == ["Cruiser"]


def test_vehicles_by_type_sorted_and_available_only(svc, store, catalog):
    store.create_vehicle("Audi A4", "2023", catalog["sedan"], is_available=False)
    names = [v.name for v in svc.vehicles_by_type(catalog["sedan"])]
    assert names == ["Honda Accord", "Toyota Camry"]


def test_all_types_include_available_vehicles(svc, store, catalog):
    store.create_vehicle("Audi A4", "2023", catalog["sedan"], is_available=False)
    by_name = {t.name: t for t in svc.all_vehicle_types()}
    assert [v.name for v in by_name["Sedan"].vehicles] == ["Honda Accord", "Toyota Camry"]
    assert by_name["Cruiser"].to_dict(with_vehicles=True)["vehicles"][0]["name"] == "Indian Scout Bobber"


def test_get_vehicle(svc, catalog):
    v = svc.get_vehicle(catalog["camry"])
    assert v.vehicle_type.name == "Sedan"
    assert v.to_dict()["vehicleType"]["wheels"] == 4


def test_get_vehicle_not_found(svc, catalog):
    with pytest.raises(VehicleNotFoundError):
        svc.get_vehicle(123456)
