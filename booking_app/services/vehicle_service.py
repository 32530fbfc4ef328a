from __future__ import annotations

from typing import Optional

from ..exceptions import VehicleNotFoundError
from ..models.store import Store
from ..models.vehicle import Vehicle, VehicleType


class VehicleService:
    """Read-only vehicle catalog used by the wizard's wheel, type and vehicle steps."""

    def __init__(self, store: Store):
        self.store = store

    def vehicle_types(self, wheels: Optional[int] = None) -> list[VehicleType]:
        """Vehicle types sorted by name; all types when `wheels` is None."""
        return self.store.list_vehicle_types(wheels)

    def all_vehicle_types(self) -> list[VehicleType]:
        return self.store.list_vehicle_types_with_vehicles()

    def vehicles_by_type(self, vehicle_type_id: int) -> list[Vehicle]:
        """Catalog-available vehicles of one type, sorted by name."""
        return self.store.list_vehicles_by_type(vehicle_type_id)

    def get_vehicle(self, vehicle_id: int) -> Vehicle:
        """Return a vehicle by ID or raise VehicleNotFoundError."""
        v = self.store.get_vehicle(vehicle_id)
        if v is None:
            raise VehicleNotFoundError()
        return v
