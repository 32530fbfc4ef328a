from dataclasses import dataclass, field
from typing import Optional


@dataclass
class VehicleType:
    """
    Catalog category (e.g. "Sedan"). The wizard filters types by wheel count
    before the customer picks a vehicle.
    """
    id: int
    name: str
    wheels: int  # 2 | 4
    description: str = ""
    vehicles: list = field(default_factory=list)

    def to_dict(self, with_vehicles: bool = False) -> dict:
        d = {
            "id": self.id,
            "name": self.name,
            "wheels": self.wheels,
            "description": self.description,
        }
        if with_vehicles:
            d["vehicles"] = [v.to_dict() for v in self.vehicles]
        return d


@dataclass
class Vehicle:
    """
    A concrete vehicle. `is_available` is the catalog flag and says nothing
    about bookings; the availability engine decides that from the calendar.
    """
    id: int
    name: str
    model: str
    vehicle_type_id: int
    is_available: bool = True
    vehicle_type: Optional[VehicleType] = None

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "name": self.name,
            "model": self.model,
            "vehicleTypeId": self.vehicle_type_id,
            "isAvailable": self.is_available,
        }
        if self.vehicle_type is not None:
            d["vehicleType"] = self.vehicle_type.to_dict()
        return d
