from flask import Blueprint, request

from ..services.common import _store, to_int_safe
from ..services.vehicle_service import VehicleService
from ..utils.constants import ALLOWED_WHEELS
from ..utils.responses import fail, ok

bp = Blueprint("vehicles", __name__, url_prefix="/api/vehicles")


@bp.get("/types")
def vehicle_types():
    """Vehicle types, optionally filtered by ?wheels=2|4."""
    raw = (request.args.get("wheels") or "").strip()
    wheels = None
    if raw:
        wheels = to_int_safe(raw)
        if wheels not in ALLOWED_WHEELS:
            return fail("Wheels must be 2 or 4", 400)

    types = VehicleService(_store()).vehicle_types(wheels)
    return ok([t.to_dict() for t in types], "Vehicle types fetched successfully")


@bp.get("/types/all")
def all_vehicle_types():
    types = VehicleService(_store()).all_vehicle_types()
    return ok([t.to_dict(with_vehicles=True) for t in types], "All vehicle types fetched successfully")


@bp.get("/type/<vehicle_type_id>")
def vehicles_by_type(vehicle_type_id):
    tid = to_int_safe(vehicle_type_id)
    if tid is None:
        return fail("Valid vehicle type ID is required", 400)
    vehicles = VehicleService(_store()).vehicles_by_type(tid)
    return ok([v.to_dict() for v in vehicles], "Vehicles fetched successfully")


@bp.get("/<vehicle_id>")
def vehicle_detail(vehicle_id):
    vid = to_int_safe(vehicle_id)
    if vid is None:
        return fail("Valid vehicle ID is required", 400)
    v = VehicleService(_store()).get_vehicle(vid)
    return ok(v.to_dict(), "Vehicle fetched successfully")
