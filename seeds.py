import logging

from booking_app import create_app
from booking_app.models.store import Store
from booking_app.services.common import STORE_KEY

logger = logging.getLogger("booking_app.seeds")

VEHICLE_TYPES = [
    # Cars (4 wheels)
    {"name": "Hatchback", "wheels": 4, "description": "Compact and efficient city cars"},
    {"name": "SUV", "wheels": 4, "description": "Sport Utility Vehicles for all terrains"},
    {"name": "Sedan", "wheels": 4, "description": "Elegant and comfortable passenger cars"},
    # Bikes (2 wheels)
    {"name": "Cruiser", "wheels": 2, "description": "Comfortable long-distance motorcycles"},
    {"name": "Sports", "wheels": 2, "description": "High-performance racing motorcycles"},
]

VEHICLES = {
    "Hatchback": ["Honda Civic Hatchback", "Toyota Corolla Hatchback", "Volkswagen Golf"],
    "SUV": ["Toyota RAV4", "Honda CR-V", "Ford Explorer"],
    "Sedan": ["Honda Accord", "Toyota Camry", "BMW 3 Series"],
    "Cruiser": ["Harley-Davidson Street 750", "Indian Scout Bobber"],
    "Sports": ["Yamaha R1", "Kawasaki Ninja ZX-10R", "Honda CBR1000RR"],
}

MODEL_YEAR = "2023"


def seed(store: Store) -> dict:
    """
    Wipe the store and load the demo catalog.
    Returns {type name: type id}.
    """
    store.clear()

    type_ids = {}
    for t in VEHICLE_TYPES:
        type_ids[t["name"]] = store.create_vehicle_type(t["name"], t["wheels"], t["description"])
        logger.info("Created vehicle type: %s", t["name"])

    for type_name, names in VEHICLES.items():
        for name in names:
            store.create_vehicle(name, MODEL_YEAR, type_ids[type_name])
            logger.info("Created vehicle: %s (%s)", name, MODEL_YEAR)

    return type_ids


def main():
    app = create_app()
    store = app.extensions[STORE_KEY]
    type_ids = seed(store)
    vehicle_count = sum(len(v) for v in VEHICLES.values())

    print("✅ Seed complete.")
    print(f"📊 Created {len(type_ids)} vehicle types and {vehicle_count} vehicles")


if __name__ == "__main__":
    main()
