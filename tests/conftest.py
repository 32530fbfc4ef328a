import sys, pathlib

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from datetime import datetime, timezone

import pytest

from booking_app import create_app
from booking_app.config import TestConfig
from booking_app.models.store import Store


@pytest.fixture
def store(tmp_path):
    """
    Fresh file-backed SQLite store per test. A file (not :memory:) gives
    every thread its own connection, like a real database would.
    """
    st = Store(f"sqlite:///{tmp_path / 'test.db'}")
    st.create_schema()
    yield st
    st.dispose()


@pytest.fixture
def catalog(store):
    """Two types and three vehicles; returns the ids by name."""
    sedan = store.create_vehicle_type("Sedan", 4, "Elegant and comfortable passenger cars")
    cruiser = store.create_vehicle_type("Cruiser", 2, "Comfortable long-distance motorcycles")
    return {
        "sedan": sedan,
        "cruiser": cruiser,
        "camry": store.create_vehicle("Toyota Camry", "2023", sedan),
        "accord": store.create_vehicle("Honda Accord", "2023", sedan),
        "scout": store.create_vehicle("Indian Scout Bobber", "2023", cruiser),
    }


def utc(y, m, d, hh=0, mm=0):
    return datetime(y, m, d, hh, mm, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2025-05-01 00:00 UTC."""
    return lambda: utc(2025, 5, 1)


@pytest.fixture
def app(store):
    app = create_app(TestConfig, store=store)
    yield app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c
