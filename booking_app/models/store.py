import logging
import threading
from contextlib import contextmanager
from datetime import timezone
from typing import Optional

from sqlalchemy import create_engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload, selectinload, sessionmaker
from sqlalchemy.pool import StaticPool

from ..exceptions import StorageError
from ..utils.constants import BLOCKING_STATUSES, MAX_DB_ID, BookingStatus
from ..utils.dates import to_naive_utc
from .booking import Booking, BookingConflict, Customer, Interval
from .tables import Base, BookingRow, VehicleRow, VehicleTypeRow
from .vehicle import Vehicle, VehicleType

logger = logging.getLogger(__name__)


def _storable_id(value) -> bool:
    """Ids outside the INTEGER range cannot exist and make the driver overflow."""
    return isinstance(value, int) and 0 < value <= MAX_DB_ID


# ---------- row -> dataclass mappers ----------
def _utc(dt):
    return dt.replace(tzinfo=timezone.utc) if dt is not None else None


def vehicle_type_from_row(row: Optional[VehicleTypeRow], with_vehicles: bool = False) -> Optional[VehicleType]:
    if row is None:
        return None
    vt = VehicleType(id=row.id, name=row.name, wheels=row.wheels, description=row.description or "")
    if with_vehicles:
        vt.vehicles = [vehicle_from_row(v, with_type=False) for v in row.vehicles if v.is_available]
    return vt


def vehicle_from_row(row: Optional[VehicleRow], with_type: bool = True) -> Optional[Vehicle]:
    if row is None:
        return None
    return Vehicle(
        id=row.id,
        name=row.name,
        model=row.model,
        vehicle_type_id=row.vehicle_type_id,
        is_available=bool(row.is_available),
        vehicle_type=vehicle_type_from_row(row.vehicle_type) if with_type else None,
    )


def booking_from_row(row: Optional[BookingRow], with_vehicle: bool = False) -> Optional[Booking]:
    if row is None:
        return None
    return Booking(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        vehicle_id=row.vehicle_id,
        start_date=_utc(row.start_date),
        end_date=_utc(row.end_date),
        status=BookingStatus(row.status),
        created_at=_utc(row.created_at),
        vehicle=vehicle_from_row(row.vehicle) if with_vehicle else None,
    )


class Store:
    """
    Relational booking store.

    The store is created once by the app factory and handed to services
    explicitly; there is no process-wide instance.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        kwargs = {"echo": echo, "future": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection, otherwise every thread gets its own empty database
                kwargs["poolclass"] = StaticPool
        self.engine = create_engine(url, **kwargs)
        self.Session = sessionmaker(self.engine, expire_on_commit=False)

        # Per-vehicle locks for check-and-insert; created on first use
        self._vehicle_locks: dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

        logger.info("[Store] Using database: %s", self.engine.url.render_as_string(hide_password=True))

    # ---------- Session / schema ----------
    @contextmanager
    def session(self):
        """Transactional scope: commit on success, roll back on any error."""
        session = self.Session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Error: storage operation failed ({e.__class__.__name__})") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_schema(self):
        """Create missing tables. Migrations are out of scope."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Error: could not create schema ({e.__class__.__name__})") from e

    def dispose(self):
        self.engine.dispose()

    def _lock_for(self, vehicle_id: int) -> threading.Lock:
        with self._locks_guard:
            lock = self._vehicle_locks.get(vehicle_id)
            if lock is None:
                lock = self._vehicle_locks[vehicle_id] = threading.Lock()
            return lock

    # ---------- Vehicles / types ----------
    def vehicle_exists(self, vehicle_id: int) -> bool:
        """Return True if a vehicle with this ID is in the catalog."""
        if not _storable_id(vehicle_id):
            return False
        with self.session() as s:
            return s.get(VehicleRow, vehicle_id) is not None

    def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        if not _storable_id(vehicle_id):
            return None
        with self.session() as s:
            row = s.execute(
                select(VehicleRow)
                .options(joinedload(VehicleRow.vehicle_type))
                .where(VehicleRow.id == vehicle_id)
            ).scalar_one_or_none()
            return vehicle_from_row(row)

    def list_vehicle_types(self, wheels: Optional[int] = None) -> list[VehicleType]:
        """Vehicle types sorted by name, optionally filtered by wheel count."""
        stmt = select(VehicleTypeRow).order_by(VehicleTypeRow.name)
        if wheels is not None:
            stmt = stmt.where(VehicleTypeRow.wheels == wheels)
        with self.session() as s:
            return [vehicle_type_from_row(r) for r in s.execute(stmt).scalars()]

    def list_vehicle_types_with_vehicles(self) -> list[VehicleType]:
        """All types with their catalog-available vehicles attached."""
        stmt = (
            select(VehicleTypeRow)
            .options(selectinload(VehicleTypeRow.vehicles))
            .order_by(VehicleTypeRow.name)
        )
        with self.session() as s:
            return [vehicle_type_from_row(r, with_vehicles=True) for r in s.execute(stmt).scalars()]

    def list_vehicles_by_type(self, vehicle_type_id: int) -> list[Vehicle]:
        if not _storable_id(vehicle_type_id):
            return []
        stmt = (
            select(VehicleRow)
            .options(joinedload(VehicleRow.vehicle_type))
            .where(VehicleRow.vehicle_type_id == vehicle_type_id, VehicleRow.is_available.is_(True))
            .order_by(VehicleRow.name)
        )
        with self.session() as s:
            return [vehicle_from_row(r) for r in s.execute(stmt).scalars()]

    def create_vehicle_type(self, name: str, wheels: int, description: str = "") -> int:
        """Create a vehicle type and return its ID."""
        with self.session() as s:
            row = VehicleTypeRow(name=name, wheels=int(wheels), description=description)
            s.add(row)
            s.flush()
            return row.id

    def create_vehicle(self, name: str, model: str, vehicle_type_id: int, is_available: bool = True) -> int:
        """Create a vehicle and return its ID."""
        with self.session() as s:
            row = VehicleRow(name=name, model=model, vehicle_type_id=vehicle_type_id, is_available=is_available)
            s.add(row)
            s.flush()
            return row.id

    # ---------- Bookings ----------
    def find_confirmed_bookings(self, vehicle_id: int) -> list[Booking]:
        """Every booking of this vehicle that blocks its calendar, ordered by start."""
        if not _storable_id(vehicle_id):
            return []
        with self.session() as s:
            return [booking_from_row(r) for r in self._blocking_rows(s, vehicle_id)]

    def _blocking_rows(self, s, vehicle_id: int):
        stmt = (
            select(BookingRow)
            .where(
                BookingRow.vehicle_id == vehicle_id,
                BookingRow.status.in_([st.value for st in BLOCKING_STATUSES]),
            )
            .order_by(BookingRow.start_date)
        )
        return list(s.execute(stmt).scalars())

    def insert_booking_if_no_conflict(self, vehicle_id: int, interval: Interval, customer: Customer):
        """
        Atomically re-check overlaps and insert a confirmed booking.

        Returns the new Booking (with vehicle and type), a BookingConflict
        listing the overlapping bookings, or None if the vehicle does not exist.
        The vehicle lock serialises callers in this process; the row lock
        taken with FOR UPDATE does the same across processes on databases
        that support it.
        """
        if not _storable_id(vehicle_id):
            return None
        with self._lock_for(vehicle_id):
            with self.session() as s:
                vehicle = s.execute(
                    select(VehicleRow).where(VehicleRow.id == vehicle_id).with_for_update()
                ).scalar_one_or_none()
                if vehicle is None:
                    return None

                conflicts = [
                    booking_from_row(r)
                    for r in self._blocking_rows(s, vehicle_id)
                    if interval.overlaps(Interval(_utc(r.start_date), _utc(r.end_date)))
                ]
                if conflicts:
                    logger.info(
                        "[Store] Conflict on vehicle %s for %s..%s (%d overlapping)",
                        vehicle_id, interval.start.isoformat(), interval.end.isoformat(), len(conflicts),
                    )
                    return BookingConflict(conflicting_bookings=conflicts)

                row = BookingRow(
                    first_name=customer.first_name,
                    last_name=customer.last_name,
                    vehicle_id=vehicle_id,
                    start_date=to_naive_utc(interval.start),
                    end_date=to_naive_utc(interval.end),
                    status=BookingStatus.CONFIRMED.value,
                )
                s.add(row)
                s.flush()
                s.refresh(row)
                booking = booking_from_row(row, with_vehicle=True)
                return booking

    def list_bookings(self) -> list[Booking]:
        """All bookings, newest first, with vehicle and type."""
        stmt = (
            select(BookingRow)
            .options(joinedload(BookingRow.vehicle).joinedload(VehicleRow.vehicle_type))
            .order_by(BookingRow.created_at.desc(), BookingRow.id.desc())
        )
        with self.session() as s:
            return [booking_from_row(r, with_vehicle=True) for r in s.execute(stmt).scalars()]

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        if not _storable_id(booking_id):
            return None
        stmt = (
            select(BookingRow)
            .options(joinedload(BookingRow.vehicle).joinedload(VehicleRow.vehicle_type))
            .where(BookingRow.id == booking_id)
        )
        with self.session() as s:
            return booking_from_row(s.execute(stmt).scalar_one_or_none(), with_vehicle=True)

    # ---------- Maintenance ----------
    def clear(self):
        """Delete every booking, vehicle and vehicle type."""
        with self.session() as s:
            s.execute(delete(BookingRow))
            s.execute(delete(VehicleRow))
            s.execute(delete(VehicleTypeRow))
        logger.info("[Store] Cleared all data")
