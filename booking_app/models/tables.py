"""
SQLAlchemy table definitions. Rows stay inside the store; callers receive
the dataclasses from vehicle.py / booking.py.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class VehicleTypeRow(Base):
    __tablename__ = "vehicle_types"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
    wheels = Column(Integer, nullable=False)
    description = Column(Text, nullable=False, default="")

    vehicles = relationship("VehicleRow", back_populates="vehicle_type", order_by="VehicleRow.name")

    __table_args__ = (
        CheckConstraint("wheels IN (2, 4)", name="check_vehicle_type_wheels"),
    )


class VehicleRow(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    model = Column(String(50), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)
    vehicle_type_id = Column(Integer, ForeignKey("vehicle_types.id"), nullable=False, index=True)

    vehicle_type = relationship("VehicleTypeRow", back_populates="vehicles")
    bookings = relationship("BookingRow", back_populates="vehicle")


class BookingRow(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    # Naive UTC; the store attaches tzinfo on the way out
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default="confirmed")
    created_at = Column(DateTime, nullable=False, default=_utcnow)

    vehicle = relationship("VehicleRow", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("start_date < end_date", name="check_booking_interval"),
        CheckConstraint("status IN ('confirmed', 'cancelled')", name="check_booking_status"),
        Index("ix_bookings_vehicle_status", "vehicle_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, vehicle={self.vehicle_id}, status={self.status})>"
