# app/models/vehicle.py
"""
Vehicles table - one row per owned taxi.
Every row occupies exactly one parking slot of its owner, whatever its status.
wear is clamped to 0-100 on assignment, mirroring the storage-layer cap.
"""

from decimal import Decimal
from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, Index
from sqlalchemy.orm import validates
from app.database import Base

CANONICAL_TYPES = ("Model Y", "RoboCab")
VEHICLE_STATUSES = ("new", "active", "parked", "garage", "ordered")


class Vehicle(Base):
    __tablename__ = "vehicles"
    __table_args__ = (Index("idx_vehicles_coords", "lat", "lng"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False, index=True)
    type = Column(String(32), nullable=False)
    status = Column(String(16), nullable=False, default="new", index=True)
    wear = Column(Numeric(5, 2), nullable=False, default=0)
    battery = Column(Numeric(5, 2), nullable=False, default=100)
    mileage = Column(Numeric(10, 2), nullable=False, default=0)
    tire_mileage = Column(Numeric(10, 2), nullable=False, default=0)
    cost = Column(Numeric(10, 2), nullable=False)
    lat = Column(Numeric(10, 7))
    lng = Column(Numeric(10, 7))
    dest_lat = Column(Numeric(10, 7))
    dest_lng = Column(Numeric(10, 7))
    purchase_date = Column(DateTime, nullable=False)
    delivery_timestamp = Column(DateTime)    # Only set while status == "ordered"
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    @validates("wear")
    def _clamp_wear(self, key, value):
        value = Decimal(str(value))
        return min(max(value, Decimal("0")), Decimal("100"))

    @property
    def coords(self):
        if self.lat is None or self.lng is None:
            return None
        return [float(self.lat), float(self.lng)]

    @property
    def dest(self):
        if self.dest_lat is None or self.dest_lng is None:
            return None
        return [float(self.dest_lat), float(self.dest_lng)]

    def __repr__(self):
        return f"<Vehicle {self.id} type={self.type} status={self.status} player={self.player_id}>"
