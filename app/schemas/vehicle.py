# app/schemas/vehicle.py
from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


class VehiclePurchase(BaseModel):
    player_id: int
    type: str                # Model Y | RoboCab
    cost: Decimal
    status: str              # new | active | parked | garage | ordered
    coords: List[float]      # [lat, lng]
    wear: Optional[Decimal] = None
    battery: Optional[Decimal] = None
    mileage: Optional[Decimal] = None
    dest: Optional[List[float]] = None


class VehiclePurchaseOut(BaseModel):
    vehicle_id: int


class VehicleOut(BaseModel):
    id: int
    player_id: int
    type: str
    status: str
    wear: float
    battery: float
    mileage: float
    tire_mileage: float
    cost: float
    coords: Optional[List[float]]
    dest: Optional[List[float]]
    purchase_date: datetime
    delivery_timestamp: Optional[datetime]

    class Config:
        from_attributes = True


class CatalogEntry(BaseModel):
    type: str
    cost: float
