# app/schemas/garage.py
from pydantic import BaseModel
from decimal import Decimal
from typing import List, Optional


class GaragePurchase(BaseModel):
    player_id: int
    name: str
    coords: List[float]
    capacity: int
    type: str                # garage | lot
    cost_monthly: Decimal
    services: Optional[List[str]] = None


class GaragePurchaseOut(BaseModel):
    garage_id: int


class GarageOut(BaseModel):
    id: int
    player_id: int
    name: str
    coords: Optional[List[float]]
    capacity: int
    type: str
    services: List[str]
    cost_monthly: float

    class Config:
        from_attributes = True
