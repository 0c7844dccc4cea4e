# app/routers/purchases.py
"""
Slot-and-balance accounting endpoints.
POST /purchase-vehicle  - buy a taxi (funds check, then slot check)
POST /purchase-garage   - buy a garage or lot (funds check)
GET  /slots/{player_id} - total / used / available parking slots
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.garage import GaragePurchase, GaragePurchaseOut
from app.schemas.player import SlotSummaryOut
from app.schemas.vehicle import VehiclePurchase, VehiclePurchaseOut
from app.services.accounting_service import get_slot_summary, purchase_garage, purchase_vehicle
from app.services.player_service import ensure_owner, get_player
from app.utils.auth import get_current_player_id

router = APIRouter()


@router.post("/purchase-vehicle", response_model=VehiclePurchaseOut,
             status_code=status.HTTP_201_CREATED, summary="Buy a vehicle")
def buy_vehicle(body: VehiclePurchase, db: Session = Depends(get_db),
                caller_id: int = Depends(get_current_player_id)):
    ensure_owner(caller_id, body.player_id)
    vehicle_id = purchase_vehicle(
        db,
        player_id=body.player_id,
        vehicle_type=body.type,
        cost=body.cost,
        status=body.status,
        coords=body.coords,
        wear=body.wear,
        battery=body.battery,
        mileage=body.mileage,
        dest=body.dest,
    )
    return VehiclePurchaseOut(vehicle_id=vehicle_id)


@router.post("/purchase-garage", response_model=GaragePurchaseOut,
             status_code=status.HTTP_201_CREATED, summary="Buy a garage or lot")
def buy_garage(body: GaragePurchase, db: Session = Depends(get_db),
               caller_id: int = Depends(get_current_player_id)):
    ensure_owner(caller_id, body.player_id)
    garage_id = purchase_garage(
        db,
        player_id=body.player_id,
        name=body.name,
        coords=body.coords,
        capacity=body.capacity,
        kind=body.type,
        cost_monthly=body.cost_monthly,
        services=body.services,
    )
    return GaragePurchaseOut(garage_id=garage_id)


@router.get("/slots/{player_id}", response_model=SlotSummaryOut, summary="Parking slot summary")
def slot_summary(player_id: int, db: Session = Depends(get_db),
                 caller_id: int = Depends(get_current_player_id)):
    ensure_owner(caller_id, player_id)
    get_player(db, player_id)
    return SlotSummaryOut(**get_slot_summary(db, player_id)._asdict())
