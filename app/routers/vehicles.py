# app/routers/vehicles.py
"""Fleet listings for the map, plus the showroom catalog."""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.vehicle import CatalogEntry, VehicleOut
from app.services.player_service import ensure_owner, get_player, get_player_by_username
from app.services.vehicle_service import CATALOG, list_other_vehicles, list_player_vehicles
from app.utils.auth import get_current_player_id

router = APIRouter()


@router.get("/vehicles/catalog", response_model=list[CatalogEntry], summary="Purchasable vehicle types")
def vehicle_catalog():
    return [CatalogEntry(type=t, cost=c) for t, c in CATALOG.items()]


@router.get("/vehicles/others", response_model=list[VehicleOut], summary="Other players' vehicles")
def other_vehicles(status: Optional[str] = None, db: Session = Depends(get_db),
                   caller_id: int = Depends(get_current_player_id)):
    get_player(db, caller_id)
    return list_other_vehicles(db, caller_id, status)


@router.get("/vehicles/{player_id}", response_model=list[VehicleOut], summary="A player's fleet")
def player_vehicles(player_id: int, status: Optional[str] = None, db: Session = Depends(get_db),
                    caller_id: int = Depends(get_current_player_id)):
    """Returns the player's vehicles, optionally filtered by status."""
    ensure_owner(caller_id, player_id)
    get_player(db, player_id)
    return list_player_vehicles(db, player_id, status)


@router.get("/player/by-username/{username}/vehicles", response_model=list[VehicleOut],
            summary="A player's fleet by username")
def player_vehicles_by_username(username: str, status: Optional[str] = None,
                                db: Session = Depends(get_db),
                                caller_id: int = Depends(get_current_player_id)):
    player = get_player_by_username(db, username)
    ensure_owner(caller_id, player.id)
    return list_player_vehicles(db, player.id, status)
