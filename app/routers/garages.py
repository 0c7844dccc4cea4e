# app/routers/garages.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.garage import GarageOut
from app.services.garage_service import list_garages
from app.services.player_service import ensure_owner, get_player
from app.utils.auth import get_current_player_id

router = APIRouter()


@router.get("/garages/{player_id}", response_model=list[GarageOut], summary="A player's garages and lots")
def player_garages(player_id: int, db: Session = Depends(get_db),
                   caller_id: int = Depends(get_current_player_id)):
    ensure_owner(caller_id, player_id)
    get_player(db, player_id)
    return list_garages(db, player_id)
