# app/routers/player.py
"""
Player details, balance, slots, and the monthly upkeep fee.
The /player/by-username/... routes resolve the name first, so an unknown
name is a 404 before the ownership check can answer 403.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.player import BalanceOut, PlayerOut, SlotSummaryOut, UpkeepOut
from app.services.accounting_service import charge_upkeep, get_slot_summary
from app.services.player_service import ensure_owner, get_player, get_player_by_username
from app.utils.auth import get_current_player_id

router = APIRouter()


@router.get("/player/{player_id}", response_model=PlayerOut, summary="Player details")
def player_details(player_id: int, db: Session = Depends(get_db),
                   caller_id: int = Depends(get_current_player_id)):
    ensure_owner(caller_id, player_id)
    return get_player(db, player_id)


@router.get("/player/{player_id}/balance", response_model=BalanceOut, summary="Bank balance")
def player_balance(player_id: int, db: Session = Depends(get_db),
                   caller_id: int = Depends(get_current_player_id)):
    ensure_owner(caller_id, player_id)
    player = get_player(db, player_id)
    return BalanceOut(player_id=player.id, bank_balance=player.bank_balance)


@router.get("/player/by-username/{username}/balance", response_model=BalanceOut,
            summary="Bank balance by username")
def player_balance_by_username(username: str, db: Session = Depends(get_db),
                               caller_id: int = Depends(get_current_player_id)):
    player = get_player_by_username(db, username)
    ensure_owner(caller_id, player.id)
    return BalanceOut(player_id=player.id, bank_balance=player.bank_balance)


@router.get("/player/by-username/{username}/slots", response_model=SlotSummaryOut,
            summary="Parking slot summary by username")
def player_slots_by_username(username: str, db: Session = Depends(get_db),
                             caller_id: int = Depends(get_current_player_id)):
    player = get_player_by_username(db, username)
    ensure_owner(caller_id, player.id)
    return SlotSummaryOut(**get_slot_summary(db, player.id)._asdict())


@router.post("/player/{player_id}/upkeep", response_model=UpkeepOut,
             summary="Charge one month of garage/lot upkeep")
def player_upkeep(player_id: int, db: Session = Depends(get_db),
                  caller_id: int = Depends(get_current_player_id)):
    """All-or-nothing: rejected with insufficient funds if the balance cannot cover it."""
    ensure_owner(caller_id, player_id)
    charged, balance = charge_upkeep(db, player_id)
    return UpkeepOut(player_id=player_id, charged=charged, bank_balance=balance)
