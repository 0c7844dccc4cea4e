# app/services/player_service.py
"""
Player signup, login, and lookups.
Used by the auth and player routers; purchases go through accounting_service.
"""

from datetime import datetime
from decimal import Decimal
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.config import settings
from app.models.player import Player
from app.services.exceptions import NotAuthorized, PlayerNotFound, StorageFailure, ValidationFailed
from app.utils.security import hash_password, verify_password
from app.utils.logger import get_logger

logger = get_logger(__name__)


def ensure_owner(caller_id: int, player_id: int):
    """Raise NotAuthorized unless the token's player owns player_id."""
    if caller_id != player_id:
        logger.warning(f"Unauthorized access to player_id={player_id} by player_id={caller_id}")
        raise NotAuthorized("Unauthorized access to player data")


def get_player(db: Session, player_id: int) -> Player:
    player = db.query(Player).filter(Player.id == player_id).first()
    if not player:
        raise PlayerNotFound(player_id)
    return player


def get_player_by_username(db: Session, username: str) -> Player:
    player = db.query(Player).filter(Player.username == username).first()
    if not player:
        raise PlayerNotFound(username)
    return player


def create_player(db: Session, username: str, password: str, email: str = None) -> Player:
    """Register a player with the starting balance. Usernames are unique."""
    if db.query(Player.id).filter(Player.username == username).first():
        raise ValidationFailed(f"Username {username} is already taken")

    player = Player(
        username=username,
        email=email,
        password_hash=hash_password(password),
        bank_balance=Decimal(settings.STARTING_BALANCE),
        score=Decimal("0.00"),
        created_at=datetime.utcnow(),
    )
    db.add(player)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same name
        db.rollback()
        raise ValidationFailed(f"Username {username} is already taken")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Signup failed for username={username}: {e}", exc_info=True)
        raise StorageFailure("Failed to create player", str(e)) from e

    db.refresh(player)
    logger.info(f"Player {player.id} ({username}) signed up with balance {player.bank_balance}")
    return player


def authenticate(db: Session, username: str, password: str):
    """Return the Player for valid credentials, otherwise None."""
    player = db.query(Player).filter(Player.username == username).first()
    if not player or not verify_password(password, player.password_hash):
        logger.info(f"Failed login for username={username}")
        return None
    return player
