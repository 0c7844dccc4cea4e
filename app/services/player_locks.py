# app/services/player_locks.py
"""
Per-player serialisation of balance-changing operations.

Sync FastAPI handlers run on a threadpool, so two purchases for the same
player can interleave inside one process. locked_player() takes a process-local
lock for the player and then re-reads the player row with SELECT ... FOR UPDATE,
which covers multiple worker processes on PostgreSQL. The caller's check and
writes happen while both are held; commit or rollback releases the row lock.
"""

import threading
import weakref
from contextlib import contextmanager
from sqlalchemy.orm import Session
from app.models.player import Player
from app.services.exceptions import PlayerNotFound

_registry_lock = threading.Lock()
# An entry lives only while some thread holds or waits on that player's lock
_player_locks = weakref.WeakValueDictionary()


def _lock_for(player_id: int) -> threading.Lock:
    with _registry_lock:
        lock = _player_locks.get(player_id)
        if lock is None:
            lock = _player_locks[player_id] = threading.Lock()
        return lock


@contextmanager
def locked_player(db: Session, player_id: int):
    """Yield the locked Player row. Raises PlayerNotFound if it does not exist."""
    with _lock_for(player_id):
        try:
            player = (
                db.query(Player)
                .filter(Player.id == player_id)
                .with_for_update()
                .populate_existing()
                .first()
            )
            if player is None:
                raise PlayerNotFound(player_id)
            yield player
        finally:
            # Never leave the row lock held past the critical section
            if db.in_transaction():
                db.rollback()
