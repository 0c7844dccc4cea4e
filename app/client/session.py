# app/client/session.py
"""
Explicit player session - the single source of truth for the bearer token.

Holders call subscribe() to be told when the player logs in, refreshes, or
logs out instead of polling shared storage.
"""

from typing import Callable, List, Optional
from app.utils.logger import get_logger

logger = get_logger(__name__)


class PlayerSession:
    def __init__(self):
        self.token: Optional[str] = None
        self.username: Optional[str] = None
        self.player_id: Optional[int] = None
        self._subscribers: List[Callable[["PlayerSession"], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def subscribe(self, callback: Callable[["PlayerSession"], None]) -> Callable[[], None]:
        """Register callback(session); returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return unsubscribe

    def update(self, token: str, username: str, player_id: int):
        self.token, self.username, self.player_id = token, username, player_id
        self._notify()

    def clear(self):
        self.token = self.username = self.player_id = None
        self._notify()

    def _notify(self):
        for callback in list(self._subscribers):
            try:
                callback(self)
            except Exception as e:
                # One bad listener must not stop the others from hearing about it
                logger.error(f"Session subscriber {callback!r} failed: {e}", exc_info=True)
