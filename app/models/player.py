# app/models/player.py
"""
Players table - identity and economy state.
bank_balance is only mutated by the purchase and upkeep services, always
under the player's row lock (see app/services/player_locks.py).
"""

from sqlalchemy import Column, Integer, String, DateTime, Numeric
from app.database import Base


class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(64), unique=True, nullable=False, index=True)
    email = Column(String(255))
    password_hash = Column(String(255), nullable=False)
    bank_balance = Column(Numeric(12, 2), nullable=False, default=0)
    score = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Player {self.id} {self.username} balance={self.bank_balance}>"
