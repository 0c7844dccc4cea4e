# app/models/garage.py
"""
Garages table - capacity providers (garages and lots).
Sum of capacity across a player's rows is that player's total slot count.
"""

from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, JSON
from app.database import Base

GARAGE_KINDS = ("garage", "lot")
GARAGE_SERVICES = {
    "garage": ("parking", "charging", "repair", "cleaning"),
    "lot": ("parking", "charging"),
}


class Garage(Base):
    __tablename__ = "garages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    lat = Column(Numeric(10, 7))
    lng = Column(Numeric(10, 7))
    capacity = Column(Integer, nullable=False)
    type = Column(String(16), nullable=False)          # garage | lot
    services = Column(JSON, nullable=False, default=list)
    cost_monthly = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False)

    @property
    def coords(self):
        if self.lat is None or self.lng is None:
            return None
        return [float(self.lat), float(self.lng)]

    def __repr__(self):
        return f"<Garage {self.id} {self.name} type={self.type} capacity={self.capacity}>"
