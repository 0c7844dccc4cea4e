# app/schemas/player.py
from pydantic import BaseModel, Field
from typing import Optional


class SignupRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_-]+$")
    email: Optional[str] = None
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    token: str
    player_id: int
    username: str


class PlayerOut(BaseModel):
    id: int
    username: str
    email: Optional[str]
    bank_balance: float
    score: float

    class Config:
        from_attributes = True


class BalanceOut(BaseModel):
    player_id: int
    bank_balance: float


class SlotSummaryOut(BaseModel):
    total_slots: int
    used_slots: int
    available_slots: int


class UpkeepOut(BaseModel):
    player_id: int
    charged: float
    bank_balance: float
