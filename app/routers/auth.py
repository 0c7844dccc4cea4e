# app/routers/auth.py
"""Signup and login - both return a bearer token for the player."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.player import LoginRequest, SignupRequest, TokenOut
from app.services.player_service import authenticate, create_player
from app.utils.security import create_access_token

router = APIRouter()


@router.post("/auth/signup", response_model=TokenOut, status_code=status.HTTP_201_CREATED,
             summary="Create a player account")
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    player = create_player(db, body.username, body.password, body.email)
    return TokenOut(token=create_access_token(player.id, player.username),
                    player_id=player.id, username=player.username)


@router.post("/auth/login", response_model=TokenOut, summary="Exchange credentials for a token")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    player = authenticate(db, body.username, body.password)
    if not player:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return TokenOut(token=create_access_token(player.id, player.username),
                    player_id=player.id, username=player.username)
