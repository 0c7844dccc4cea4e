# app/services/garage_service.py
"""Garage/lot lookups. Purchases live in accounting_service."""

from sqlalchemy.orm import Session
from app.models.garage import Garage


def list_garages(db: Session, player_id: int):
    return db.query(Garage).filter(Garage.player_id == player_id).order_by(Garage.id).all()
