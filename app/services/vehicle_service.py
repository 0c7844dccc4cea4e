# app/services/vehicle_service.py
"""
Vehicle listings and the purchase catalog.
Used by the vehicles router.
"""

from decimal import Decimal
from sqlalchemy.orm import Session
from app.models.vehicle import Vehicle, VEHICLE_STATUSES
from app.services.exceptions import ValidationFailed
from app.utils.logger import get_logger

logger = get_logger(__name__)

CATALOG = {
    "Model Y": Decimal("50000.00"),
    "RoboCab": Decimal("35000.00"),
}


def _check_status_filter(status):
    if status is not None and status not in VEHICLE_STATUSES:
        raise ValidationFailed(f"Invalid status, must be one of: {', '.join(VEHICLE_STATUSES)}")


def list_player_vehicles(db: Session, player_id: int, status: str = None):
    """
    A player's fleet, optionally filtered by status.
    Vehicles that have gone active no longer carry a delivery timestamp.
    """
    _check_status_filter(status)
    cleared = (
        db.query(Vehicle)
        .filter(Vehicle.player_id == player_id, Vehicle.status == "active",
                Vehicle.delivery_timestamp.isnot(None))
        .update({Vehicle.delivery_timestamp: None}, synchronize_session=False)
    )
    if cleared:
        db.commit()
        logger.info(f"Cleared delivery timestamp on {cleared} active vehicle(s) of player_id={player_id}")

    q = db.query(Vehicle).filter(Vehicle.player_id == player_id)
    if status:
        q = q.filter(Vehicle.status == status)
    return q.order_by(Vehicle.id).all()


def list_other_vehicles(db: Session, player_id: int, status: str = None):
    """Every vehicle not owned by player_id - drawn on the map as competitors."""
    _check_status_filter(status)
    q = db.query(Vehicle).filter(Vehicle.player_id != player_id)
    if status:
        q = q.filter(Vehicle.status == status)
    return q.order_by(Vehicle.id).all()
