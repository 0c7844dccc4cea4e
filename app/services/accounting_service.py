# app/services/accounting_service.py
"""
Slot-and-balance accounting - the only place a player's bank_balance changes.

  purchase_vehicle : validate → lock player → funds check → slot check → insert + debit
  purchase_garage  : validate → lock player → funds check → insert + debit
  charge_upkeep    : lock player → Σ cost_monthly → funds check → debit
  get_slot_summary : total = Σ garage capacity, used = count(vehicles)

Each write path runs as one transaction under locked_player(), so the check
and both writes are linearised per player. Storage errors are rolled back,
logged, and re-raised as StorageFailure.
"""

from collections import namedtuple
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from numbers import Real
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.config import settings
from app.models.garage import Garage, GARAGE_KINDS, GARAGE_SERVICES
from app.models.vehicle import Vehicle, CANONICAL_TYPES, VEHICLE_STATUSES
from app.services.exceptions import (
    InsufficientFunds, NoSlotsAvailable, StorageFailure, ValidationFailed,
)
from app.services.player_locks import locked_player
from app.utils.logger import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999.99")
MAX_CAPACITY = 2**31 - 1

SlotSummary = namedtuple("SlotSummary", ["total_slots", "used_slots", "available_slots"])


# ── Input normalisation ──────────────────────────────────────────────────────

def _require(**fields):
    missing = [name for name, value in fields.items() if value is None or value == ""]
    if missing:
        raise ValidationFailed(f"Missing required fields: {', '.join(missing)}")


def _decimal(value, field: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationFailed(f"Invalid {field}, must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationFailed(f"Invalid {field}, must be a number")
    if not amount.is_finite():
        raise ValidationFailed(f"Invalid {field}, must be a number")
    return amount


def _money(value, field: str) -> Decimal:
    amount = _decimal(value, field)
    # Numeric(10, 2) columns; quantizing anything larger would also overflow the context
    if abs(amount) > MAX_AMOUNT:
        raise ValidationFailed(f"Invalid {field}, must not exceed {MAX_AMOUNT}")
    return amount.quantize(CENT)


def _percentage(value, field: str, default: int) -> Decimal:
    if value is None:
        return Decimal(default).quantize(CENT)
    amount = _money(value, field)
    if not Decimal("0") <= amount <= Decimal("100"):
        raise ValidationFailed(f"Invalid {field}, must be between 0 and 100")
    return amount


def _non_negative(value, field: str) -> Decimal:
    if value is None:
        return Decimal("0.00")
    amount = _money(value, field)
    if amount < 0:
        raise ValidationFailed(f"Invalid {field}, must not be negative")
    return amount


def _coords(value, field: str):
    """Return (lat, lng) from a [lat, lng] pair of numbers."""
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(isinstance(v, Real) and not isinstance(v, bool) for v in value)
    ):
        raise ValidationFailed(f"Invalid {field} format, must be [lat, lng]")
    lat, lng = float(value[0]), float(value[1])
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        raise ValidationFailed(f"Invalid {field}, latitude/longitude out of range")
    return Decimal(str(lat)), Decimal(str(lng))


def _storage_failure(detail: str, player_id, exc: SQLAlchemyError) -> StorageFailure:
    logger.error(f"{detail} for player_id={player_id}: {exc}", exc_info=True)
    return StorageFailure(detail, str(exc))


# ── Reads ────────────────────────────────────────────────────────────────────

def get_slot_summary(db: Session, player_id: int) -> SlotSummary:
    """Slots owned (Σ capacity), slots used (vehicle count) and the difference."""
    total = (
        db.query(func.coalesce(func.sum(Garage.capacity), 0))
        .filter(Garage.player_id == player_id)
        .scalar()
    )
    used = (
        db.query(func.count(Vehicle.id))
        .filter(Vehicle.player_id == player_id)
        .scalar()
    )
    total, used = int(total or 0), int(used or 0)
    return SlotSummary(total_slots=total, used_slots=used, available_slots=total - used)


# ── Writes ───────────────────────────────────────────────────────────────────

def purchase_vehicle(db: Session, player_id, vehicle_type, cost, status, coords,
                     wear=None, battery=None, mileage=None, dest=None, now=None) -> int:
    """
    Buy a vehicle for player_id and return the new vehicle id.

    Checks, in order: required fields, type, status, coordinate pairs,
    numeric ranges, player exists, balance >= cost, available slots > 0.
    """
    _require(player_id=player_id, type=vehicle_type, cost=cost, status=status, coords=coords)
    if vehicle_type not in CANONICAL_TYPES:
        raise ValidationFailed(f"Invalid vehicle type, must be one of: {', '.join(CANONICAL_TYPES)}")
    if status not in VEHICLE_STATUSES:
        raise ValidationFailed(f"Invalid status, must be one of: {', '.join(VEHICLE_STATUSES)}")
    lat, lng = _coords(coords, "coords")
    dest_lat, dest_lng = _coords(dest, "dest") if dest is not None else (None, None)
    cost = _money(cost, "cost")
    if cost <= 0:
        raise ValidationFailed("Invalid cost, must be greater than zero")
    wear = _percentage(wear, "wear", 0)
    battery = _percentage(battery, "battery", 100)
    mileage = _non_negative(mileage, "mileage")
    now = now or datetime.utcnow()

    try:
        with locked_player(db, player_id) as player:
            balance = Decimal(player.bank_balance)
            if balance < cost:
                logger.info(f"Insufficient funds for player_id={player_id}: balance={balance} cost={cost}")
                raise InsufficientFunds(balance, cost)

            slots = get_slot_summary(db, player_id)
            if slots.available_slots <= 0:
                logger.info(f"No free slots for player_id={player_id}: {slots.used_slots}/{slots.total_slots}")
                raise NoSlotsAvailable(slots.total_slots)

            vehicle = Vehicle(
                player_id=player_id,
                type=vehicle_type,
                status=status,
                wear=wear,
                battery=battery,
                mileage=mileage,
                tire_mileage=Decimal("0.00"),
                cost=cost,
                lat=lat,
                lng=lng,
                dest_lat=dest_lat,
                dest_lng=dest_lng,
                purchase_date=now,
                delivery_timestamp=now + timedelta(days=settings.DELIVERY_DAYS) if status == "ordered" else None,
                created_at=now,
                updated_at=now,
            )
            db.add(vehicle)
            player.bank_balance = (balance - cost).quantize(CENT)
            db.flush()
            vehicle_id = vehicle.id
            new_balance = player.bank_balance
            db.commit()
    except SQLAlchemyError as e:
        raise _storage_failure("Failed to create vehicle", player_id, e) from e

    logger.info(f"Vehicle {vehicle_id} ({vehicle_type}) purchased by player_id={player_id} "
                f"for {cost}, balance now {new_balance}")
    return vehicle_id


def purchase_garage(db: Session, player_id, name, coords, capacity, kind, cost_monthly,
                    services=None, now=None) -> int:
    """Buy a garage or lot for player_id and return the new garage id."""
    _require(player_id=player_id, name=name, coords=coords, capacity=capacity,
             type=kind, cost_monthly=cost_monthly)
    if not isinstance(name, str) or not name.strip():
        raise ValidationFailed("Invalid name")
    if kind not in GARAGE_KINDS:
        raise ValidationFailed(f"Invalid type, must be one of: {', '.join(GARAGE_KINDS)}")
    lat, lng = _coords(coords, "coords")
    if isinstance(capacity, bool) or not isinstance(capacity, int) \
            or not 0 < capacity <= MAX_CAPACITY:
        raise ValidationFailed(f"Invalid capacity, must be between 1 and {MAX_CAPACITY}")
    cost_monthly = _money(cost_monthly, "cost_monthly")
    if cost_monthly < 0:
        raise ValidationFailed("Invalid cost_monthly, must not be negative")
    services = list(services) if services else ["parking"]
    unsupported = [s for s in services if s not in GARAGE_SERVICES[kind]]
    if unsupported:
        raise ValidationFailed(f"Services not offered by a {kind}: {', '.join(unsupported)}")
    now = now or datetime.utcnow()

    try:
        with locked_player(db, player_id) as player:
            balance = Decimal(player.bank_balance)
            if balance < cost_monthly:
                logger.info(f"Insufficient funds for player_id={player_id}: "
                            f"balance={balance} cost_monthly={cost_monthly}")
                raise InsufficientFunds(balance, cost_monthly)

            garage = Garage(
                player_id=player_id,
                name=name.strip(),
                lat=lat,
                lng=lng,
                capacity=capacity,
                type=kind,
                services=services,
                cost_monthly=cost_monthly,
                created_at=now,
            )
            db.add(garage)
            player.bank_balance = (balance - cost_monthly).quantize(CENT)
            db.flush()
            garage_id = garage.id
            db.commit()
    except SQLAlchemyError as e:
        raise _storage_failure("Failed to create garage", player_id, e) from e

    logger.info(f"{kind.capitalize()} {garage_id} '{name.strip()}' (+{capacity} slots) "
                f"purchased by player_id={player_id} for {cost_monthly}/month")
    return garage_id


def charge_upkeep(db: Session, player_id: int):
    """
    Debit one month of upkeep (Σ cost_monthly over the player's garages/lots).
    Returns (charged, new_balance). The debit is all-or-nothing.
    """
    try:
        with locked_player(db, player_id) as player:
            balance = Decimal(player.bank_balance)
            due = (
                db.query(func.coalesce(func.sum(Garage.cost_monthly), 0))
                .filter(Garage.player_id == player_id)
                .scalar()
            )
            due = Decimal(str(due or 0)).quantize(CENT)
            if balance < due:
                logger.warning(f"Upkeep of {due} exceeds balance {balance} for player_id={player_id}")
                raise InsufficientFunds(balance, due)
            new_balance = (balance - due).quantize(CENT)
            player.bank_balance = new_balance
            db.commit()
    except SQLAlchemyError as e:
        raise _storage_failure("Failed to charge upkeep", player_id, e) from e

    logger.info(f"Upkeep {due} charged to player_id={player_id}, balance now {new_balance}")
    return due, new_balance
