# app/routers/health.py
"""
System health endpoints.
/health    : backend + DB + tile server reachability
/db-status : DB connectivity with the total vehicle count
"""

import requests
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func, text
from app.database import get_db
from app.config import settings
from app.models.vehicle import Vehicle
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(db: Session = Depends(get_db)):
    """
    Returns:
    - Backend status
    - Database connectivity (and players table access)
    - Tile server reachability
    - Whether a non-default JWT secret is configured
    """
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "tile_server": "unknown",
        "jwt": "configured" if settings.JWT_SECRET != "change-me" else "default_secret",
    }

    try:
        db.execute(text("SELECT 1"))
        db.execute(text("SELECT 1 FROM players LIMIT 1"))
        result["database"] = "ok"
    except Exception as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    try:
        resp = requests.get(f"{settings.TILE_SERVER_URL.rstrip('/')}/health", timeout=3)
        result["tile_server"] = "ok" if resp.status_code == 200 else f"http_{resp.status_code}"
    except requests.exceptions.ConnectionError:
        result["tile_server"] = "unreachable"
        result["status"] = "degraded"
    except requests.exceptions.RequestException as e:
        result["tile_server"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result


@router.get("/db-status", summary="Database status with fleet size")
def db_status(db: Session = Depends(get_db)):
    """Storage errors surface as the usual 500 storage-failure body."""
    vehicle_count = db.query(func.count(Vehicle.id)).scalar()
    return {"status": "Connected", "vehicle_count": int(vehicle_count or 0)}
