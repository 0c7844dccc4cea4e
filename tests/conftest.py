# tests/conftest.py
"""Shared fixtures: a throwaway SQLite database per test, seed helpers, API client."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

import pytest
from datetime import datetime
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.database import create_tables, get_db
from app.main import app
from app.models.garage import Garage
from app.models.player import Player
from app.models.vehicle import Vehicle
from app.utils.security import create_access_token, hash_password

AUSTIN = [30.2672, -97.7431]


@pytest.fixture()
def engine(tmp_path):
    # File-backed so concurrent tests can open one connection per thread
    engine = create_engine(f"sqlite:///{tmp_path / 'cybertaxi.db'}",
                           connect_args={"check_same_thread": False})
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def make_player(db):
    def _make(username="rider", balance="10000.00", password="secret1"):
        player = Player(
            username=username,
            password_hash=hash_password(password, iterations=1000),
            bank_balance=Decimal(balance),
            score=Decimal("0"),
            created_at=datetime.utcnow(),
        )
        db.add(player)
        db.commit()
        return player.id
    return _make


@pytest.fixture()
def add_garage(db):
    def _add(player_id, capacity=1, kind="lot", cost_monthly="0.00", name="Lot"):
        garage = Garage(player_id=player_id, name=name, lat=AUSTIN[0], lng=AUSTIN[1],
                        capacity=capacity, type=kind, services=["parking"],
                        cost_monthly=Decimal(cost_monthly), created_at=datetime.utcnow())
        db.add(garage)
        db.commit()
        return garage.id
    return _add


@pytest.fixture()
def add_vehicle(db):
    def _add(player_id, status="active", vehicle_type="RoboCab", delivery_timestamp=None):
        now = datetime.utcnow()
        vehicle = Vehicle(player_id=player_id, type=vehicle_type, status=status,
                          wear=0, battery=100, mileage=0, tire_mileage=0, cost=Decimal("35000"),
                          lat=AUSTIN[0], lng=AUSTIN[1], purchase_date=now,
                          delivery_timestamp=delivery_timestamp, created_at=now, updated_at=now)
        db.add(vehicle)
        db.commit()
        return vehicle.id
    return _add


@pytest.fixture()
def balance_of(session_factory):
    def _balance(player_id):
        session = session_factory()
        try:
            return session.get(Player, player_id).bank_balance
        finally:
            session.close()
    return _balance


@pytest.fixture()
def client(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(player_id, username="rider"):
    return {"Authorization": f"Bearer {create_access_token(player_id, username)}"}
