# scripts/setup/init_db.py
"""
Initialize database - creates all tables, optionally seeds a demo player.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--seed-player NAME --password PW]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text
from app.database import SessionLocal, create_tables, engine
from app.config import settings
from app.services.accounting_service import purchase_garage
from app.services.exceptions import ValidationFailed
from app.services.player_service import create_player


def seed_player(username: str, password: str):
    """Demo player with one starter lot, so the first vehicle purchase has a slot."""
    db = SessionLocal()
    try:
        try:
            player = create_player(db, username, password)
        except ValidationFailed as e:
            print(f"⚠️  {e.detail} - skipping seed")
            return
        garage_id = purchase_garage(db, player.id, "Starter Lot", [30.2672, -97.7431],
                                    capacity=2, kind="lot", cost_monthly=0)
        print(f"✅ Seeded player {player.id} ({username}) with lot {garage_id}")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create CyberTaxi tables")
    parser.add_argument("--seed-player")
    parser.add_argument("--password", default="test123")
    args = parser.parse_args()

    print("🗄️  CyberTaxi DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running, or point DATABASE_URL at SQLite:")
        print("  DATABASE_URL=sqlite:///./cybertaxi.db")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    tables = sorted(inspect(engine).get_table_names())
    print(f"📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if args.seed_player:
        seed_player(args.seed_player, args.password)

    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
