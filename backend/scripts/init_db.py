#!/usr/bin/env python3
"""
Database Initialization Script for Stride

This script:
1. Tests database connectivity
2. Creates any missing tables
3. Seeds catalogue data if requested

Usage:
    python scripts/init_db.py              # Check + create tables
    python scripts/init_db.py --check      # Only check connectivity
    python scripts/init_db.py --seed       # Create tables and seed data
    python scripts/init_db.py --status     # Show table status
"""

import asyncio
import sys
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


async def test_connection() -> bool:
    """Test database connectivity"""
    print("\n[InitDB] Testing database connection...")

    try:
        from sqlalchemy import text
        from stride.core.config import settings
        from stride.core.database import get_engine

        db_url = settings.DATABASE_URL
        print(f"[InitDB] Connecting to: {db_url.split('@')[1] if '@' in db_url else db_url}")

        async with get_engine().connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            result.fetchone()

        print("[InitDB] Database connection successful!")
        return True

    except Exception as e:
        print(f"[InitDB] ERROR: Database connection failed: {e}")
        return False


async def create_tables() -> bool:
    """Create database tables using SQLAlchemy"""
    print("\n[InitDB] Creating/verifying database tables...")

    try:
        from stride.core.database import init_db

        await init_db()

        print("[InitDB] Database tables created/verified!")
        return True

    except Exception as e:
        print(f"[InitDB] ERROR: Table creation failed: {e}")
        import traceback
        traceback.print_exc()
        return False


async def seed_data() -> bool:
    """Seed branches, semesters, subjects and holidays"""
    print("\n[InitDB] Seeding initial data...")

    try:
        from stride.db.seed_data import seed_all

        await seed_all()
        return True

    except Exception as e:
        print(f"[InitDB] WARNING: Seed data failed: {e}")
        return False


async def show_table_status():
    """Show current table status"""
    print("\n[InitDB] Database Table Status:")
    print("-" * 50)

    try:
        from sqlalchemy import inspect
        from stride.core.database import get_engine

        def _describe(sync_conn):
            inspector = inspect(sync_conn)
            return [
                (table, len(inspector.get_columns(table)))
                for table in sorted(inspector.get_table_names())
            ]

        async with get_engine().connect() as conn:
            tables = await conn.run_sync(_describe)

        print(f"Total tables: {len(tables)}")
        print("\nTables:")
        for table, columns in tables:
            print(f"  - {table} ({columns} columns)")

    except Exception as e:
        print(f"[InitDB] Could not inspect tables: {e}")


async def main():
    """Main initialization function"""
    parser = argparse.ArgumentParser(description="Stride Database Initialization")
    parser.add_argument("--check", action="store_true", help="Only check connectivity")
    parser.add_argument("--seed", action="store_true", help="Include seed data")
    parser.add_argument("--status", action="store_true", help="Show table status")

    args = parser.parse_args()

    print("=" * 50)
    print("  Stride - Database Initialization")
    print("=" * 50)

    from stride.core.database import close_db

    try:
        # Always test connection first
        if not await test_connection():
            print("\n[InitDB] FAILED: Cannot connect to database")
            return 1

        if args.check:
            print("\n[InitDB] Connection check completed!")
            return 0

        if args.status:
            await show_table_status()
            return 0

        if not await create_tables():
            print("[InitDB] FAILED: Could not create tables")
            return 1

        success = True
        if args.seed:
            success = await seed_data()

        await show_table_status()

        print("\n" + "=" * 50)
        print("  Database Initialization Complete!")
        print("=" * 50)
        return 0 if success else 1
    finally:
        await close_db()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
