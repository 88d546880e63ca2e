#!/usr/bin/env python3
"""
Database bootstrap script.

Creates all tables and indexes, then seeds:
- the default product categories (shal, roosari, satin, cotton, silk)
- the system notification templates

Existing categories (by slug) and templates (by name) are left untouched, so
the script can be run repeatedly.

Usage:
    python scripts/init_database.py [--skip-seed]
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shopadmin.database import close_db, get_db_context, init_db
from shopadmin.services.bootstrap_service import get_bootstrap_service


async def init_database(skip_seed: bool = False) -> bool:
    """Create the schema and seed default data."""
    print("\n" + "=" * 50)
    print("Shal & Roosari database bootstrap")
    print("=" * 50)

    print("\n=== Creating tables and indexes ===")
    await init_db()
    print("Tables and indexes created")

    if skip_seed:
        print("\nSkipping seed data (--skip-seed)")
        return True

    service = get_bootstrap_service()
    async with get_db_context() as db:
        print("\n=== Seeding default categories ===")
        categories = await service.seed_default_categories(db)
        print(f"  Created {categories} categories")

        print("\n=== Seeding system notification templates ===")
        templates = await service.seed_system_templates(db)
        print(f"  Created {templates} templates")

    print("\n" + "=" * 50)
    print("Database initialized successfully!")
    print("=" * 50 + "\n")
    return True


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Create tables and seed the admin database")
    parser.add_argument("--skip-seed", action="store_true", help="Only create tables and indexes")

    args = parser.parse_args()

    try:
        success = await init_database(skip_seed=args.skip_seed)
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\nAborted by user.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
