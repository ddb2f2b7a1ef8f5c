#!/usr/bin/env python3
"""
Load rooms and classes into the database from a seed file.

Tables are created if missing. Nothing is loaded when the catalog
already contains rooms.

Usage:
    python scripts/load_seed.py [path/to/catalog.json]
"""
import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlmodel import Session

from app.catalog.service import load_seed_data
from app.core.config import settings
from app.core.database import create_db_and_tables, engine

DEFAULT_SEED_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data", "catalog.json")


def main():
    parser = argparse.ArgumentParser(description="Load the room and class catalog")
    parser.add_argument(
        "path",
        nargs="?",
        default=settings.seed_data_path or DEFAULT_SEED_PATH,
        help="JSON seed file with 'rooms' and 'classes'",
    )
    args = parser.parse_args()

    create_db_and_tables()
    with Session(engine) as session:
        stats = load_seed_data(session, args.path)

    print(f"Loaded {stats['rooms']} rooms and {stats['classes']} classes into {settings.database_url}")


if __name__ == "__main__":
    main()
