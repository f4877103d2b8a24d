#!/usr/bin/env python3
"""
One-time setup script:
  1. Initialize the database
  2. Seed the 32 teams
  3. Load schedule/results for the given seasons from nflverse

Usage: python scripts/setup.py [--seasons 2024 2025] [--skip-schedule]
"""
import argparse
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from nerdfootball.db.session import init_db, SessionLocal
from nerdfootball.data.loader import load_season_schedule, seed_teams

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s — %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="NerdFootball setup")
    parser.add_argument(
        "--seasons", nargs="+", type=int, default=[2025],
        help="Seasons to load (default: 2025)"
    )
    parser.add_argument(
        "--skip-schedule", action="store_true",
        help="Skip schedule download (use if already loaded)"
    )
    args = parser.parse_args()

    logger.info("=== NerdFootball Setup ===")

    logger.info("Step 1: Initializing database")
    init_db()

    db = SessionLocal()
    try:
        logger.info("Step 2: Seeding teams")
        seed_teams(db)

        if not args.skip_schedule:
            for season in args.seasons:
                logger.info("Step 3: Loading schedule for season %d", season)
                load_season_schedule(db, season)
        else:
            logger.info("Step 3: Skipping schedule load")
    finally:
        db.close()

    logger.info("=== Setup complete! ===")
    logger.info("Start the API server: uvicorn nerdfootball.main:app --reload")


if __name__ == "__main__":
    main()
