#!/usr/bin/env python3
"""
Score a week from the database and list every data-integrity flag.

Read-only: nothing is written back. Repairs are a separate, deliberate step.

Usage: python scripts/audit_week.py --season 2025 --week 3 [--refresh] [--csv out.csv]
"""
import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

# Add backend to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from nerdfootball.db.session import init_db, SessionLocal
from nerdfootball.data.loader import load_season_schedule
from nerdfootball.scoring.reconcile import reconcile_week

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s — %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Audit one week of confidence picks")
    parser.add_argument("--season", type=int, required=True)
    parser.add_argument("--week", type=int, required=True)
    parser.add_argument("--refresh", action="store_true", help="Reload results from nflverse first")
    parser.add_argument("--csv", type=Path, help="Write the leaderboard to this CSV file")
    args = parser.parse_args()

    init_db()
    db = SessionLocal()
    try:
        if args.refresh:
            load_season_schedule(db, args.season, week=args.week)
        report = reconcile_week(db, args.season, args.week)
    finally:
        db.close()

    board = pd.DataFrame([
        {
            "rank": r.rank,
            "user_id": r.score.user_id,
            "points": r.score.total_points,
            "correct": r.score.correct_picks,
            "picks": r.score.total_picks,
            "accuracy": r.score.accuracy,
            "pending": r.score.pending_picks,
            "unresolved": r.score.unresolved_picks,
            "flags": len(r.score.flags),
        }
        for r in report.leaderboard
    ])
    logger.info("Week %d: %d/%d games final, %d members",
                args.week, report.final_games, report.n_games, len(board))
    if not board.empty:
        print(board.to_string(index=False))

    flags = pd.DataFrame([
        {"kind": f.kind.value, "user_id": f.user_id, "game_id": f.game_id, "team": f.team, "detail": f.detail}
        for f in report.flags
    ])
    if flags.empty:
        logger.info("No flags")
    else:
        print(flags.groupby("kind").size().to_string())

    if args.csv:
        board.to_csv(args.csv, index=False)
        logger.info("Leaderboard written to %s", args.csv)


if __name__ == "__main__":
    main()
