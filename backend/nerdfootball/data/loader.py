"""
Results feed: turn nflverse schedule rows into games in the database.
Run this to load a season's schedule or refresh results mid-season.
"""
from __future__ import annotations
import logging
import pandas as pd
from sqlalchemy.orm import Session

from nerdfootball.core.teams import NFL_TEAMS
from nerdfootball.core.types import Game, GameStatus
from nerdfootball.db.models import Team
from nerdfootball.data.nflverse import load_schedules
from nerdfootball.data.store import upsert_games

logger = logging.getLogger(__name__)


def seed_teams(db: Session) -> dict[str, int]:
    """Ensure all 32 teams exist in DB. Returns abbr→id mapping."""
    abbr_to_id = {}
    for abbr, full_name in NFL_TEAMS.items():
        team = db.query(Team).filter_by(abbr=abbr).first()
        if not team:
            team = Team(abbr=abbr, full_name=full_name)
            db.add(team)
            db.flush()
        abbr_to_id[abbr] = team.id
    db.commit()
    logger.info("Seeded %d teams", len(abbr_to_id))
    return abbr_to_id


def _score(value) -> int | None:
    return int(value) if pd.notna(value) else None


def games_from_schedule(schedule: pd.DataFrame) -> list[Game]:
    """
    Convert nflverse schedule rows to games. A game with both scores is
    final; equal scores leave the winner empty (a tie).
    """
    games = []
    for _, row in schedule.iterrows():
        home = NFL_TEAMS.get(row["home_team"])
        away = NFL_TEAMS.get(row["away_team"])
        if not home or not away:
            logger.warning("Unknown team in schedule row %s: %s @ %s",
                           row.get("game_id"), row["away_team"], row["home_team"])
            continue

        home_score = _score(row.get("home_score"))
        away_score = _score(row.get("away_score"))
        status = GameStatus.SCHEDULED
        winner = None
        if home_score is not None and away_score is not None:
            status = GameStatus.FINAL
            if home_score > away_score:
                winner = home
            elif away_score > home_score:
                winner = away

        games.append(Game(
            game_id=str(row["game_id"]),
            week=int(row["week"]),
            home_team=home,
            away_team=away,
            status=status,
            winner=winner,
            home_score=home_score,
            away_score=away_score,
        ))
    return games


def load_season_schedule(db: Session, season: int, week: int | None = None) -> int:
    """Load or update schedule/results for a season (optionally one week)."""
    df = load_schedules(seasons=[season])
    if df.empty:
        logger.warning("No schedule data for season %d", season)
        return 0
    if week is not None:
        df = df[df["week"] == week]

    count = upsert_games(db, season, games_from_schedule(df))
    logger.info("Upserted %d games for season %d", count, season)
    return count
