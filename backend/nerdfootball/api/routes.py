"""FastAPI route handlers."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from nerdfootball.db import get_db
from nerdfootball.core.errors import PreconditionError
from nerdfootball.core.types import Flag, SurvivorStatus, WeeklyScore
from nerdfootball.api.schemas import (
    GameSchema, WeekGamesResponse,
    FlagSchema, FlagsResponse,
    WeeklyScoreSchema, WeekLeaderboardResponse,
    StandingSchema, StandingsResponse,
    SurvivorWeekSchema, SurvivorStatusSchema, SurvivorBoardResponse,
    GamesImport, PicksImport, ImportResponse,
)
from nerdfootball.data.documents import (
    confidence_picks_from_document, games_from_week_document, survivor_picks_from_document,
)
from nerdfootball.data.store import (
    load_games, read_snapshot, replace_confidence_picks, replace_survivor_picks, upsert_games,
)
from nerdfootball.scoring.reconcile import reconcile_snapshot
from nerdfootball.scoring.survivor import compute_status

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")


def _flag(f: Flag) -> FlagSchema:
    return FlagSchema(
        kind=f.kind.value,
        category=f.category.value,
        user_id=f.user_id,
        week=f.week,
        game_id=f.game_id,
        team=f.team,
        detail=f.detail,
    )


def _weekly(rank: int, s: WeeklyScore) -> WeeklyScoreSchema:
    return WeeklyScoreSchema(
        rank=rank,
        user_id=s.user_id,
        week=s.week,
        total_points=s.total_points,
        correct_picks=s.correct_picks,
        total_picks=s.total_picks,
        accuracy=s.accuracy,
        pending_picks=s.pending_picks,
        unresolved_picks=s.unresolved_picks,
        max_possible_points=s.max_possible_points,
        possible_points=s.possible_points,
        flags=[_flag(f) for f in s.flags],
    )


def _survivor(s: SurvivorStatus) -> SurvivorStatusSchema:
    return SurvivorStatusSchema(
        rank=s.rank,
        user_id=s.user_id,
        alive=s.alive,
        eliminated_week=s.eliminated_week,
        used_teams=s.used_teams,
        weeks=[
            SurvivorWeekSchema(week=w.week, team=w.team, result=w.result.value, game_id=w.game_id)
            for w in s.weeks
        ],
        flags=[_flag(f) for f in s.flags],
    )


def _week_report(db: Session, season: int, week: int):
    snapshot = read_snapshot(db, season, through_week=week)
    if not snapshot.games_for_week(week):
        raise HTTPException(status_code=404, detail=f"No games found for season {season} week {week}")
    try:
        report = reconcile_snapshot(snapshot, weeks=[week], include_survivor=False)
    except PreconditionError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return report.weeks[week]


def _season_report(db: Session, season: int, through_week: Optional[int]):
    snapshot = read_snapshot(db, season, through_week=through_week)
    if not snapshot.games:
        raise HTTPException(status_code=404, detail=f"No games found for season {season}")
    try:
        return reconcile_snapshot(snapshot)
    except PreconditionError as e:
        raise HTTPException(status_code=422, detail=str(e))


# ── Games ──────────────────────────────────────────────────────────────────

@router.get("/games/{season}/{week}", response_model=WeekGamesResponse)
def get_week_games(season: int, week: int, db: Session = Depends(get_db)):
    games = load_games(db, season, week=week)
    if not games:
        raise HTTPException(status_code=404, detail=f"No games found for season {season} week {week}")
    return WeekGamesResponse(
        season=season,
        week=week,
        games=[
            GameSchema(
                game_id=g.game_id,
                week=g.week,
                home_team=g.home_team,
                away_team=g.away_team,
                home_score=g.home_score,
                away_score=g.away_score,
                status=g.status.value,
                winner=g.winner,
            )
            for g in games
        ],
    )


@router.post("/games/{season}/{week}/import", response_model=ImportResponse)
def import_games(season: int, week: int, body: GamesImport, db: Session = Depends(get_db)):
    games = games_from_week_document(week, body.games)
    written = upsert_games(db, season, games)
    skipped = len(body.games) - len(games)
    if skipped:
        logger.warning("Skipped %d unusable game documents for week %d", skipped, week)
    return ImportResponse(
        season=season,
        week=week,
        rows_written=written,
        message=f"Imported {written} games ({skipped} skipped)",
    )


# ── Picks ──────────────────────────────────────────────────────────────────

@router.post("/picks/{season}/{week}/import", response_model=ImportResponse)
def import_picks(season: int, week: int, body: PicksImport, db: Session = Depends(get_db)):
    """
    Store legacy pick documents as-is. Confidence documents replace the
    member's picks for `week`; survivor documents replace the season history.
    Nothing is repaired here: anomalies show up as flags when scoring.
    """
    written = 0
    for member_id, doc in body.confidence.items():
        picks = confidence_picks_from_document(member_id, week, doc)
        written += replace_confidence_picks(db, season, week, member_id, picks)
    for member_id, doc in body.survivor.items():
        picks = survivor_picks_from_document(member_id, doc)
        written += replace_survivor_picks(db, season, member_id, picks)

    return ImportResponse(
        season=season,
        week=week,
        rows_written=written,
        message=f"Imported picks for {len(body.confidence)} confidence and "
                f"{len(body.survivor)} survivor members",
    )


# ── Confidence pool ────────────────────────────────────────────────────────

@router.get("/confidence/{season}/standings", response_model=StandingsResponse)
def get_standings(season: int, through_week: Optional[int] = None, db: Session = Depends(get_db)):
    report = _season_report(db, season, through_week)
    return StandingsResponse(
        season=season,
        through_week=through_week,
        standings=[StandingSchema.model_validate(s) for s in report.standings],
    )


@router.get("/confidence/{season}/{week}", response_model=WeekLeaderboardResponse)
def get_week_leaderboard(season: int, week: int, db: Session = Depends(get_db)):
    report = _week_report(db, season, week)
    return WeekLeaderboardResponse(
        season=season,
        week=week,
        n_games=report.n_games,
        final_games=report.final_games,
        scores=[_weekly(r.rank, r.score) for r in report.leaderboard],
    )


# ── Survivor pool ──────────────────────────────────────────────────────────

@router.get("/survivor/{season}", response_model=SurvivorBoardResponse)
def get_survivor_board(season: int, through_week: Optional[int] = None, db: Session = Depends(get_db)):
    report = _season_report(db, season, through_week)
    alive = sum(1 for s in report.survivors if s.alive)
    return SurvivorBoardResponse(
        season=season,
        through_week=through_week,
        alive=alive,
        eliminated=len(report.survivors) - alive,
        entries=[_survivor(s) for s in report.survivors],
    )


@router.get("/survivor/{season}/{user_id}", response_model=SurvivorStatusSchema)
def get_survivor_status(
    season: int,
    user_id: str,
    through_week: Optional[int] = None,
    db: Session = Depends(get_db),
):
    snapshot = read_snapshot(db, season, through_week=through_week)
    if user_id not in snapshot.survivor_members and user_id not in snapshot.survivor:
        raise HTTPException(status_code=404, detail=f"Member {user_id} not found")
    try:
        status = compute_status(user_id, snapshot.survivor.get(user_id, []), snapshot.games)
    except PreconditionError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _survivor(status)


# ── Diagnostics ────────────────────────────────────────────────────────────

@router.get("/flags/{season}/{week}", response_model=FlagsResponse)
def get_week_flags(season: int, week: int, db: Session = Depends(get_db)):
    report = _week_report(db, season, week)
    return FlagsResponse(season=season, week=week, flags=[_flag(f) for f in report.flags])
