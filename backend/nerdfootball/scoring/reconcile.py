"""
Season reconciliation: read one snapshot from the store and run the
confidence scorer and leaderboard for confidence entrants and the survivor
engine for survivor entrants. Each pool only sees members who entered it.

Members are independent, so per-member work is fanned out to a thread pool;
results are re-ordered by member id so reports are deterministic.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from nerdfootball.config import settings
from nerdfootball.core.types import Flag, SeasonStanding, SurvivorStatus, WeeklyScore
from nerdfootball.data.store import Snapshot, read_snapshot
from nerdfootball.scoring.confidence import score_week
from nerdfootball.scoring.leaderboard import RankedWeek, rank_week, season_standings
from nerdfootball.scoring.survivor import compute_status, rank_survivors

logger = logging.getLogger(__name__)


@dataclass
class WeekReport:
    season: int
    week: int
    n_games: int
    final_games: int
    leaderboard: list[RankedWeek] = field(default_factory=list)

    @property
    def flags(self) -> list[Flag]:
        return [f for r in self.leaderboard for f in r.score.flags]


@dataclass
class SeasonReport:
    season: int
    through_week: Optional[int]
    weeks: dict[int, WeekReport] = field(default_factory=dict)
    standings: list[SeasonStanding] = field(default_factory=list)
    survivors: list[SurvivorStatus] = field(default_factory=list)

    @property
    def flags(self) -> list[Flag]:
        flags = [f for w in self.weeks.values() for f in w.flags]
        flags.extend(f for s in self.survivors for f in s.flags)
        return flags


def _confidence_members(snapshot: Snapshot) -> list[str]:
    """Confidence entrants plus anyone with confidence picks (so orphaned picks still surface)."""
    return sorted(set(snapshot.confidence_members) | set(snapshot.confidence))


def _survivor_members(snapshot: Snapshot) -> list[str]:
    return sorted(set(snapshot.survivor_members) | set(snapshot.survivor))


def _score_member_weeks(snapshot: Snapshot, user_id: str, weeks: list[int]) -> list[WeeklyScore]:
    return [
        score_week(user_id, week, snapshot.confidence_for(user_id, week), snapshot.games_for_week(week))
        for week in weeks
    ]


def _log_flags(flags: list[Flag]) -> None:
    for flag in flags:
        logger.warning(
            "%s user=%s week=%s game=%s team=%s: %s",
            flag.kind.value, flag.user_id, flag.week, flag.game_id, flag.team, flag.detail,
        )


def reconcile_snapshot(
    snapshot: Snapshot,
    weeks: Optional[list[int]] = None,
    max_workers: Optional[int] = None,
    include_survivor: bool = True,
) -> SeasonReport:
    weeks = weeks if weeks is not None else snapshot.weeks()
    confidence_members = _confidence_members(snapshot)
    survivor_members = _survivor_members(snapshot) if include_survivor else []
    workers = max_workers or settings.max_workers

    with ThreadPoolExecutor(max_workers=workers) as pool:
        weekly = list(pool.map(
            lambda u: _score_member_weeks(snapshot, u, weeks), confidence_members
        ))
        survivors = list(pool.map(
            lambda u: compute_status(u, snapshot.survivor.get(u, []), snapshot.games),
            survivor_members,
        ))

    report = SeasonReport(season=snapshot.season, through_week=snapshot.through_week)
    all_scores = [s for user_scores in weekly for s in user_scores]
    for week in weeks:
        week_games = snapshot.games_for_week(week)
        report.weeks[week] = WeekReport(
            season=snapshot.season,
            week=week,
            n_games=len(week_games),
            final_games=sum(1 for g in week_games if g.is_final),
            leaderboard=rank_week(all_scores, week),
        )
    report.standings = season_standings(all_scores)
    report.survivors = rank_survivors(survivors)

    _log_flags(report.flags)
    logger.info(
        "Reconciled season %d weeks %s for %d members (%d flags)",
        snapshot.season, weeks, len(set(confidence_members) | set(survivor_members)),
        len(report.flags),
    )
    return report


def reconcile_season(db: Session, season: int, through_week: Optional[int] = None) -> SeasonReport:
    snapshot = read_snapshot(db, season, through_week=through_week)
    return reconcile_snapshot(snapshot)


def reconcile_week(db: Session, season: int, week: int) -> WeekReport:
    """Score a single week. Survivor status needs the whole history, so it is not included."""
    snapshot = read_snapshot(db, season, through_week=week)
    return reconcile_snapshot(snapshot, weeks=[week], include_survivor=False).weeks[week]
