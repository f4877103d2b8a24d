"""Season aggregation and ranking for the confidence pool."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from nerdfootball.core.errors import UserMismatchError
from nerdfootball.core.types import SeasonStanding, WeeklyScore, accuracy_pct


@dataclass(frozen=True)
class RankedWeek:
    rank: int
    score: WeeklyScore


def aggregate_season(user_id: str, weekly_scores: Iterable[WeeklyScore]) -> SeasonStanding:
    """
    Sum one user's weekly scores. Accuracy is recomputed from the season
    totals, not averaged across weeks.
    """
    standing = SeasonStanding(user_id=user_id)
    for score in weekly_scores:
        if score.user_id != user_id:
            raise UserMismatchError(user_id, score.user_id)
        standing.total_points += score.total_points
        standing.correct_picks += score.correct_picks
        standing.total_picks += score.total_picks
        if score.total_picks:
            standing.weeks_played += 1
    standing.accuracy = accuracy_pct(standing.correct_picks, standing.total_picks)
    return standing


def _order_key(points: int, accuracy: float, user_id: str) -> tuple:
    return (-points, -accuracy, user_id)


def rank_standings(standings: Iterable[SeasonStanding]) -> list[SeasonStanding]:
    """
    Order by points (desc), accuracy (desc), then user id (asc).

    The user id tie-break makes the order total, so any permutation of the
    same input ranks identically. Returns copies with `rank` set.
    """
    ordered = sorted(
        standings, key=lambda s: _order_key(s.total_points, s.accuracy, s.user_id)
    )
    return [replace(s, rank=i) for i, s in enumerate(ordered, start=1)]


def rank_week(scores: Iterable[WeeklyScore], week: Optional[int] = None) -> list[RankedWeek]:
    ordered = sorted(
        (s for s in scores if week is None or s.week == week),
        key=lambda s: _order_key(s.total_points, s.accuracy, s.user_id),
    )
    return [RankedWeek(rank=i, score=s) for i, s in enumerate(ordered, start=1)]


def season_standings(scores: Iterable[WeeklyScore]) -> list[SeasonStanding]:
    """Group weekly scores by user, aggregate, and rank."""
    by_user: dict[str, list[WeeklyScore]] = {}
    for score in scores:
        by_user.setdefault(score.user_id, []).append(score)
    return rank_standings(
        aggregate_season(user_id, user_scores) for user_id, user_scores in by_user.items()
    )
