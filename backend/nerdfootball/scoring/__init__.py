from nerdfootball.scoring.confidence import score_week
from nerdfootball.scoring.survivor import compute_status, rank_survivors
from nerdfootball.scoring.leaderboard import (
    aggregate_season,
    rank_standings,
    rank_week,
    season_standings,
    RankedWeek,
)

__all__ = [
    "score_week",
    "compute_status",
    "rank_survivors",
    "aggregate_season",
    "rank_standings",
    "rank_week",
    "season_standings",
    "RankedWeek",
]
