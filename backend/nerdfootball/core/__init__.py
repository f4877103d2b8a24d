from nerdfootball.core.teams import normalize, same_team, NFL_TEAMS, TIE
from nerdfootball.core.types import (
    Game, GameStatus, ConfidencePick, SurvivorPick,
    WeeklyScore, SeasonStanding, SurvivorStatus, SurvivorWeek, WeekResult,
    Flag, FlagKind, FlagCategory, accuracy_pct, as_int,
)
from nerdfootball.core.errors import (
    PreconditionError, MissingGamesError, WeekMismatchError, UserMismatchError,
)

__all__ = [
    "normalize", "same_team", "NFL_TEAMS", "TIE",
    "Game", "GameStatus", "ConfidencePick", "SurvivorPick",
    "WeeklyScore", "SeasonStanding", "SurvivorStatus", "SurvivorWeek", "WeekResult",
    "Flag", "FlagKind", "FlagCategory", "accuracy_pct", "as_int",
    "PreconditionError", "MissingGamesError", "WeekMismatchError", "UserMismatchError",
]
