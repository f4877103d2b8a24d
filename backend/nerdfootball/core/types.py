"""Plain records passed between the store adapters and the scoring components."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class GameStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    FINAL = "FINAL"


class FlagCategory(str, Enum):
    MALFORMED_INPUT = "MALFORMED_INPUT"
    DATA_INTEGRITY = "DATA_INTEGRITY"
    UNRESOLVED_REFERENCE = "UNRESOLVED_REFERENCE"
    MISSED_PICK = "MISSED_PICK"


class FlagKind(str, Enum):
    MALFORMED_PICK = "MALFORMED_PICK"
    MALFORMED_GAME = "MALFORMED_GAME"
    DUPLICATE_PICK = "DUPLICATE_PICK"
    CONFIDENCE_PERMUTATION = "CONFIDENCE_PERMUTATION"
    REPEATED_TEAM = "REPEATED_TEAM"
    UNRESOLVED_GAME = "UNRESOLVED_GAME"
    UNRESOLVED_TEAM = "UNRESOLVED_TEAM"
    MISSED_PICK = "MISSED_PICK"

    @property
    def category(self) -> FlagCategory:
        return _CATEGORIES[self]


_CATEGORIES = {
    FlagKind.MALFORMED_PICK: FlagCategory.MALFORMED_INPUT,
    FlagKind.MALFORMED_GAME: FlagCategory.MALFORMED_INPUT,
    FlagKind.DUPLICATE_PICK: FlagCategory.DATA_INTEGRITY,
    FlagKind.CONFIDENCE_PERMUTATION: FlagCategory.DATA_INTEGRITY,
    FlagKind.REPEATED_TEAM: FlagCategory.DATA_INTEGRITY,
    FlagKind.UNRESOLVED_GAME: FlagCategory.UNRESOLVED_REFERENCE,
    FlagKind.UNRESOLVED_TEAM: FlagCategory.UNRESOLVED_REFERENCE,
    FlagKind.MISSED_PICK: FlagCategory.MISSED_PICK,
}


@dataclass(frozen=True)
class Flag:
    """One anomaly found while scoring. Reported, never auto-repaired."""
    kind: FlagKind
    user_id: str
    week: Optional[int] = None
    game_id: Optional[str] = None
    team: Optional[str] = None
    detail: str = ""

    @property
    def category(self) -> FlagCategory:
        return self.kind.category


@dataclass(frozen=True)
class Game:
    game_id: str
    week: int
    home_team: str
    away_team: str
    status: GameStatus = GameStatus.SCHEDULED
    winner: Optional[str] = None      # None on a FINAL game means a tie
    home_score: Optional[int] = None
    away_score: Optional[int] = None

    @property
    def is_final(self) -> bool:
        return self.status == GameStatus.FINAL


# Pick fields are typed loosely on purpose: the scorers validate them and
# flag whatever the store hands over in the wrong shape.
@dataclass(frozen=True)
class ConfidencePick:
    user_id: str
    week: Any
    game_id: Any
    team: Any
    confidence: Any


@dataclass(frozen=True)
class SurvivorPick:
    user_id: str
    week: Any
    team: Any


@dataclass
class WeeklyScore:
    user_id: str
    week: int
    total_points: int = 0
    correct_picks: int = 0
    total_picks: int = 0
    accuracy: float = 0.0
    pending_picks: int = 0            # on games not yet final
    unresolved_picks: int = 0         # matched no game / team of the week
    max_possible_points: int = 0
    possible_points: int = 0
    flags: list[Flag] = field(default_factory=list)


@dataclass
class SeasonStanding:
    user_id: str
    total_points: int = 0
    correct_picks: int = 0
    total_picks: int = 0
    accuracy: float = 0.0
    weeks_played: int = 0
    rank: Optional[int] = None


class WeekResult(str, Enum):
    WON = "WON"
    LOST = "LOST"
    TIE = "TIE"
    PENDING = "PENDING"
    MISSED = "MISSED"
    UNRESOLVED = "UNRESOLVED"
    POST_ELIMINATION = "POST_ELIMINATION"


@dataclass(frozen=True)
class SurvivorWeek:
    week: int
    team: Optional[str]
    result: WeekResult
    game_id: Optional[str] = None


@dataclass
class SurvivorStatus:
    user_id: str
    alive: bool = True
    eliminated_week: Optional[int] = None
    weeks: list[SurvivorWeek] = field(default_factory=list)
    flags: list[Flag] = field(default_factory=list)
    rank: Optional[int] = None

    @property
    def used_teams(self) -> list[str]:
        return [w.team for w in self.weeks if w.team is not None]


def as_int(value: Any) -> Optional[int]:
    """Integer value of an int, integral float or digit string; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def accuracy_pct(correct: int, total: int) -> float:
    """Percentage rounded to one decimal; 0 when nothing was picked."""
    if total <= 0:
        return 0.0
    return round(correct / total * 100, 1)
