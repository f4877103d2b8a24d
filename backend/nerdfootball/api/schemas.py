"""Pydantic schemas for API request/response models."""
from typing import Any, Optional
from pydantic import BaseModel, Field


# ── Games ──────────────────────────────────────────────────────────────────

class GameSchema(BaseModel):
    game_id: str
    week: int
    home_team: str
    away_team: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    status: str
    winner: Optional[str] = None

    model_config = {"from_attributes": True}


class WeekGamesResponse(BaseModel):
    season: int
    week: int
    games: list[GameSchema]


# ── Flags ──────────────────────────────────────────────────────────────────

class FlagSchema(BaseModel):
    kind: str
    category: str
    user_id: str
    week: Optional[int] = None
    game_id: Optional[str] = None
    team: Optional[str] = None
    detail: str = ""


class FlagsResponse(BaseModel):
    season: int
    week: int
    flags: list[FlagSchema]


# ── Confidence pool ────────────────────────────────────────────────────────

class WeeklyScoreSchema(BaseModel):
    rank: int
    user_id: str
    week: int
    total_points: int
    correct_picks: int
    total_picks: int
    accuracy: float
    pending_picks: int
    unresolved_picks: int
    max_possible_points: int
    possible_points: int
    flags: list[FlagSchema] = []


class WeekLeaderboardResponse(BaseModel):
    season: int
    week: int
    n_games: int
    final_games: int
    scores: list[WeeklyScoreSchema]


class StandingSchema(BaseModel):
    rank: int
    user_id: str
    total_points: int
    correct_picks: int
    total_picks: int
    accuracy: float
    weeks_played: int

    model_config = {"from_attributes": True}


class StandingsResponse(BaseModel):
    season: int
    through_week: Optional[int] = None
    standings: list[StandingSchema]


# ── Survivor pool ──────────────────────────────────────────────────────────

class SurvivorWeekSchema(BaseModel):
    week: int
    team: Optional[str] = None
    result: str       # WON / LOST / TIE / PENDING / MISSED / UNRESOLVED / POST_ELIMINATION
    game_id: Optional[str] = None


class SurvivorStatusSchema(BaseModel):
    rank: Optional[int] = None
    user_id: str
    alive: bool
    eliminated_week: Optional[int] = None
    used_teams: list[str] = []
    weeks: list[SurvivorWeekSchema] = []
    flags: list[FlagSchema] = []


class SurvivorBoardResponse(BaseModel):
    season: int
    through_week: Optional[int] = None
    alive: int
    eliminated: int
    entries: list[SurvivorStatusSchema]


# ── Imports ────────────────────────────────────────────────────────────────

class GamesImport(BaseModel):
    """`{game_id: game_document}` as stored by the legacy results feed."""
    games: dict[str, dict[str, Any]]


class PicksImport(BaseModel):
    """Per-member legacy documents keyed by member id."""
    confidence: dict[str, dict[str, Any]] = Field(default_factory=dict)
    survivor: dict[str, dict[str, Any]] = Field(default_factory=dict)


class ImportResponse(BaseModel):
    season: int
    week: int
    rows_written: int
    message: str
