"""Tests for turning nflverse schedule rows into games."""

import pandas as pd

from nerdfootball.core.types import GameStatus
from nerdfootball.data import loader
from nerdfootball.data.store import load_games
from nerdfootball.db.models import Team


def _schedule():
    return pd.DataFrame([
        {"game_id": "2025_01_DAL_PHI", "season": 2025, "week": 1, "game_type": "REG",
         "home_team": "PHI", "away_team": "DAL", "home_score": 24.0, "away_score": 20.0},
        {"game_id": "2025_01_KC_LAC", "season": 2025, "week": 1, "game_type": "REG",
         "home_team": "LAC", "away_team": "KC", "home_score": 27.0, "away_score": 21.0},
        {"game_id": "2025_01_NYG_WAS", "season": 2025, "week": 1, "game_type": "REG",
         "home_team": "WAS", "away_team": "NYG", "home_score": 17.0, "away_score": 17.0},
        {"game_id": "2025_02_BUF_NYJ", "season": 2025, "week": 2, "game_type": "REG",
         "home_team": "NYJ", "away_team": "BUF", "home_score": float("nan"), "away_score": float("nan")},
        {"game_id": "2025_02_XXX_ARI", "season": 2025, "week": 2, "game_type": "REG",
         "home_team": "ARI", "away_team": "XXX", "home_score": float("nan"), "away_score": float("nan")},
    ])


class TestGamesFromSchedule:
    def test_status_and_winner(self):
        games = {g.game_id: g for g in loader.games_from_schedule(_schedule())}
        eagles = games["2025_01_DAL_PHI"]
        assert eagles.is_final
        assert eagles.winner == "Philadelphia Eagles"
        assert eagles.home_score == 24
        assert games["2025_01_KC_LAC"].winner == "Los Angeles Chargers"

    def test_tie_has_no_winner(self):
        games = {g.game_id: g for g in loader.games_from_schedule(_schedule())}
        tie = games["2025_01_NYG_WAS"]
        assert tie.is_final
        assert tie.winner is None

    def test_unplayed_game_is_scheduled(self):
        games = {g.game_id: g for g in loader.games_from_schedule(_schedule())}
        assert games["2025_02_BUF_NYJ"].status == GameStatus.SCHEDULED
        assert games["2025_02_BUF_NYJ"].away_team == "Buffalo Bills"

    def test_unknown_team_skipped(self):
        ids = [g.game_id for g in loader.games_from_schedule(_schedule())]
        assert "2025_02_XXX_ARI" not in ids


class TestLoadSeasonSchedule:
    def test_loads_one_week(self, db, monkeypatch):
        monkeypatch.setattr(loader, "load_schedules", lambda seasons: _schedule())
        assert loader.load_season_schedule(db, 2025, week=1) == 3
        assert len(load_games(db, 2025)) == 3

    def test_empty_feed(self, db, monkeypatch):
        monkeypatch.setattr(loader, "load_schedules", lambda seasons: pd.DataFrame())
        assert loader.load_season_schedule(db, 2025) == 0


def test_seed_teams(db):
    mapping = loader.seed_teams(db)
    assert len(mapping) == 32
    assert db.query(Team).filter_by(abbr="NYJ").one().full_name == "New York Jets"
    assert loader.seed_teams(db) == mapping
