"""Tests for legacy document adapters."""

import pytest

from nerdfootball.core.types import GameStatus
from nerdfootball.data.documents import (
    confidence_picks_from_document,
    game_from_document,
    games_from_week_document,
    parse_status,
    survivor_picks_from_document,
    survivor_picks_from_history,
)


class TestParseStatus:
    @pytest.mark.parametrize("raw", ["FINAL", "Final", "F", "STATUS_FINAL", "final/ot"])
    def test_final_spellings(self, raw):
        assert parse_status(raw) == GameStatus.FINAL

    @pytest.mark.parametrize("raw", ["Q3", "Halftime", "STATUS_IN_PROGRESS", "live"])
    def test_live_spellings(self, raw):
        assert parse_status(raw) == GameStatus.IN_PROGRESS

    def test_other_is_scheduled(self):
        assert parse_status("Not Started") == GameStatus.SCHEDULED

    def test_missing(self):
        assert parse_status(None) is None


class TestGameDocument:
    def test_final_with_winner(self):
        game = game_from_document(101, 1, {
            "homeTeam": "Buffalo Bills", "awayTeam": "Miami Dolphins",
            "homeScore": 31, "awayScore": 10, "status": "FINAL", "winner": "Buffalo Bills",
        })
        assert game.game_id == "101"
        assert game.is_final
        assert game.winner == "Buffalo Bills"

    def test_winner_derived_from_scores(self):
        game = game_from_document("102", 1, {
            "home_team": "Denver Broncos", "away_team": "Kansas City Chiefs",
            "home_score": "17", "away_score": "24", "status": "Final",
        })
        assert game.winner == "Kansas City Chiefs"
        assert game.home_score == 17

    def test_equal_scores_is_a_tie(self):
        game = game_from_document("103", 1, {
            "homeTeam": "A", "awayTeam": "B", "homeScore": 20, "awayScore": 20, "status": "FINAL",
        })
        assert game.is_final
        assert game.winner is None

    def test_tie_sentinel_and_tbd(self):
        tie = game_from_document("1", 1, {"homeTeam": "A", "awayTeam": "B", "status": "FINAL", "winner": "TIE"})
        tbd = game_from_document("2", 1, {"homeTeam": "A", "awayTeam": "B", "status": "Q2", "winner": "TBD"})
        assert tie.winner is None
        assert tbd.winner is None
        assert tbd.status == GameStatus.IN_PROGRESS

    def test_statusless_document_with_winner_and_score_is_final(self):
        game = game_from_document("1", 1, {
            "homeTeam": "A", "awayTeam": "B", "winner": "A", "homeScore": 3, "awayScore": 0,
        })
        assert game.is_final

    def test_winner_ignored_until_final(self):
        game = game_from_document("1", 1, {"homeTeam": "A", "awayTeam": "B", "status": "Q4", "winner": "A"})
        assert game.winner is None

    def test_missing_teams(self):
        assert game_from_document("1", 1, {"winner": "A"}) is None

    def test_week_document_skips_metadata(self):
        games = games_from_week_document(1, {
            "101": {"homeTeam": "A", "awayTeam": "B"},
            "lastUpdated": "2025-09-23T15:47:27.198Z",
        })
        assert [g.game_id for g in games] == ["101"]


class TestConfidenceDocument:
    def test_mixed_field_names_and_metadata(self):
        picks = confidence_picks_from_document("u1", 3, {
            "301": {"winner": "Buffalo Bills", "confidence": 5},
            "302": {"team": "LA Rams", "confidence": "4"},
            "303": {"winner": "Dallas Cowboys", "confidence": "high"},
            "mondayNightPoints": 41,
            "submittedAt": "2025-09-18T12:00:00Z",
            "userInfo": {"displayName": "Tony"},
        })
        assert [(p.game_id, p.team, p.confidence) for p in picks] == [
            ("301", "Buffalo Bills", 5),
            ("302", "LA Rams", 4),
            ("303", "Dallas Cowboys", "high"),
        ]
        assert all(p.week == 3 and p.user_id == "u1" for p in picks)

    def test_nested_picks_key(self):
        picks = confidence_picks_from_document("u1", 1, {"picks": {"101": {"winner": "A", "confidence": 1}}})
        assert len(picks) == 1


class TestSurvivorDocument:
    def test_week_map(self):
        picks = survivor_picks_from_document("u1", {"picks": {
            "1": {"team": "Denver Broncos"}, "2": "Buffalo Bills", "bad": {"team": "X"},
        }})
        assert [(p.week, p.team) for p in picks] == [(1, "Denver Broncos"), (2, "Buffalo Bills"), ("bad", "X")]

    def test_history_string(self):
        picks = survivor_picks_from_history("u1", "Denver Broncos, Buffalo Bills ,")
        assert [(p.week, p.team) for p in picks] == [(1, "Denver Broncos"), (2, "Buffalo Bills")]

    def test_empty_history(self):
        assert survivor_picks_from_history("u1", "  ") == []
