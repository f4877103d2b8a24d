"""API tests: import legacy documents over HTTP, then read the reports back."""

import pytest

SEASON = 2025

WEEK1_GAMES = {
    "101": {"homeTeam": "Buffalo Bills", "awayTeam": "Miami Dolphins",
            "homeScore": 31, "awayScore": 10, "status": "FINAL", "winner": "Buffalo Bills"},
    "102": {"homeTeam": "Denver Broncos", "awayTeam": "Tennessee Titans",
            "homeScore": 20, "awayScore": 12, "status": "STATUS_FINAL"},
    "103": {"homeTeam": "Los Angeles Rams", "awayTeam": "Houston Texans", "status": "Q3"},
    "broken": {"winner": "Nobody"},
}


@pytest.fixture()
def loaded(client):
    resp = client.post(f"/api/games/{SEASON}/1/import", json={"games": WEEK1_GAMES})
    assert resp.status_code == 200
    resp = client.post(f"/api/picks/{SEASON}/1/import", json={
        "confidence": {
            "alice": {
                "101": {"winner": "Buffalo Bills", "confidence": 3},
                "102": {"winner": "Denver Broncos", "confidence": "2"},
                "103": {"winner": "LA Rams", "confidence": 1},
                "submittedAt": "2025-09-04T12:00:00Z",
            },
            "bob": {
                "101": {"winner": "Miami Dolphins", "confidence": 3},
                "102": {"winner": "Denver Broncos", "confidence": 0},
                "103": {"winner": "Houston Texans", "confidence": 1},
            },
        },
        "survivor": {
            "alice": {"picks": {"1": {"team": "Buffalo Bills"}}},
            "bob": {"picks": {"1": {"team": "MIA"}}},
        },
    })
    assert resp.status_code == 200
    return client


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestImports:
    def test_games_import_skips_unusable_documents(self, client):
        resp = client.post(f"/api/games/{SEASON}/1/import", json={"games": WEEK1_GAMES})
        body = resp.json()
        assert body["rows_written"] == 3
        assert "1 skipped" in body["message"]

    def test_games_listing(self, loaded):
        resp = loaded.get(f"/api/games/{SEASON}/1")
        assert resp.status_code == 200
        games = {g["game_id"]: g for g in resp.json()["games"]}
        assert games["102"]["winner"] == "Denver Broncos"
        assert games["102"]["status"] == "FINAL"
        assert games["103"]["status"] == "IN_PROGRESS"
        assert games["103"]["winner"] is None

    def test_unknown_week_is_404(self, client):
        assert client.get(f"/api/games/{SEASON}/9").status_code == 404
        assert client.get(f"/api/confidence/{SEASON}/9").status_code == 404


class TestConfidenceEndpoints:
    def test_week_leaderboard(self, loaded):
        resp = loaded.get(f"/api/confidence/{SEASON}/1")
        assert resp.status_code == 200
        body = resp.json()
        assert body["n_games"] == 3
        assert body["final_games"] == 2
        alice, bob = body["scores"]
        assert alice["user_id"] == "alice" and alice["rank"] == 1
        assert alice["total_points"] == 5
        assert alice["pending_picks"] == 1
        assert alice["possible_points"] == 6
        assert alice["max_possible_points"] == 6
        assert bob["total_points"] == 0
        assert [f["kind"] for f in bob["flags"]] == ["CONFIDENCE_PERMUTATION"]

    def test_standings(self, loaded):
        resp = loaded.get(f"/api/confidence/{SEASON}/standings")
        assert resp.status_code == 200
        standings = resp.json()["standings"]
        assert [(s["user_id"], s["rank"]) for s in standings] == [("alice", 1), ("bob", 2)]
        assert standings[0]["accuracy"] == 66.7
        assert standings[1]["accuracy"] == 33.3

    def test_flags(self, loaded):
        resp = loaded.get(f"/api/flags/{SEASON}/1")
        flags = resp.json()["flags"]
        assert len(flags) == 1
        assert flags[0]["category"] == "DATA_INTEGRITY"
        assert "zero" in flags[0]["detail"]


class TestSurvivorEndpoints:
    def test_board(self, loaded):
        body = loaded.get(f"/api/survivor/{SEASON}").json()
        assert body["alive"] == 1
        assert body["eliminated"] == 1
        assert body["entries"][0]["user_id"] == "alice"
        assert body["entries"][1]["eliminated_week"] == 1

    def test_single_member(self, loaded):
        body = loaded.get(f"/api/survivor/{SEASON}/alice").json()
        assert body["alive"] is True
        assert body["used_teams"] == ["Buffalo Bills"]
        assert body["weeks"] == [
            {"week": 1, "team": "Buffalo Bills", "result": "WON", "game_id": "101"},
        ]

    def test_unknown_member(self, loaded):
        assert loaded.get(f"/api/survivor/{SEASON}/nobody").status_code == 404

    def test_tie_keeps_member_alive(self, client):
        client.post(f"/api/games/{SEASON}/1/import", json={"games": {
            "101": {"homeTeam": "Buffalo Bills", "awayTeam": "Miami Dolphins",
                    "homeScore": 17, "awayScore": 17, "status": "FINAL"},
        }})
        client.post(f"/api/picks/{SEASON}/1/import", json={
            "survivor": {"alice": {"picks": {"1": {"team": "Buffalo Bills"}}}},
        })
        body = client.get(f"/api/survivor/{SEASON}/alice").json()
        assert body["alive"] is True
        assert body["weeks"][0]["result"] == "TIE"

    def test_unparseable_week_surfaces_as_flag(self, loaded):
        resp = loaded.post(f"/api/picks/{SEASON}/1/import", json={
            "survivor": {"carol": {"picks": {"one": {"team": "Buffalo Bills"}}}},
        })
        assert resp.json()["rows_written"] == 1
        body = loaded.get(f"/api/survivor/{SEASON}/carol").json()
        assert [f["kind"] for f in body["flags"]] == ["MALFORMED_PICK"]
        assert body["alive"] is True

    def test_board_lists_survivor_entrants_only(self, loaded):
        loaded.post(f"/api/picks/{SEASON}/1/import", json={
            "confidence": {"carol": {"101": {"winner": "Buffalo Bills", "confidence": 1}}},
        })
        body = loaded.get(f"/api/survivor/{SEASON}").json()
        assert [e["user_id"] for e in body["entries"]] == ["alice", "bob"]
        assert body["alive"] == 1
        assert loaded.get(f"/api/survivor/{SEASON}/carol").status_code == 404
