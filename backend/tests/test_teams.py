"""Tests for team name normalization."""

import pytest

from nerdfootball.core.teams import NFL_TEAMS, abbr_for, normalize, same_team


class TestNormalize:
    @pytest.mark.parametrize("raw, expected", [
        ("LA Rams", "Los Angeles Rams"),
        ("NY Jets", "New York Jets"),
        ("NY Giants", "New York Giants"),
        ("SF 49ers", "San Francisco 49ers"),
        ("TB Buccaneers", "Tampa Bay Buccaneers"),
        ("LV Raiders", "Las Vegas Raiders"),
        ("Vegas Raiders", "Las Vegas Raiders"),
        ("LA Chargers", "Los Angeles Chargers"),
        ("NE Patriots", "New England Patriots"),
        ("KC", "Kansas City Chiefs"),
        ("JAC", "Jacksonville Jaguars"),
        ("OAK", "Las Vegas Raiders"),
        ("Rams", "Los Angeles Rams"),
        ("  buffalo   bills ", "Buffalo Bills"),
    ])
    def test_known_aliases(self, raw, expected):
        assert normalize(raw) == expected

    def test_canonical_names_are_fixed_points(self):
        for full_name in NFL_TEAMS.values():
            assert normalize(full_name) == full_name

    def test_unknown_name_passes_through_verbatim(self):
        assert normalize("Springfield Atoms") == "Springfield Atoms"
        assert normalize(" Springfield Atoms") == " Springfield Atoms"

    def test_never_raises_on_odd_input(self):
        assert normalize(None) is None
        assert normalize(42) == 42
        assert normalize("") == ""


class TestSameTeam:
    def test_alias_and_full_name_match(self):
        assert same_team("LA Rams", "Los Angeles Rams")

    def test_identical_unknown_spellings_match(self):
        assert same_team("Springfield Atoms", "Springfield Atoms")

    def test_none_never_matches(self):
        assert not same_team(None, None)
        assert not same_team("Buffalo Bills", None)

    def test_different_teams(self):
        assert not same_team("LA Rams", "LA Chargers")


def test_abbr_for():
    assert abbr_for("NY Jets") == "NYJ"
    assert abbr_for("Springfield Atoms") is None
