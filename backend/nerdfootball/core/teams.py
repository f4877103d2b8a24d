"""
Team name normalization.

Every pick-vs-result comparison goes through `normalize`, so "LA Rams",
"LAR", "Rams" and "Los Angeles Rams" all compare equal.
"""
from typing import Any

NFL_TEAMS = {
    "ARI": "Arizona Cardinals",    "ATL": "Atlanta Falcons",
    "BAL": "Baltimore Ravens",     "BUF": "Buffalo Bills",
    "CAR": "Carolina Panthers",    "CHI": "Chicago Bears",
    "CIN": "Cincinnati Bengals",   "CLE": "Cleveland Browns",
    "DAL": "Dallas Cowboys",       "DEN": "Denver Broncos",
    "DET": "Detroit Lions",        "GB":  "Green Bay Packers",
    "HOU": "Houston Texans",       "IND": "Indianapolis Colts",
    "JAX": "Jacksonville Jaguars", "KC":  "Kansas City Chiefs",
    "LAC": "Los Angeles Chargers", "LAR": "Los Angeles Rams",
    "LV":  "Las Vegas Raiders",    "MIA": "Miami Dolphins",
    "MIN": "Minnesota Vikings",    "NE":  "New England Patriots",
    "NO":  "New Orleans Saints",   "NYG": "New York Giants",
    "NYJ": "New York Jets",        "PHI": "Philadelphia Eagles",
    "PIT": "Pittsburgh Steelers",  "SEA": "Seattle Seahawks",
    "SF":  "San Francisco 49ers",  "TB":  "Tampa Bay Buccaneers",
    "TEN": "Tennessee Titans",     "WAS": "Washington Commanders",
}

# Relocated / renamed franchises and feed-specific abbreviations
LEGACY_ABBRS = {
    "JAC": "JAX", "LA": "LAR", "STL": "LAR", "SD": "LAC",
    "OAK": "LV", "LVR": "LV", "WSH": "WAS", "GNB": "GB",
    "KAN": "KC", "NWE": "NE", "NOR": "NO", "SFO": "SF", "TAM": "TB",
}

# Short forms seen in ESPN feeds and hand-entered picks
SHORT_NAMES = {
    "NE Patriots": "NE",   "NY Jets": "NYJ",      "NY Giants": "NYG",
    "SF 49ers": "SF",      "TB Buccaneers": "TB", "LV Raiders": "LV",
    "LA Rams": "LAR",      "LA Chargers": "LAC",  "GB Packers": "GB",
    "KC Chiefs": "KC",     "NO Saints": "NO",     "Vegas Raiders": "LV",
    "Washington": "WAS",   "Washington Football Team": "WAS",
    "Washington Redskins": "WAS",
    "Oakland Raiders": "LV",    "San Diego Chargers": "LAC",
    "St. Louis Rams": "LAR",    "St Louis Rams": "LAR",
}

TIE = "TIE"


def _build_lookup() -> dict[str, str]:
    lookup: dict[str, str] = {}
    for abbr, full_name in NFL_TEAMS.items():
        lookup[abbr.lower()] = full_name
        lookup[full_name.lower()] = full_name
        nickname = full_name.rsplit(" ", 1)[-1]
        lookup[nickname.lower()] = full_name
    for legacy, abbr in LEGACY_ABBRS.items():
        lookup[legacy.lower()] = NFL_TEAMS[abbr]
    for short, abbr in SHORT_NAMES.items():
        lookup[short.lower()] = NFL_TEAMS[abbr]
    return lookup


_LOOKUP = _build_lookup()


def normalize(raw_name: Any) -> Any:
    """
    Map a team spelling to its canonical full name.

    Unknown names (and non-string input) come back verbatim, so two picks
    using the same unrecognised spelling still compare equal. Never raises.
    """
    if not isinstance(raw_name, str):
        return raw_name
    key = " ".join(raw_name.split()).lower()
    return _LOOKUP.get(key, raw_name)


def same_team(a: Any, b: Any) -> bool:
    if a is None or b is None:
        return False
    return normalize(a) == normalize(b)


def abbr_for(name: str) -> str | None:
    """Canonical abbreviation for a team name, or None when unknown."""
    canonical = normalize(name)
    for abbr, full_name in NFL_TEAMS.items():
        if full_name == canonical:
            return abbr
    return None
