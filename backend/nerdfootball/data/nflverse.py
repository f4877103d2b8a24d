"""
Load schedules and results from nflverse-data GitHub releases (parquet files).
Pure pandas + pyarrow.
"""
import logging
import time
from pathlib import Path
from typing import Optional
import pandas as pd
import requests

from nerdfootball.config import settings
from nerdfootball.core.teams import LEGACY_ABBRS

logger = logging.getLogger(__name__)

NFLVERSE_BASE = "https://github.com/nflverse/nflverse-data/releases/download"
SCHEDULES_URL = f"{NFLVERSE_BASE}/schedules/schedules.parquet"

REGULAR_AND_POST = ["REG", "WC", "DIV", "CON", "SB"]


def _cache_dir() -> Path:
    path = Path(settings.cache_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _cached_parquet(url: str, cache_name: str, max_age_hours: int = 24) -> pd.DataFrame:
    cache_path = _cache_dir() / f"{cache_name}.parquet"
    if cache_path.exists():
        age_hours = (time.time() - cache_path.stat().st_mtime) / 3600
        if age_hours < max_age_hours:
            logger.debug("Loading %s from cache", cache_name)
            return pd.read_parquet(cache_path)

    logger.info("Downloading %s from %s", cache_name, url)
    resp = requests.get(url, timeout=120, headers={"User-Agent": "nerdfootball/0.1"})
    resp.raise_for_status()
    cache_path.write_bytes(resp.content)
    return pd.read_parquet(cache_path)


def load_schedules(
    seasons: Optional[list[int]] = None,
    max_age_hours: int = 6,
    regular_season_only: bool = True,
) -> pd.DataFrame:
    """
    Return schedule DataFrame with columns including:
    game_id, season, week, game_type, gameday, home_team, away_team,
    home_score, away_score
    """
    df = _cached_parquet(SCHEDULES_URL, "schedules", max_age_hours=max_age_hours)
    df["home_team"] = df["home_team"].map(lambda x: LEGACY_ABBRS.get(x, x))
    df["away_team"] = df["away_team"].map(lambda x: LEGACY_ABBRS.get(x, x))

    game_types = ["REG"] if regular_season_only else REGULAR_AND_POST
    df = df[df["game_type"].isin(game_types)].copy()

    if seasons:
        df = df[df["season"].isin(seasons)]

    return df.reset_index(drop=True)
