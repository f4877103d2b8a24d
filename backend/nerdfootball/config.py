"""Runtime settings, read from the environment."""
import os
from dataclasses import dataclass, field
from pathlib import Path

# Project root data/ directory
DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def _split(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


@dataclass
class Settings:
    db_url: str = field(default_factory=lambda: os.getenv(
        "NERDFOOTBALL_DB_URL", f"sqlite:///{DATA_DIR / 'nerdfootball.db'}"
    ))
    cache_dir: Path = field(default_factory=lambda: Path(os.getenv(
        "NERDFOOTBALL_CACHE_DIR", str(DATA_DIR / "cache")
    )))
    cors_origins: list[str] = field(default_factory=lambda: _split(os.getenv(
        "NERDFOOTBALL_CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"
    )))
    max_workers: int = field(default_factory=lambda: int(os.getenv("NERDFOOTBALL_MAX_WORKERS", "8")))


settings = Settings()
