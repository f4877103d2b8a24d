from nerdfootball.db.session import engine, SessionLocal, init_db, get_db, make_engine
from nerdfootball.db.models import (
    Base, Team, Member, Game, ConfidencePickRow, SurvivorPickRow,
)

__all__ = [
    "engine", "SessionLocal", "init_db", "get_db", "make_engine",
    "Base", "Team", "Member", "Game", "ConfidencePickRow", "SurvivorPickRow",
]
