from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime,
    ForeignKey, UniqueConstraint, Index,
)
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True)
    abbr = Column(String(5), unique=True, nullable=False)   # e.g. "KC"
    full_name = Column(String(50), nullable=False)           # e.g. "Kansas City Chiefs"


class Member(Base):
    """A pool member. Inactive members are kept for history but not scored."""
    __tablename__ = "members"

    id = Column(String(64), primary_key=True)               # auth uid
    display_name = Column(String(100))
    email = Column(String(200))
    is_active = Column(Boolean, default=True)
    # pools the member entered; each pool only scores its own entrants
    confidence_enabled = Column(Boolean, default=False, nullable=False)
    survivor_enabled = Column(Boolean, default=False, nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow)

    confidence_picks = relationship("ConfidencePickRow", back_populates="member")
    survivor_picks = relationship("SurvivorPickRow", back_populates="member")


class Game(Base):
    __tablename__ = "games"
    __table_args__ = (
        UniqueConstraint("season", "game_id", name="uq_game"),
        Index("ix_games_season_week", "season", "week"),
    )

    id = Column(Integer, primary_key=True)
    season = Column(Integer, nullable=False)
    week = Column(Integer, nullable=False)
    game_id = Column(String(32), nullable=False)    # feed id, e.g. "101" or ESPN id
    home_team = Column(String(50), nullable=False)
    away_team = Column(String(50), nullable=False)
    home_score = Column(Integer)
    away_score = Column(Integer)
    status = Column(String(16), nullable=False, default="SCHEDULED")
    winner = Column(String(50))         # set only once FINAL; NULL on a final game = tie
    kickoff = Column(DateTime)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# No uniqueness on (member, week, game): legacy imports carry duplicates and
# the scorer needs to see them to report them.
class ConfidencePickRow(Base):
    __tablename__ = "confidence_picks"
    __table_args__ = (
        Index("ix_conf_season_week", "season", "week"),
    )

    id = Column(Integer, primary_key=True)
    member_id = Column(String(64), ForeignKey("members.id"), nullable=False)
    season = Column(Integer, nullable=False)
    week = Column(Integer, nullable=False)
    game_id = Column(String(32))
    team = Column(String(50))
    confidence = Column(Integer)
    submitted_at = Column(DateTime, default=datetime.utcnow)

    member = relationship("Member", back_populates="confidence_picks")


class SurvivorPickRow(Base):
    __tablename__ = "survivor_picks"
    __table_args__ = (
        Index("ix_surv_season_member", "season", "member_id"),
    )

    id = Column(Integer, primary_key=True)
    member_id = Column(String(64), ForeignKey("members.id"), nullable=False)
    season = Column(Integer, nullable=False)
    week = Column(Integer)             # NULL when the source week was unparseable
    raw_week = Column(String(32))      # source week as given, kept for flagging
    team = Column(String(50))
    submitted_at = Column(DateTime, default=datetime.utcnow)

    member = relationship("Member", back_populates="survivor_picks")
