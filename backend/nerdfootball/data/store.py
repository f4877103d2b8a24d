"""
Read/write access to games and picks in the database.

Readers return core records; `read_snapshot` pulls everything one scoring
pass needs inside a single session so picks and results come from the same
point in time.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from nerdfootball.core.types import ConfidencePick, Game, GameStatus, SurvivorPick, as_int
from nerdfootball.db.models import (
    ConfidencePickRow, Game as GameRow, Member, SurvivorPickRow,
)

logger = logging.getLogger(__name__)


def to_game(row: GameRow) -> Game:
    try:
        status = GameStatus(row.status)
    except ValueError:
        logger.warning("Game %s has unknown status %r; treating as scheduled", row.game_id, row.status)
        status = GameStatus.SCHEDULED
    return Game(
        game_id=row.game_id,
        week=row.week,
        home_team=row.home_team,
        away_team=row.away_team,
        status=status,
        winner=row.winner if status == GameStatus.FINAL else None,
        home_score=row.home_score,
        away_score=row.away_score,
    )


def load_games(
    db: Session,
    season: int,
    week: Optional[int] = None,
    through_week: Optional[int] = None,
) -> list[Game]:
    q = db.query(GameRow).filter(GameRow.season == season)
    if week is not None:
        q = q.filter(GameRow.week == week)
    if through_week is not None:
        q = q.filter(GameRow.week <= through_week)
    return [to_game(r) for r in q.order_by(GameRow.week, GameRow.id).all()]


def load_confidence_picks(
    db: Session,
    season: int,
    week: Optional[int] = None,
    through_week: Optional[int] = None,
) -> dict[str, list[ConfidencePick]]:
    """{member_id: [picks in submission order]}"""
    q = db.query(ConfidencePickRow).filter(ConfidencePickRow.season == season)
    if week is not None:
        q = q.filter(ConfidencePickRow.week == week)
    if through_week is not None:
        q = q.filter(ConfidencePickRow.week <= through_week)

    picks: dict[str, list[ConfidencePick]] = {}
    for row in q.order_by(ConfidencePickRow.id).all():
        picks.setdefault(row.member_id, []).append(ConfidencePick(
            user_id=row.member_id,
            week=row.week,
            game_id=row.game_id,
            team=row.team,
            confidence=row.confidence,
        ))
    return picks


def load_survivor_picks(
    db: Session,
    season: int,
    through_week: Optional[int] = None,
) -> dict[str, list[SurvivorPick]]:
    """Rows with an unparseable week come back with the raw week so scoring flags them."""
    q = db.query(SurvivorPickRow).filter(SurvivorPickRow.season == season)
    if through_week is not None:
        q = q.filter(or_(SurvivorPickRow.week.is_(None), SurvivorPickRow.week <= through_week))

    picks: dict[str, list[SurvivorPick]] = {}
    for row in q.order_by(SurvivorPickRow.week, SurvivorPickRow.id).all():
        week = row.week if row.week is not None else row.raw_week
        picks.setdefault(row.member_id, []).append(
            SurvivorPick(user_id=row.member_id, week=week, team=row.team)
        )
    return picks


def active_member_ids(db: Session, pool: Optional[str] = None) -> list[str]:
    """Active members, optionally only those entered in `pool` ("confidence" or "survivor")."""
    q = db.query(Member).filter(Member.is_active.is_(True))
    if pool == "confidence":
        q = q.filter(Member.confidence_enabled.is_(True))
    elif pool == "survivor":
        q = q.filter(Member.survivor_enabled.is_(True))
    elif pool is not None:
        raise ValueError(f"Unknown pool {pool!r}")
    return [m.id for m in q.order_by(Member.id).all()]


@dataclass
class Snapshot:
    season: int
    through_week: Optional[int]
    confidence_members: list[str] = field(default_factory=list)
    survivor_members: list[str] = field(default_factory=list)
    games: list[Game] = field(default_factory=list)
    confidence: dict[str, list[ConfidencePick]] = field(default_factory=dict)
    survivor: dict[str, list[SurvivorPick]] = field(default_factory=dict)

    def games_for_week(self, week: int) -> list[Game]:
        return [g for g in self.games if g.week == week]

    def weeks(self) -> list[int]:
        return sorted({g.week for g in self.games})

    def confidence_for(self, user_id: str, week: int) -> list[ConfidencePick]:
        return [p for p in self.confidence.get(user_id, []) if p.week == week]


def read_snapshot(db: Session, season: int, through_week: Optional[int] = None) -> Snapshot:
    """Read members, games and picks for a season in one session."""
    return Snapshot(
        season=season,
        through_week=through_week,
        confidence_members=active_member_ids(db, "confidence"),
        survivor_members=active_member_ids(db, "survivor"),
        games=load_games(db, season, through_week=through_week),
        confidence=load_confidence_picks(db, season, through_week=through_week),
        survivor=load_survivor_picks(db, season, through_week=through_week),
    )


# ── Writers ────────────────────────────────────────────────────────────────

def ensure_member(
    db: Session,
    member_id: str,
    display_name: Optional[str] = None,
    pools: Iterable[str] = (),
) -> Member:
    """Create the member if needed and enter them in `pools`. Never leaves a pool."""
    member = db.get(Member, member_id)
    if member is None:
        member = Member(id=member_id, display_name=display_name or member_id, is_active=True)
        db.add(member)
    for pool in pools:
        if pool == "confidence":
            member.confidence_enabled = True
        elif pool == "survivor":
            member.survivor_enabled = True
        else:
            raise ValueError(f"Unknown pool {pool!r}")
    db.flush()
    return member


def upsert_games(db: Session, season: int, games: Iterable[Game]) -> int:
    """Insert or update games keyed by (season, game_id). Returns rows written."""
    count = 0
    for game in games:
        row = db.query(GameRow).filter_by(season=season, game_id=game.game_id).first()
        if row is None:
            row = GameRow(season=season, game_id=game.game_id)
            db.add(row)
        row.week = game.week
        row.home_team = game.home_team
        row.away_team = game.away_team
        row.home_score = game.home_score
        row.away_score = game.away_score
        row.status = game.status.value
        row.winner = game.winner if game.is_final else None
        count += 1
    db.commit()
    return count


def replace_confidence_picks(
    db: Session, season: int, week: int, member_id: str, picks: Iterable[ConfidencePick]
) -> int:
    """Replace a member's stored picks for one week with `picks`, duplicates included."""
    ensure_member(db, member_id, pools=("confidence",))
    db.query(ConfidencePickRow).filter_by(
        season=season, week=week, member_id=member_id
    ).delete()
    count = 0
    for pick in picks:
        db.add(ConfidencePickRow(
            member_id=member_id,
            season=season,
            week=week,
            game_id=None if pick.game_id is None else str(pick.game_id),
            team=pick.team if isinstance(pick.team, str) else None,
            confidence=as_int(pick.confidence),
        ))
        count += 1
    db.commit()
    return count


def replace_survivor_picks(
    db: Session, season: int, member_id: str, picks: Iterable[SurvivorPick]
) -> int:
    """
    Replace a member's survivor history. A pick whose week cannot be parsed is
    stored with its raw week so scoring reports it as malformed.
    """
    ensure_member(db, member_id, pools=("survivor",))
    db.query(SurvivorPickRow).filter_by(season=season, member_id=member_id).delete()
    count = 0
    for pick in picks:
        week = as_int(pick.week)
        if week is None:
            logger.warning("Survivor pick for %s has unparseable week %r", member_id, pick.week)
        db.add(SurvivorPickRow(
            member_id=member_id,
            season=season,
            week=week,
            raw_week=None if pick.week is None else str(pick.week)[:32],
            team=pick.team if isinstance(pick.team, str) else None,
        ))
        count += 1
    db.commit()
    return count
