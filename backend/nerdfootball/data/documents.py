"""
Adapters from loosely typed pick/game documents to canonical records.

Legacy documents use `team` or `winner` for the picked side, store
confidences as ints or strings, mix metadata keys in with picks, and spell
game status half a dozen ways. Everything is mapped to one shape here so the
scorers only ever see `ConfidencePick`, `SurvivorPick` and `Game`. Values
that cannot be coerced are passed through unchanged; the scorers flag them.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from nerdfootball.core.teams import TIE
from nerdfootball.core.types import ConfidencePick, Game, GameStatus, SurvivorPick, as_int

logger = logging.getLogger(__name__)

FINAL_STATUSES = {"FINAL", "F", "FINAL/OT", "FINAL OT", "FINAL_OT", "COMPLETED", "POST", "END"}
LIVE_STATUSES = {"IN_PROGRESS", "INPROGRESS", "IN PROGRESS", "LIVE", "HALFTIME", "HALF", "END_PERIOD"}
PICK_KEYS = ("team", "winner", "confidence")
PLACEHOLDER_WINNERS = {"", "TBD", "NULL", "NONE"}


def _first(doc: dict, *keys: str) -> Any:
    for key in keys:
        if doc.get(key) is not None:
            return doc[key]
    return None


def parse_status(raw: Any) -> Optional[GameStatus]:
    """Map a feed status string to GameStatus; None when no status was given."""
    if raw is None:
        return None
    text = str(raw).strip().upper()
    if text.startswith("STATUS_"):
        text = text[len("STATUS_"):]
    if text in FINAL_STATUSES:
        return GameStatus.FINAL
    if text in LIVE_STATUSES or (text[:1] == "Q" and text[1:2].isdigit()):
        return GameStatus.IN_PROGRESS
    return GameStatus.SCHEDULED


def game_from_document(game_id: Any, week: int, doc: dict) -> Optional[Game]:
    """Build a Game from one game document; None when the teams are missing."""
    home = _first(doc, "homeTeam", "home_team", "home")
    away = _first(doc, "awayTeam", "away_team", "away")
    if not home or not away:
        logger.warning("Game %s week %d has no teams; skipping", game_id, week)
        return None

    home_score = as_int(_first(doc, "homeScore", "home_score"))
    away_score = as_int(_first(doc, "awayScore", "away_score"))
    raw_winner = doc.get("winner")
    winner = str(raw_winner).strip() if raw_winner is not None else None
    if winner is not None and winner.upper() in PLACEHOLDER_WINNERS:
        winner = None

    status = parse_status(doc.get("status"))
    if status is None:
        # Early-season documents carry no status; a winner plus a score means final
        has_score = home_score is not None and away_score is not None
        status = GameStatus.FINAL if winner and has_score else GameStatus.SCHEDULED

    if status != GameStatus.FINAL:
        winner = None
    elif winner is not None and winner.upper() == TIE:
        winner = None
    elif winner is None and home_score is not None and away_score is not None:
        if home_score > away_score:
            winner = home
        elif away_score > home_score:
            winner = away

    return Game(
        game_id=str(game_id).strip(),
        week=week,
        home_team=home,
        away_team=away,
        status=status,
        winner=winner,
        home_score=home_score,
        away_score=away_score,
    )


def games_from_week_document(week: int, doc: dict) -> list[Game]:
    """`{game_id: game_doc, ...}`; non-dict values are metadata and ignored."""
    games = []
    for game_id, game_doc in doc.items():
        if not isinstance(game_doc, dict):
            continue
        game = game_from_document(game_id, week, game_doc)
        if game is not None:
            games.append(game)
    return games


def _coerce_confidence(raw: Any) -> Any:
    value = as_int(raw)
    return raw if value is None else value


def confidence_picks_from_document(user_id: str, week: int, doc: dict) -> list[ConfidencePick]:
    """
    Convert `{game_id: {"winner"|"team": ..., "confidence": ...}, <metadata>}`
    into picks, preserving document order.
    """
    entries = doc.get("picks") if isinstance(doc.get("picks"), dict) else doc
    picks = []
    for game_id, entry in entries.items():
        if not isinstance(entry, dict) or not any(k in entry for k in PICK_KEYS):
            continue
        picks.append(ConfidencePick(
            user_id=user_id,
            week=week,
            game_id=game_id,
            team=_first(entry, "team", "winner"),
            confidence=_coerce_confidence(entry.get("confidence")),
        ))
    return picks


def survivor_picks_from_document(user_id: str, doc: dict) -> list[SurvivorPick]:
    """Convert `{"picks": {"1": {"team": ...}, ...}}` (or the bare week map)."""
    entries = doc.get("picks") if isinstance(doc.get("picks"), dict) else doc
    picks = []
    for week_key, entry in entries.items():
        if isinstance(entry, dict):
            team = entry.get("team")
        elif isinstance(entry, str):
            team = entry
        else:
            continue
        week = as_int(week_key)
        picks.append(SurvivorPick(
            user_id=user_id,
            week=week if week is not None else week_key,
            team=team,
        ))
    return picks


def survivor_picks_from_history(user_id: str, history: str, first_week: int = 1) -> list[SurvivorPick]:
    """`"Denver Broncos, Buffalo Bills"` -> one pick per week starting at `first_week`."""
    if not history or not history.strip():
        return []
    teams = [t.strip() for t in history.split(",") if t.strip()]
    return [
        SurvivorPick(user_id=user_id, week=first_week + i, team=team)
        for i, team in enumerate(teams)
    ]
