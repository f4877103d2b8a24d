"""
Survivor pool elimination.

Weeks are walked in ascending order. A player is alive until a picked team
loses a final game; a tie is its own outcome and does not eliminate.
Elimination is terminal and later picks are only reported. Missed weeks,
unknown teams and reused teams are flagged and never decide the outcome on
their own.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from nerdfootball.core.errors import MissingGamesError
from nerdfootball.core.teams import normalize
from nerdfootball.core.types import (
    Flag, FlagKind, Game, SurvivorPick, SurvivorStatus, SurvivorWeek, WeekResult, as_int,
)
from nerdfootball.scoring.confidence import game_key, winner_of

logger = logging.getLogger(__name__)


def _valid_picks(
    user_id: str, picks: list[SurvivorPick], flags: list[Flag]
) -> dict[int, SurvivorPick]:
    by_week: dict[int, SurvivorPick] = {}
    for pick in picks:
        week = as_int(pick.week)
        team_ok = isinstance(pick.team, str) and pick.team.strip()
        if pick.user_id != user_id or week is None or not team_ok:
            if pick.user_id != user_id:
                detail = f"pick belongs to user {pick.user_id}"
            elif week is None:
                detail = f"invalid week {pick.week!r}"
            else:
                detail = "missing team"
            flags.append(Flag(
                kind=FlagKind.MALFORMED_PICK, user_id=user_id, week=week,
                team=pick.team if isinstance(pick.team, str) else None, detail=detail,
            ))
            continue
        if week in by_week:
            flags.append(Flag(
                kind=FlagKind.DUPLICATE_PICK, user_id=user_id, week=week, team=pick.team,
                detail=f"kept {by_week[week].team}, dropped {pick.team}",
            ))
            continue
        by_week[week] = pick
    return by_week


def _find_game(team: str, games: list[Game]) -> Optional[Game]:
    for game in games:
        if team in (normalize(game.home_team), normalize(game.away_team)):
            return game
    return None


def _repeated_teams(user_id: str, by_week: dict[int, SurvivorPick]) -> list[Flag]:
    flags = []
    first_seen: dict[str, int] = {}
    for week in sorted(by_week):
        team = normalize(by_week[week].team)
        if team in first_seen:
            flags.append(Flag(
                kind=FlagKind.REPEATED_TEAM, user_id=user_id, week=week, team=team,
                detail=f"{team} already picked in week {first_seen[team]}",
            ))
        else:
            first_seen[team] = week
    return flags


def compute_status(
    user_id: str,
    pick_history: Iterable[SurvivorPick],
    games: Iterable[Game],
) -> SurvivorStatus:
    """
    Derive one player's survivor status from their full pick history.

    `games` may span the whole season. Raises MissingGamesError when picks
    exist but no games at all were supplied.
    """
    picks = list(pick_history)
    games = list(games)
    if picks and not games:
        raise MissingGamesError(user_id)

    games_by_week: dict[int, list[Game]] = {}
    for game in games:
        games_by_week.setdefault(game.week, []).append(game)

    status = SurvivorStatus(user_id=user_id)
    by_week = _valid_picks(user_id, picks, status.flags)

    for week in sorted(set(games_by_week) | set(by_week)):
        pick = by_week.get(week)
        week_games = games_by_week.get(week, [])

        if not status.alive:
            if pick is not None:
                status.weeks.append(SurvivorWeek(week, pick.team, WeekResult.POST_ELIMINATION))
            continue

        if pick is None:
            if week_games and all(g.is_final for g in week_games):
                status.weeks.append(SurvivorWeek(week, None, WeekResult.MISSED))
                status.flags.append(Flag(
                    kind=FlagKind.MISSED_PICK, user_id=user_id, week=week,
                    detail=f"no survivor pick for completed week {week}",
                ))
            continue

        team = normalize(pick.team)
        game = _find_game(team, week_games)
        if game is None:
            status.weeks.append(SurvivorWeek(week, pick.team, WeekResult.UNRESOLVED))
            status.flags.append(Flag(
                kind=FlagKind.UNRESOLVED_TEAM, user_id=user_id, week=week, team=pick.team,
                detail=f"{pick.team} has no game in week {week}",
            ))
            continue

        gid = game_key(game.game_id)
        outcome, winner = winner_of(game)
        if outcome == "malformed":
            status.flags.append(Flag(
                kind=FlagKind.MALFORMED_GAME, user_id=user_id, week=week, game_id=gid,
                team=winner, detail=f"final game lists winner {winner!r} who did not play",
            ))
            outcome = "pending"

        if outcome == "pending":
            status.weeks.append(SurvivorWeek(week, pick.team, WeekResult.PENDING, gid))
        elif outcome == "tie":
            status.weeks.append(SurvivorWeek(week, pick.team, WeekResult.TIE, gid))
        elif outcome == "winner" and winner == team:
            status.weeks.append(SurvivorWeek(week, pick.team, WeekResult.WON, gid))
        else:
            status.weeks.append(SurvivorWeek(week, pick.team, WeekResult.LOST, gid))
            status.alive = False
            status.eliminated_week = week
            logger.debug("User %s eliminated in week %d picking %s", user_id, week, team)

    status.flags.extend(_repeated_teams(user_id, by_week))
    return status


def rank_survivors(statuses: Iterable[SurvivorStatus]) -> list[SurvivorStatus]:
    """Alive players first, then the longest survivors, then user id."""
    ordered = sorted(
        statuses,
        key=lambda s: (not s.alive, -(s.eliminated_week or 0), s.user_id),
    )
    return [replace(s, rank=i) for i, s in enumerate(ordered, start=1)]
