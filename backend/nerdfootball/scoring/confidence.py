"""
Confidence pool scoring.

A player ranks every game of the week with a unique confidence value 1..N.
Correct picks earn their confidence value; the week total is the plain sum.
Malformed rows are skipped, duplicates are resolved deterministically, and
every anomaly is reported as a Flag instead of being repaired.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Iterable, Optional

from nerdfootball.core.errors import MissingGamesError, WeekMismatchError
from nerdfootball.core.teams import TIE, normalize
from nerdfootball.core.types import (
    ConfidencePick, Flag, FlagKind, Game, WeeklyScore, accuracy_pct, as_int,
)

logger = logging.getLogger(__name__)


def game_key(game_id: Any) -> Optional[str]:
    """Lookup key for a game id: ints and padded strings match their plain form."""
    if game_id is None or isinstance(game_id, bool):
        return None
    key = str(game_id).strip()
    return key or None


def winner_of(game: Game) -> tuple[str, Optional[str]]:
    """
    Resolve a game's outcome.

    Returns ("pending", None), ("tie", None), ("winner", canonical_name)
    or ("malformed", raw_winner) when a final game names a team that did
    not play in it.
    """
    if not game.is_final:
        return "pending", None
    if game.winner is None or str(game.winner).strip().upper() == TIE:
        return "tie", None
    winner = normalize(game.winner)
    if winner in (normalize(game.home_team), normalize(game.away_team)):
        return "winner", winner
    return "malformed", game.winner


def _check_games(week: int, games: Iterable[Game]) -> dict[str, Game]:
    by_key: dict[str, Game] = {}
    for game in games:
        if game.week != week:
            raise WeekMismatchError(week, game.game_id, game.week)
        key = game_key(game.game_id)
        if key is not None:
            by_key[key] = game
    return by_key


def _malformed_reason(pick: ConfidencePick, user_id: str, week: int) -> Optional[str]:
    if pick.user_id != user_id:
        return f"pick belongs to user {pick.user_id}"
    if as_int(pick.week) != week:
        return f"pick is for week {pick.week!r}"
    if game_key(pick.game_id) is None:
        return "missing game id"
    if not isinstance(pick.team, str) or not pick.team.strip():
        return "missing team"
    if as_int(pick.confidence) is None:
        return f"non-numeric confidence {pick.confidence!r}"
    return None


def dedupe_picks(
    user_id: str,
    week: int,
    picks: list[ConfidencePick],
    games_by_key: dict[str, Game],
) -> tuple[list[ConfidencePick], list[Flag]]:
    """
    Keep exactly one pick per game.

    A pick whose raw game id is exactly a game id of the week wins over one
    that only matches after normalisation; otherwise the first one seen is
    kept. Every dropped pick is flagged.
    """
    groups: dict[str, list[ConfidencePick]] = {}
    for pick in picks:
        groups.setdefault(game_key(pick.game_id), []).append(pick)

    kept: list[ConfidencePick] = []
    flags: list[Flag] = []
    for key, group in groups.items():
        if len(group) == 1:
            kept.append(group[0])
            continue
        game = games_by_key.get(key)
        exact = [p for p in group if game is not None and p.game_id == game.game_id]
        chosen = exact[0] if exact else group[0]
        kept.append(chosen)
        for dropped in group:
            if dropped is chosen:
                continue
            logger.debug("Duplicate pick for user %s week %d game %s", user_id, week, key)
            flags.append(Flag(
                kind=FlagKind.DUPLICATE_PICK,
                user_id=user_id,
                week=week,
                game_id=key,
                team=dropped.team,
                detail=(
                    f"kept {chosen.team} ({as_int(chosen.confidence)}), "
                    f"dropped {dropped.team} ({as_int(dropped.confidence)})"
                ),
            ))
    return kept, flags


def permutation_problems(confidences: list[int], n_games: int) -> Optional[str]:
    """Describe how confidences differ from a permutation of 1..n, or None."""
    if sorted(confidences) == list(range(1, n_games + 1)):
        return None
    counts = Counter(confidences)
    parts = []
    zeros = counts.get(0, 0)
    if zeros:
        parts.append(f"{zeros} zero value(s)")
    dupes = sorted(v for v, c in counts.items() if c > 1 and v != 0)
    if dupes:
        parts.append(f"duplicates {dupes}")
    out_of_range = sorted(v for v in counts if v < 0 or v > n_games)
    if out_of_range:
        parts.append(f"out of range {out_of_range}")
    missing = sorted(set(range(1, n_games + 1)) - set(counts))
    if missing:
        parts.append(f"missing {missing}")
    return f"expected 1..{n_games}: " + ", ".join(parts)


def score_week(
    user_id: str,
    week: int,
    picks: Iterable[ConfidencePick],
    games: Iterable[Game],
) -> WeeklyScore:
    """
    Score one user's confidence picks for one week.

    Raises MissingGamesError when picks exist but no games were supplied and
    WeekMismatchError when a game from another week is passed in. Everything
    else is recovered locally and reported in `WeeklyScore.flags`.
    """
    picks = list(picks)
    games_by_key = _check_games(week, games)
    if picks and not games_by_key:
        raise MissingGamesError(user_id, week)

    n_games = len(games_by_key)
    score = WeeklyScore(
        user_id=user_id,
        week=week,
        max_possible_points=n_games * (n_games + 1) // 2,
    )

    valid: list[ConfidencePick] = []
    for pick in picks:
        reason = _malformed_reason(pick, user_id, week)
        if reason:
            score.flags.append(Flag(
                kind=FlagKind.MALFORMED_PICK,
                user_id=user_id,
                week=week,
                game_id=game_key(pick.game_id),
                team=pick.team if isinstance(pick.team, str) else None,
                detail=reason,
            ))
            continue
        valid.append(pick)

    kept, dup_flags = dedupe_picks(user_id, week, valid, games_by_key)
    score.flags.extend(dup_flags)

    pending_points = 0
    malformed_games: set[str] = set()
    for pick in kept:
        key = game_key(pick.game_id)
        confidence = as_int(pick.confidence)
        game = games_by_key.get(key)
        if game is None:
            score.unresolved_picks += 1
            score.flags.append(Flag(
                kind=FlagKind.UNRESOLVED_GAME, user_id=user_id, week=week,
                game_id=key, team=pick.team,
                detail=f"no game {key} in week {week}",
            ))
            continue

        team = normalize(pick.team)
        if team not in (normalize(game.home_team), normalize(game.away_team)):
            score.unresolved_picks += 1
            score.flags.append(Flag(
                kind=FlagKind.UNRESOLVED_TEAM, user_id=user_id, week=week,
                game_id=key, team=pick.team,
                detail=f"{pick.team} is not playing in {game.away_team} @ {game.home_team}",
            ))
            continue

        score.total_picks += 1
        outcome, winner = winner_of(game)
        if outcome == "malformed":
            if key not in malformed_games:
                malformed_games.add(key)
                score.flags.append(Flag(
                    kind=FlagKind.MALFORMED_GAME, user_id=user_id, week=week,
                    game_id=key, team=winner,
                    detail=f"final game lists winner {winner!r} who did not play",
                ))
            outcome = "pending"

        if outcome == "pending":
            score.pending_picks += 1
            pending_points += confidence
        elif outcome == "winner" and team == winner:
            score.correct_picks += 1
            score.total_points += confidence

    if kept:
        problem = permutation_problems([as_int(p.confidence) for p in kept], n_games)
        if problem:
            score.flags.append(Flag(
                kind=FlagKind.CONFIDENCE_PERMUTATION, user_id=user_id, week=week,
                detail=problem,
            ))

    score.accuracy = accuracy_pct(score.correct_picks, score.total_picks)
    score.possible_points = score.total_points + pending_points
    return score
