"""Whole-call precondition failures. Per-record problems are flags, not exceptions."""


class PreconditionError(ValueError):
    """The caller handed the core an input it cannot score at all."""


class MissingGamesError(PreconditionError):
    def __init__(self, user_id: str, week: int | None = None):
        where = f"week {week}" if week is not None else "any week"
        super().__init__(f"Picks supplied for user {user_id} but no games for {where}")
        self.user_id = user_id
        self.week = week


class WeekMismatchError(PreconditionError):
    def __init__(self, week: int, game_id: str, game_week: int):
        super().__init__(f"Game {game_id} belongs to week {game_week}, not week {week}")
        self.week = week
        self.game_id = game_id
        self.game_week = game_week


class UserMismatchError(PreconditionError):
    def __init__(self, expected: str, found: str):
        super().__init__(f"Score for user {found} passed while aggregating user {expected}")
        self.expected = expected
        self.found = found
