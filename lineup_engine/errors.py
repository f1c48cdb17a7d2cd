"""Exceptions raised by the lineup engine and its calling context."""


class LineupEngineError(ValueError):
    """Base class for malformed-input errors."""


class InvalidSlotDefinition(LineupEngineError):
    """A slot's kind or accepted position set cannot be interpreted."""

    def __init__(self, code, reason: str = "unrecognized slot"):
        self.code = code
        self.reason = reason
        super().__init__(f"Invalid slot {code!r}: {reason}")


class InvalidProjection(LineupEngineError):
    """A player carries a negative or non-finite projected-points value."""

    def __init__(self, player_id: str, value):
        self.player_id = player_id
        self.value = value
        super().__init__(f"Invalid projection for player {player_id}: {value!r}")


class DuplicatePlayer(LineupEngineError):
    """The same player id appears more than once in a player pool."""

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id} appears more than once in the pool")


class UnknownLeague(LineupEngineError):
    """No league configuration exists for the requested name."""


class RosterNotFound(LineupEngineError):
    """The configured user/team owns no roster in the league."""
