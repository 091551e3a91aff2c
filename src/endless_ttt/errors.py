"""Exception types shared across the match, replay and persistence layers."""


class MatchError(Exception):
    """Base class for every fatal condition of a run."""


class CorruptStateError(MatchError):
    """The persisted match record cannot describe a legal game."""


class StateIOError(MatchError):
    """The state or report file could not be read or written."""


class InvalidMoveError(MatchError):
    """A move was rejected by the game engine."""
