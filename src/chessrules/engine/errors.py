from __future__ import annotations


class ChessRulesError(ValueError):
    """Base class for caller contract violations reported by the engine."""


class MalformedPositionError(ChessRulesError):
    """Position text does not follow the six-field interchange format."""


class IllegalMoveError(ChessRulesError):
    """Requested move is not in the legal set for the side to move."""


class GameOverError(IllegalMoveError):
    """A move was requested after checkmate or stalemate."""


class NoHistoryError(ChessRulesError):
    """Undo requested while only the initial position remains."""
