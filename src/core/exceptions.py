"""Custom exceptions, shared by the domain, service, and boundary layers."""


class ChessError(Exception):
    """Base class for all errors raised on purpose by this package."""


class GameStateError(ChessError):
    """The request does not make sense for the game in its current state."""


class NoMoveAvailableError(GameStateError):
    """The automated opponent was asked to move, but the position has no legal move (checkmate or stalemate)."""


class MissingKingError(GameStateError):
    """A board without a king of each color breaks the data model. Should never happen during normal play."""


class NotYourTurnError(ChessError):
    """A request on behalf of the side that is not to move."""


class IllegalMoveError(ChessError):
    """The move is not in the set of legal moves."""


class InvalidFENError(ChessError):
    """The string cannot be interpreted as FEN."""


class InvalidRequestError(ChessError):
    """Request model failed validation at the boundary."""
