"""Custom exceptions. Every layer raises (a subclass of) GameError so the session can tell expected rejections from bugs."""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while playing a game."""


class GameStateError(GameError):
    """The game is not in a state that allows the request."""


class GameOverError(GameStateError):
    """A move was proposed after the game ended."""


class NotYourTurnError(GameError):
    """The requesting side is not the side to move."""


class IllegalMoveError(GameError):
    """The move breaks the movement rules."""


class InvalidRequestError(GameError):
    """The request could not be interpreted (missing fields, wrong types, unknown piece codes)."""
