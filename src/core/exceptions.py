"""Exceptions raised by the domain, service and persistence layers.

Move validation failures are NOT raised here: the validator returns them as values
(see src/rules/validation.py). These exceptions are for callers that want to act on a move
and could not.
"""

from typing import Any


class GameError(Exception):
    """Root of everything the application raises on purpose."""


class InvalidFENError(GameError):
    pass


class InvalidSquareError(GameError, ValueError):
    pass


class InvalidRequestError(GameError, ValueError):
    """Raised by the boundary models. Subclasses ValueError so pydantic turns it into a ValidationError."""


class GameStateError(GameError):
    """Action not allowed in the current status of the game."""


class RepositoryError(GameError):
    pass


class IllegalMoveError(GameError):
    """The rule engine refused the move. `reason` is the validation outcome."""

    def __init__(self, message: str, reason: Any = None) -> None:
        super().__init__(message)
        self.reason = reason


class AmbiguousMoveError(GameError):
    """More than one piece fits a (piece, target) request, or the chosen option does not exist."""

    def __init__(self, message: str, candidates: list[str]) -> None:
        super().__init__(message)
        self.candidates = candidates


class MissingPieceError(GameError, AssertionError):
    """
    Precondition violation of the raw move executor.

    Validated moves never trigger this: seeing it means a caller skipped validation.
    """
