"""
Custom exceptions used across layers.

Everything derives from GameError, so the service/API layers can catch a single top-level type.
"""

from typing import Optional

from src.core.shared_types import RejectionReason


class GameError(Exception):
    """Top-level exception for anything going wrong inside the chess application."""


class InvalidSquareError(GameError):
    """Cannot interpret the supplied text as a square on the board."""


class IllegalMoveError(GameError):
    """A requested move was rejected by the legality checker (or the session guards)."""

    def __init__(self, message: str, reason: Optional[RejectionReason] = None) -> None:
        super().__init__(message)
        self.reason = reason


class NoSelectionError(GameError):
    """A move was requested, but no piece is currently selected."""


# --- CORRUPTED BOARD STATES ---
# NOTE: these should never happen in a game started from the standard position.
class BoardCorruptionError(GameError):
    """The board is in a state that cannot occur during normal play."""


class InvalidDiagramError(BoardCorruptionError):
    """A board diagram does not describe an 8x8 board."""


class UnknownPieceKindError(BoardCorruptionError):
    """No movement rule exists for the piece (or its symbol cannot be read)."""


class MissingKingError(BoardCorruptionError):
    """A player has no king on the board."""


# --- BOUNDARY LAYERS ---
class InvalidRequestError(GameError):
    """Request data failed validation."""


class RepositoryError(GameError):
    """Something went wrong storing or retrieving a session."""


class SessionNotFoundError(RepositoryError):
    """No session is stored under the requested id."""
