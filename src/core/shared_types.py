"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class CastlingSide(StrEnum):
    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    STALEMATE = "stalemate"
    CHECKMATE = "checkmate"


class RejectionReason(StrEnum):
    """Why a move was refused. Only used for feedback to the user, never for control flow."""

    EMPTY_SQUARE = "empty square"
    NOT_YOUR_TURN = "not your turn"
    GAME_OVER = "game over"
    OWN_PIECE_AT_DESTINATION = "own piece at destination"
    WRONG_SHAPE = "wrong shape for piece"
    BLOCKED_PATH = "blocked path"
    CASTLING_UNAVAILABLE = "castling unavailable"
    OWN_KING_EXPOSED = "own king exposed"
    KING_STILL_IN_CHECK = "king still in check"
