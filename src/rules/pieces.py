"""Defines the chess pieces"""

from dataclasses import dataclass
from typing import Self

from src.core.exceptions import UnknownPieceKindError
from src.core.shared_types import Color, PieceType

SYMBOL_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_SYMBOL: dict[PieceType, str] = {
    value: key for key, value in SYMBOL_TO_PIECE.items()
}

# Instructions shown to a player who selects a piece: (name, how it moves)
PIECE_DESCRIPTIONS: dict[PieceType, tuple[str, str]] = {
    PieceType.PAWN: (
        "Pawn",
        "Can move one space forward, or two if the pawn has not already been moved. "
        "The pawn attacks by moving one space diagonally forward. "
        "If a pawn reaches the opponent's last row, the pawn becomes a queen.",
    ),
    PieceType.ROOK: (
        "Rook",
        "Can move up, down, left or right as many spaces as possible.",
    ),
    PieceType.KNIGHT: (
        "Knight",
        "Can move in an 'L' fashion: two spaces up or down followed by one space right or left, "
        "or two spaces right or left followed by one space up or down.",
    ),
    PieceType.BISHOP: (
        "Bishop",
        "Can move diagonally in any direction as many spaces as possible.",
    ),
    PieceType.QUEEN: (
        "Queen",
        "Can move in any direction (up, down, left, right or diagonally) as many spaces as possible.",
    ),
    PieceType.KING: (
        "King",
        "Can move one space in any direction. If the king is ever in danger, it must be moved. "
        "If it is impossible to remove the king from danger, the game is over.",
    ),
}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def from_symbol(cls, character: str) -> Self:
        # upper case: White pieces, lower case: Black pieces
        if character.lower() not in SYMBOL_TO_PIECE:
            raise UnknownPieceKindError(f"Unrecognized piece symbol: {character!r}")
        color = Color.WHITE if character.isupper() else Color.BLACK
        return cls(SYMBOL_TO_PIECE[character.lower()], color)

    def to_symbol(self) -> str:
        symbol = PIECE_TO_SYMBOL[self.type]
        return symbol.upper() if self.color == Color.WHITE else symbol

    def promoted(self, new_type: PieceType = PieceType.QUEEN) -> Self:
        """Pieces are immutable: promotion hands back a new piece of the same color"""
        return type(self)(new_type, self.color)

    def describe(self) -> tuple[str, str]:
        return PIECE_DESCRIPTIONS[self.type]
