"""Castling: who still has the right to castle, and is it allowed right now?"""

from dataclasses import dataclass, fields, replace
from typing import Optional, Self

from src.core.shared_types import CastlingSide, Color, PieceType
from src.rules.attacks import is_attacked
from src.rules.board import Board
from src.rules.moves import squares_between
from src.rules.pieces import Piece
from src.rules.square import Square


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: If castling rights have not been revoked, we already know the king / rook are still at their starting squares.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    def king_path(self) -> list[Square]:
        """Every square the king stands on while castling: start, the square it passes, destination"""
        return [self.king_from, *squares_between(self.king_from, self.king_to), self.king_to]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastlingSide], CastlingSquares] = {
    (Color.WHITE, CastlingSide.KINGSIDE): CastlingSquares.from_algebraic("e1", "g1", "h1", "f1"),
    (Color.WHITE, CastlingSide.QUEENSIDE): CastlingSquares.from_algebraic("e1", "c1", "a1", "d1"),
    (Color.BLACK, CastlingSide.KINGSIDE): CastlingSquares.from_algebraic("e8", "g8", "h8", "f8"),
    (Color.BLACK, CastlingSide.QUEENSIDE): CastlingSquares.from_algebraic("e8", "c8", "a8", "d8"),
}

# Rooks are tracked by the corner they started in (we cannot tell rooks apart once they have moved).
CORNERS: dict[Square, tuple[Color, CastlingSide]] = {
    squares.rook_from: key for key, squares in CASTLING_RULES.items()
}


@dataclass
class CastlingRights:
    """
    Six one-way flags. Once a king or rook has moved, castling with it is gone for good
    (until the session is reset).
    """

    white_king_moved: bool = False
    black_king_moved: bool = False
    white_rook_queenside_moved: bool = False
    white_rook_kingside_moved: bool = False
    black_rook_queenside_moved: bool = False
    black_rook_kingside_moved: bool = False

    def copy(self) -> Self:
        return replace(self)

    def as_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def king_moved(self, color: Color) -> bool:
        return getattr(self, f"{color.value}_king_moved")

    def rook_moved(self, color: Color, side: CastlingSide) -> bool:
        return getattr(self, _rook_flag(color, side))

    def mark_king_moved(self, color: Color) -> None:
        setattr(self, f"{color.value}_king_moved", True)

    def mark_rook_moved(self, color: Color, side: CastlingSide) -> None:
        setattr(self, _rook_flag(color, side), True)

    def record_move(
        self, piece: Piece, from_square: Square, to_square: Square, captured: Optional[Piece]
    ) -> None:
        """
        Checks which flags should get set after a move
        ----

        1. A king moves (this includes castling) --> that king has moved
        2. Any piece leaves a corner --> the rook of that corner has moved
           (if it was not the rook, then the rook must have left or been taken before)
        3. A capture lands on a corner --> the rook of that corner is gone
        """
        if piece.type == PieceType.KING:
            self.mark_king_moved(piece.color)

        if from_square in CORNERS:
            self.mark_rook_moved(*CORNERS[from_square])

        if captured is not None and to_square in CORNERS:
            self.mark_rook_moved(*CORNERS[to_square])


def _rook_flag(color: Color, side: CastlingSide) -> str:
    short_side = "kingside" if side == CastlingSide.KINGSIDE else "queenside"
    return f"{color.value}_rook_{short_side}_moved"


def castling_side(from_square: Square, to_square: Square) -> CastlingSide:
    """King moving two squares towards the h-file castles kingside, towards the a-file queenside"""
    return CastlingSide.KINGSIDE if to_square.col > from_square.col else CastlingSide.QUEENSIDE


def can_castle(color: Color, side: CastlingSide, board: Board, rights: CastlingRights) -> bool:
    """
    May the player castle to the given side right now?
    ---

    **you are allowed to castle if**

    * Your king has never moved.
    * The rook on that side has never moved.
    * King and rook stand on their home squares, with nothing in between.
    * None of the squares the king stands on while castling (start, passing, destination) is under attack.
    """
    if rights.king_moved(color) or rights.rook_moved(color, side):
        return False

    squares = CASTLING_RULES[(color, side)]
    if board.piece(squares.king_from) != Piece(PieceType.KING, color):
        return False
    if board.piece(squares.rook_from) != Piece(PieceType.ROOK, color):
        return False

    between = squares_between(squares.king_from, squares.rook_from)
    if not all(board.is_empty(square) for square in between):
        return False

    return not any(is_attacked(color, square, board) for square in squares.king_path())


def castle_on_board(board: Board, color: Color, side: CastlingSide) -> None:
    """Move both the King and the Rook"""
    squares = CASTLING_RULES[(color, side)]
    board.move_piece(squares.king_from, squares.king_to)
    board.move_piece(squares.rook_from, squares.rook_to)
